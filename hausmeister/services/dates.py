# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Date helpers for day-granularity rotation arithmetic.
"""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from hausmeister.core.config import settings

WEEK = timedelta(weeks=1)


def local_now() -> datetime:
    """Current instant in the calendar's timezone."""
    return datetime.now(ZoneInfo(settings.CALENDAR_TIMEZONE))


def add_hours(value: datetime, hours: int) -> datetime:
    return value + timedelta(hours=hours)


def add_weeks(value: datetime, weeks: int) -> datetime:
    """Shift by whole calendar days; wall-clock time is kept across DST."""
    return value + timedelta(days=7 * weeks)


def noon(value: datetime) -> datetime:
    """12:00 on the same day, in the value's own timezone."""
    return value.replace(hour=12, minute=0, second=0, microsecond=0)


def between(start: datetime, end: datetime) -> timedelta:
    """Signed real time from ``start`` to ``end``, compared as UTC instants."""
    return end.astimezone(timezone.utc) - start.astimezone(timezone.utc)


def ceil_div(value: timedelta, unit: timedelta) -> int:
    """Integer ceiling of ``value / unit`` without float rounding."""
    quotient, remainder = divmod(value, unit)
    return quotient + 1 if remainder else quotient
