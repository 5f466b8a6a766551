# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: iCalendar parsing — turns the feed into raw recurrence records.
Only duty events (summary contains the configured keyword) are kept.
"""

from datetime import date, datetime, time
from typing import Any, Callable, Optional
from zoneinfo import ZoneInfo

from icalendar import Calendar

from hausmeister.core.config import settings
from hausmeister.core.exceptions import CalendarParseError
from hausmeister.core.logging import get_logger
from hausmeister.models.domain import RawRecurrenceRecord

logger = get_logger(__name__)


class CalendarParser:
    """Extracts start, end, interval and first attendee of each duty event."""

    def __init__(self, keyword: Optional[str] = None, timezone: Optional[str] = None) -> None:
        self._keyword = (keyword or settings.DUTY_KEYWORD).lower()
        self._zone = ZoneInfo(timezone or settings.CALENDAR_TIMEZONE)

    def parse(self, ical_text: str) -> list[RawRecurrenceRecord]:
        """Parse the feed, keeping event order. Raises CalendarParseError."""
        try:
            calendar = Calendar.from_ical(ical_text)
        except ValueError as exc:
            logger.error("Failed to parse result as iCal object: %s", exc)
            raise CalendarParseError(f"Not an iCalendar document: {exc}") from exc
        if calendar.name != "VCALENDAR":
            raise CalendarParseError(f"Expected VCALENDAR, got {calendar.name}")

        try:
            records = [
                self._to_record(event)
                for event in calendar.walk("VEVENT")
                if self._is_duty_event(event)
            ]
        except (AttributeError, TypeError, ValueError) as exc:
            logger.error("Failed to read events from iCal object: %s", exc)
            raise CalendarParseError(f"Unreadable calendar event: {exc}") from exc
        logger.info("Parsed calendar: duty_events=%d", len(records))
        return records

    # ── Internal ──

    def _is_duty_event(self, event: Any) -> bool:
        summary = event.get("summary")
        if summary is None:
            return False
        return self._keyword in str(summary).lower()

    def _to_record(self, event: Any) -> RawRecurrenceRecord:
        uid = str(event.get("uid", "unknown"))
        return RawRecurrenceRecord(
            uid=uid,
            start_date=self._read_field(event, uid, "dtstart", self._read_datetime),
            end_date=self._read_field(event, uid, "dtend", self._read_datetime),
            interval_weeks=self._read_field(event, uid, "rrule", self._read_interval),
            attendee_name=self._read_field(event, uid, "attendee", self._read_attendee),
        )

    @staticmethod
    def _read_field(event: Any, uid: str, key: str, reader: Callable[[Any], Any]) -> Any:
        """Read one property; an unreadable value counts as missing.

        The resolver then reports the record as malformed, so a single broken
        event never fails the whole feed.
        """
        prop = event.get(key)
        if prop is None:
            return None
        try:
            return reader(prop)
        except (AttributeError, TypeError, ValueError) as exc:
            logger.warning(
                "Unreadable %s property: %s", key.upper(), exc, extra={"uid": uid}
            )
            return None

    def _read_datetime(self, prop: Any) -> Optional[datetime]:
        value = prop.dt
        # datetime is a subclass of date, check it first
        if isinstance(value, datetime):
            return value if value.tzinfo is not None else value.replace(tzinfo=self._zone)
        if isinstance(value, date):
            return datetime.combine(value, time(), tzinfo=self._zone)
        return None

    @staticmethod
    def _read_interval(rrule: Any) -> int:
        return int(rrule.get("interval", [1])[0])

    @staticmethod
    def _read_attendee(attendees: Any) -> Optional[str]:
        if not isinstance(attendees, list):
            attendees = [attendees]
        if not attendees:
            return None
        cname = attendees[0].params.get("CN")
        return str(cname) if cname is not None else None
