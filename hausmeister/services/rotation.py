# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Rotation logic — pure computation, no side effects.

The calendar stores only the first occurrence of each slot of a round-robin
rotation, plus the repeat interval:

    +---------+ +---------+ +---------+ +---------+
    | Admin 1 | | Admin 2 | | Admin 3 | | Admin 4 |
    +---------+ +---------+ +---------+ +---------+
    ^         ^                                    ...    ^
    first start                                          now
              first end

Resolving moves every slot forward by whole cycles so that the windows
describe the current round:

    +---------+ +---------+ +---------+ +---------+
    | Admin 3 | | Admin 4 | | Admin 1 | | Admin 2 |
    +---------+ +---------+ +---------+ +---------+
         ^
        now
"""

from collections.abc import Iterable
from datetime import datetime, timedelta

from hausmeister.core.exceptions import InvalidRecurrence, MalformedRecord, RecordError
from hausmeister.models.domain import RawRecurrenceRecord, ResolvedOccurrence
from hausmeister.services.dates import add_hours, add_weeks, between, ceil_div, noon

# Shift applied before snapping to noon, absorbs summer/winter time changes.
DST_GUARD_HOURS = 3


def normalize_attendee(name: str) -> str:
    """Some names in the calendar are wrapped in quotation marks."""
    return name.replace('"', "")


def normalize_window(start: datetime, end: datetime) -> tuple[datetime, datetime]:
    return (
        noon(add_hours(start, DST_GUARD_HOURS)),
        noon(add_hours(end, -DST_GUARD_HOURS)),
    )


def rounds_to_add(normalized_end: datetime, interval_weeks: int, now: datetime) -> int:
    """Number of whole cycles to move a first occurrence forward.

    A first occurrence that has not ended yet is already the current one and
    is not moved.
    """
    if interval_weeks <= 0:
        raise InvalidRecurrence(f"Interval must be positive, got {interval_weeks}")
    elapsed = between(normalized_end, now)
    if elapsed <= timedelta(0):
        return 0
    cycle = timedelta(weeks=interval_weeks)
    return ceil_div(elapsed, cycle)


def resolve(record: RawRecurrenceRecord, now: datetime) -> ResolvedOccurrence:
    """Project a raw record forward to the occurrence window relevant to ``now``.

    Raises MalformedRecord if a required field is missing and
    InvalidRecurrence if the interval is not positive.
    """
    missing = [
        field
        for field in ("start_date", "end_date", "interval_weeks", "attendee_name")
        if getattr(record, field) is None
    ]
    if missing:
        raise MalformedRecord(
            f"Record '{record.uid}' is missing {', '.join(missing)}", uid=record.uid
        )
    if record.interval_weeks <= 0:
        raise InvalidRecurrence(
            f"Record '{record.uid}' has non-positive interval {record.interval_weeks}",
            uid=record.uid,
        )

    start, end = normalize_window(record.start_date, record.end_date)
    weeks = rounds_to_add(end, record.interval_weeks, now) * record.interval_weeks

    return ResolvedOccurrence(
        attendee=normalize_attendee(record.attendee_name),
        start_date=add_weeks(start, weeks),
        end_date=add_weeks(end, weeks),
    )


def resolve_all(
    records: Iterable[RawRecurrenceRecord],
    now: datetime,
    skip_malformed: bool = False,
) -> tuple[tuple[ResolvedOccurrence, ...], list[RecordError]]:
    """Resolve every record, keeping input order.

    With ``skip_malformed`` unset the first failing record aborts the batch;
    otherwise failing records are left out and returned alongside the result.
    """
    resolved: list[ResolvedOccurrence] = []
    errors: list[RecordError] = []
    for record in records:
        try:
            resolved.append(resolve(record, now))
        except RecordError as exc:
            if not skip_malformed:
                raise
            errors.append(exc)
    return tuple(resolved), errors
