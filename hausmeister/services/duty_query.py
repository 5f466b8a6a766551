# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Duty queries over resolved occurrences — pure, never raise.

Every query scans ``events`` in the order given; it does not sort
chronologically.
"""

from collections.abc import Sequence
from datetime import datetime, timedelta
from typing import Optional

from hausmeister.models.domain import DutyStatus, ResolvedOccurrence
from hausmeister.services.dates import WEEK, between, ceil_div, noon

NOT_SCHEDULED = -1


def current_holder(events: Sequence[ResolvedOccurrence], now: datetime) -> Optional[str]:
    """Attendee of the first event whose start day is not after today.

    Compared as instants, so naive and zone-aware values can be mixed.
    """
    today = noon(now)
    for event in events:
        if between(noon(event.start_date), today) >= timedelta(0):
            return event.attendee
    return None


def is_self_current(
    events: Sequence[ResolvedOccurrence], self_name: Optional[str], now: datetime
) -> bool:
    holder = current_holder(events, now)
    if not self_name or holder is None:
        return False
    return self_name in holder


def _cycles_until_self(
    events: Sequence[ResolvedOccurrence], self_name: Optional[str], now: datetime
) -> Optional[int]:
    if not self_name:
        return None
    for event in events:
        if self_name in event.attendee:
            # Rounded up: three days left still counts as next cycle.
            return ceil_div(between(now, event.start_date), WEEK)
    return None


def weeks_until_self(
    events: Sequence[ResolvedOccurrence], self_name: Optional[str], now: datetime
) -> int:
    """Weeks until the first event of ``self_name`` starts, -1 if there is none.

    Not clamped: an occurrence that already started gives zero or less.
    """
    weeks = _cycles_until_self(events, self_name, now)
    return NOT_SCHEDULED if weeks is None else weeks


def holder_sentence(holder: Optional[str]) -> str:
    if holder is None:
        return "There is no one on duty this cycle."
    return f"{holder} is on duty this cycle."


def status_sentence(
    events: Sequence[ResolvedOccurrence], self_name: Optional[str], now: datetime
) -> str:
    """Human readable summary of who is on duty and when it is your turn."""
    weeks = _cycles_until_self(events, self_name, now)
    if weeks is not None and weeks <= 0:
        return "You are on duty this cycle."

    holder = holder_sentence(current_holder(events, now))
    if weeks is None:
        return f"{holder}\nYou are not scheduled to be on duty in the near future."
    if weeks == 1:
        return f"{holder}\nYou are on duty next cycle."
    return f"{holder}\nIn {weeks} cycles it is your turn again."


def status(
    events: Sequence[ResolvedOccurrence], self_name: Optional[str], now: datetime
) -> DutyStatus:
    return DutyStatus(
        current_holder=current_holder(events, now),
        is_self_current=is_self_current(events, self_name, now),
        weeks_until_self=weeks_until_self(events, self_name, now),
        sentence=status_sentence(events, self_name, now),
    )
