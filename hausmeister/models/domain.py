# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RawRecurrenceRecord(BaseModel):
    """First known occurrence of one rotation slot, as parsed from the calendar.

    Every field the resolver needs is optional here so that a missing value
    surfaces as ``MalformedRecord`` instead of a validation error upstream.
    """

    model_config = ConfigDict(frozen=True)

    uid: str = "unknown"
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    interval_weeks: Optional[int] = None
    attendee_name: Optional[str] = None


class ResolvedOccurrence(BaseModel):
    """Occurrence window projected forward to be current relative to "now"."""

    model_config = ConfigDict(frozen=True)

    attendee: str
    start_date: datetime
    end_date: datetime


class DutySnapshot(BaseModel):
    """Result of one successful refresh. Replaced wholesale, never mutated."""

    model_config = ConfigDict(frozen=True)

    occurrences: tuple[ResolvedOccurrence, ...] = ()
    raw_count: int = 0
    skipped: int = 0
    refreshed_at: datetime


class DutyStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    current_holder: Optional[str] = None
    is_self_current: bool = False
    weeks_until_self: int = -1
    sentence: str


class DutyTask(BaseModel):
    """A single to-do of the current duty holder."""
    name: str = Field(..., min_length=1, max_length=255)
    kind: str = Field(..., pattern="^(daily|weekly)$")
    done: bool = False


class LinkEntry(BaseModel):
    """A named link with its URL."""
    name: str
    url: str


class Profile(BaseModel):
    """Self identity and calendar credentials."""
    name: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
