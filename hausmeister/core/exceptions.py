# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Error taxonomy — raised by services, translated to HTTP codes by controllers.
"""

from typing import Optional


class HausmeisterError(Exception):
    """Base class for every error raised by this service."""


class RecordError(HausmeisterError, ValueError):
    """A single raw recurrence record cannot be resolved."""

    def __init__(self, message: str, uid: Optional[str] = None) -> None:
        super().__init__(message)
        self.uid = uid


class MalformedRecord(RecordError):
    """A required field (start, end, interval, attendee) is missing."""


class InvalidRecurrence(RecordError):
    """The repeat interval is zero or negative."""


class CalendarFetchError(HausmeisterError):
    """Credentials missing, transport failure, or non-200 response."""


class CalendarParseError(HausmeisterError):
    """The fetched body is not an iCalendar document."""


class DataNotLoadedError(HausmeisterError):
    """No successful refresh has happened yet."""
