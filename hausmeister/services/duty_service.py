# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Duty snapshot ownership and refresh orchestration.
Fetch → parse → resolve → swap. Readers only ever see a complete snapshot.
"""

from datetime import datetime
from typing import Optional

from hausmeister.core.config import settings
from hausmeister.core.exceptions import (
    DataNotLoadedError,
    HausmeisterError,
    InvalidRecurrence,
)
from hausmeister.core.logging import get_logger
from hausmeister.metrics.prometheus import (
    DUTY_LOOKUPS,
    REFRESH_DURATION,
    REFRESHES_TOTAL,
    RESOLVED_OCCURRENCES,
    SKIPPED_RECORDS,
)
from hausmeister.models.domain import DutySnapshot, DutyStatus
from hausmeister.repositories.profile_repository import ProfileRepository
from hausmeister.services import duty_query
from hausmeister.services.calendar_client import CalendarClient
from hausmeister.services.calendar_parser import CalendarParser
from hausmeister.services.dates import local_now
from hausmeister.services.rotation import resolve_all

logger = get_logger(__name__)


class DutyService:
    """Owns the cached snapshot of resolved occurrences."""

    def __init__(
        self,
        calendar_client: CalendarClient,
        calendar_parser: CalendarParser,
        profile_repo: ProfileRepository,
    ) -> None:
        self._client = calendar_client
        self._parser = calendar_parser
        self._profiles = profile_repo
        self._snapshot: Optional[DutySnapshot] = None
        self._last_error: Optional[str] = None

    # ── Read ──

    @property
    def snapshot(self) -> Optional[DutySnapshot]:
        return self._snapshot

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    @property
    def error_on_refresh(self) -> bool:
        return self._last_error is not None

    @property
    def data_fetched(self) -> bool:
        snapshot = self._snapshot
        return snapshot is not None and snapshot.raw_count > 0

    def require_snapshot(self) -> DutySnapshot:
        """The current snapshot. Raises DataNotLoadedError before the first refresh."""
        snapshot = self._snapshot
        if snapshot is None:
            raise DataNotLoadedError("Duty data not loaded yet")
        return snapshot

    def resolve_self_name(self, name: Optional[str] = None) -> Optional[str]:
        """Explicit name, else the profile name, else the configured one."""
        return name or self._profiles.get().name or settings.SELF_NAME or None

    def status(
        self,
        name: Optional[str] = None,
        now: Optional[datetime] = None,
        snapshot: Optional[DutySnapshot] = None,
    ) -> DutyStatus:
        """Duty status for ``name``. Raises DataNotLoadedError before the first refresh.

        Pass ``snapshot`` to answer from a reference the caller already holds.
        """
        if snapshot is None:
            snapshot = self.require_snapshot()
        DUTY_LOOKUPS.inc()
        return duty_query.status(
            snapshot.occurrences, self.resolve_self_name(name), now or local_now()
        )

    def current_holder(
        self, now: Optional[datetime] = None, snapshot: Optional[DutySnapshot] = None
    ) -> Optional[str]:
        if snapshot is None:
            snapshot = self.require_snapshot()
        return duty_query.current_holder(snapshot.occurrences, now or local_now())

    # ── Commands ──

    async def refresh(self, now: Optional[datetime] = None) -> DutySnapshot:
        """Fetch the calendar and replace the snapshot.

        On failure the previous snapshot stays in place and the error is
        re-raised.
        """
        now = now or local_now()
        profile = self._profiles.get()
        logger.debug("Updating events")
        try:
            with REFRESH_DURATION.time():
                ical_text = await self._client.fetch(profile.username, profile.password)
                records = self._parser.parse(ical_text)
                occurrences, errors = resolve_all(
                    records, now, skip_malformed=settings.SKIP_MALFORMED_RECORDS
                )
        except HausmeisterError as exc:
            self._record_failure(exc)
            logger.error("Refresh failed, keeping previous snapshot: %s", exc)
            raise
        except Exception as exc:
            self._record_failure(exc)
            logger.exception("Unexpected refresh failure, keeping previous snapshot")
            raise

        for error in errors:
            reason = "invalid_recurrence" if isinstance(error, InvalidRecurrence) else "malformed"
            SKIPPED_RECORDS.labels(reason=reason).inc()
            logger.warning("Skipping record: %s", error, extra={"uid": error.uid})

        if settings.SORT_OCCURRENCES_BY_START:
            occurrences = tuple(sorted(occurrences, key=lambda o: o.start_date))

        snapshot = DutySnapshot(
            occurrences=occurrences,
            raw_count=len(records),
            skipped=len(errors),
            refreshed_at=now,
        )
        self.publish(snapshot)
        REFRESHES_TOTAL.labels(status="success").inc()
        logger.info(
            "Refresh complete: records=%d, occurrences=%d, skipped=%d",
            len(records), len(occurrences), len(errors),
        )
        return snapshot

    def publish(self, snapshot: DutySnapshot) -> None:
        """Swap in a new snapshot as a whole."""
        self._snapshot = snapshot
        self._last_error = None
        RESOLVED_OCCURRENCES.set(len(snapshot.occurrences))

    # ── Bulk / internal ──

    def clear(self) -> None:
        self._snapshot = None
        self._last_error = None
        RESOLVED_OCCURRENCES.set(0)

    def _record_failure(self, exc: Exception) -> None:
        self._last_error = str(exc) or type(exc).__name__
        REFRESHES_TOTAL.labels(status="failed").inc()
