# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Duty status, current holder, occurrences, refresh endpoints.
Thin HTTP layer — delegates ALL logic to DutyService.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from hausmeister.core.dependencies import get_duty_service
from hausmeister.core.exceptions import (
    CalendarFetchError,
    CalendarParseError,
    DataNotLoadedError,
    RecordError,
)
from hausmeister.models.domain import DutySnapshot
from hausmeister.schemas.duty import (
    CurrentHolderResponse,
    DutyStatusResponse,
    OccurrenceResponse,
    RefreshResponse,
)
from hausmeister.services.duty_service import DutyService

router = APIRouter(prefix="/api/v1/duty", tags=["Duty"])


def _loaded_snapshot(service: DutyService) -> DutySnapshot:
    """One snapshot reference per request, so every field comes from the same refresh."""
    try:
        return service.require_snapshot()
    except DataNotLoadedError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/status", response_model=DutyStatusResponse)
def get_duty_status(
    name: Optional[str] = Query(default=None, description="Self name, defaults to the profile"),
    service: DutyService = Depends(get_duty_service),
):
    """Who is on duty, whether it is you, and when your next turn is."""
    snapshot = _loaded_snapshot(service)
    status = service.status(name, snapshot=snapshot)
    return {
        **status.model_dump(),
        "self_name": service.resolve_self_name(name),
        "refreshed_at": snapshot.refreshed_at,
        "refresh_failed": service.error_on_refresh,
    }


@router.get("/current", response_model=CurrentHolderResponse)
def get_current_holder(service: DutyService = Depends(get_duty_service)):
    """The attendee holding the current duty window."""
    snapshot = _loaded_snapshot(service)
    holder = service.current_holder(snapshot=snapshot)
    return {"current_holder": holder, "refreshed_at": snapshot.refreshed_at}


@router.get("/occurrences", response_model=list[OccurrenceResponse])
def list_occurrences(service: DutyService = Depends(get_duty_service)):
    """Resolved occurrence windows, in snapshot order."""
    snapshot = _loaded_snapshot(service)
    return [o.model_dump() for o in snapshot.occurrences]


@router.post("/refresh", response_model=RefreshResponse)
async def refresh_duty(service: DutyService = Depends(get_duty_service)):
    """Fetch the calendar now instead of waiting for the next tick."""
    try:
        snapshot = await service.refresh()
    except RecordError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except (CalendarFetchError, CalendarParseError) as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {
        "status": "refreshed",
        "raw_count": snapshot.raw_count,
        "occurrences": len(snapshot.occurrences),
        "skipped": snapshot.skipped,
        "refreshed_at": snapshot.refreshed_at,
    }
