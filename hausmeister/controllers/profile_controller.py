# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Profile endpoints.
Thin HTTP layer — delegates ALL logic to ProfileService.
"""

from fastapi import APIRouter, Depends

from hausmeister.core.dependencies import get_profile_service
from hausmeister.schemas.duty import ProfileResponse, ProfileUpdateRequest
from hausmeister.services.profile_service import ProfileService

router = APIRouter(prefix="/api/v1", tags=["Profile"])


@router.get("/profile", response_model=ProfileResponse)
def get_profile(service: ProfileService = Depends(get_profile_service)):
    """Current self name and username. The password is never returned."""
    return service.get_profile()


@router.put("/profile", response_model=ProfileResponse)
def update_profile(
    payload: ProfileUpdateRequest,
    service: ProfileService = Depends(get_profile_service),
):
    """Save name, username and password. Omitted fields are kept."""
    return service.update_profile(
        name=payload.name,
        username=payload.username,
        password=payload.password,
    )
