# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Profile — self identity and calendar credentials.
The password is write-only: never returned, never logged.
"""

from typing import Any, Optional

from hausmeister.core.logging import get_logger
from hausmeister.models.domain import Profile
from hausmeister.repositories.profile_repository import ProfileRepository

logger = get_logger(__name__)


def greeting(name: Optional[str]) -> str:
    if name:
        return f"Hi {name} 👋"
    return "Hi 👋"


class ProfileService:
    def __init__(self, profile_repo: ProfileRepository) -> None:
        self._profiles = profile_repo

    def get_profile(self) -> dict[str, Any]:
        profile = self._profiles.get()
        return {
            "name": profile.name,
            "username": profile.username,
            "has_password": bool(profile.password),
            "greeting": greeting(profile.name),
        }

    def update_profile(
        self,
        name: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> dict[str, Any]:
        """Overwrite the given fields, keep the others."""
        current = self._profiles.get()
        self._profiles.save(
            Profile(
                name=name if name is not None else current.name,
                username=username if username is not None else current.username,
                password=password if password is not None else current.password,
            )
        )
        logger.info("Saving name '%s', username '%s', and password '***'", name, username)
        return self.get_profile()
