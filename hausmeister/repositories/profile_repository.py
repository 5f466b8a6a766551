# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Profile data access.
Holds the self identity and calendar credentials in memory.
"""

from hausmeister.core.config import settings
from hausmeister.models.domain import Profile


class ProfileRepository:
    """Single in-memory profile, seeded from the environment."""

    def __init__(self) -> None:
        self._profile = self._from_settings()

    def get(self) -> Profile:
        return self._profile

    def save(self, profile: Profile) -> None:
        self._profile = profile

    def reset(self) -> None:
        self._profile = self._from_settings()

    @staticmethod
    def _from_settings() -> Profile:
        return Profile(
            name=settings.SELF_NAME or None,
            username=settings.CALENDAR_USERNAME or None,
            password=settings.CALENDAR_PASSWORD or None,
        )
