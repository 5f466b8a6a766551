# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Calendar client — fetches the raw iCalendar feed.
Authenticated HTTP call with timeout; every failure becomes CalendarFetchError.
"""

from typing import Optional

import httpx

from hausmeister.core.config import settings
from hausmeister.core.exceptions import CalendarFetchError
from hausmeister.core.logging import get_logger

logger = get_logger(__name__)


class CalendarClient:
    """Basic-auth client for the calendar export feed."""

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._url = url or settings.CALENDAR_URL
        self._timeout = timeout or settings.CALENDAR_TIMEOUT
        self._transport = transport

    @property
    def url(self) -> str:
        return self._url

    async def fetch(self, username: Optional[str], password: Optional[str]) -> str:
        """Return the feed body. Raises CalendarFetchError on any failure."""
        if not username or not password:
            logger.warning("Username or password unset")
            raise CalendarFetchError("Calendar username or password unset")

        logger.debug("Fetching calendar feed: url=%s", self._url)
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                resp = await client.get(self._url, auth=(username, password))
        except httpx.HTTPError as exc:
            logger.error("Calendar fetch failed: %s", exc)
            raise CalendarFetchError(f"Calendar fetch failed: {exc}") from exc

        if resp.status_code != 200:
            logger.error("Calendar fetch failed: status=%d", resp.status_code)
            raise CalendarFetchError(
                f"Calendar server returned status {resp.status_code}, check the credentials"
            )
        return resp.text
