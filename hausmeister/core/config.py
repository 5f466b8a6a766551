# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration — all env-driven, zero hardcode.
Single source of truth for every tunable parameter.
"""

import os


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "hausmeister-service")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "8005"))

    CALENDAR_URL: str = os.getenv(
        "CALENDAR_URL",
        "https://confluence.ase.in.tum.de/rest/calendar-services/1.0/calendar/export/"
        "subcalendar/7eac5fd4-7907-4590-89fe-bd9ab405efde.ics"
        "?os_authType=basic&isSubscribe=true",
    )
    CALENDAR_USERNAME: str = os.getenv("CALENDAR_USERNAME", "")
    CALENDAR_PASSWORD: str = os.getenv("CALENDAR_PASSWORD", "")
    CALENDAR_TIMEOUT: float = float(os.getenv("CALENDAR_TIMEOUT", "10.0"))
    CALENDAR_TIMEZONE: str = os.getenv("CALENDAR_TIMEZONE", "Europe/Berlin")
    DUTY_KEYWORD: str = os.getenv("DUTY_KEYWORD", "hausmeister").lower()

    SELF_NAME: str = os.getenv("SELF_NAME", "")

    REFRESH_INTERVAL_SECONDS: float = float(os.getenv("REFRESH_INTERVAL_SECONDS", "10"))
    REFRESH_ON_STARTUP: bool = _env_flag("REFRESH_ON_STARTUP", "true")
    SKIP_MALFORMED_RECORDS: bool = _env_flag("SKIP_MALFORMED_RECORDS", "false")
    SORT_OCCURRENCES_BY_START: bool = _env_flag("SORT_OCCURRENCES_BY_START", "false")

    CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
