# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection — wire repositories and services.
"""

from hausmeister.repositories.link_repository import LinkRepository
from hausmeister.repositories.profile_repository import ProfileRepository
from hausmeister.repositories.task_repository import TaskRepository
from hausmeister.services.calendar_client import CalendarClient
from hausmeister.services.calendar_parser import CalendarParser
from hausmeister.services.duty_service import DutyService
from hausmeister.services.profile_service import ProfileService
from hausmeister.services.task_service import TaskService

# ── Singleton repository instances (in-memory stores) ──
_profile_repo = ProfileRepository()
_task_repo = TaskRepository()
_link_repo = LinkRepository()
_calendar_client = CalendarClient()
_calendar_parser = CalendarParser()

# ── Service instances (with injected dependencies) ──
_duty_service = DutyService(
    calendar_client=_calendar_client,
    calendar_parser=_calendar_parser,
    profile_repo=_profile_repo,
)
_task_service = TaskService(task_repo=_task_repo)
_profile_service = ProfileService(profile_repo=_profile_repo)


# ── FastAPI dependency functions ──
def get_duty_service() -> DutyService:
    return _duty_service


def get_task_service() -> TaskService:
    return _task_service


def get_profile_service() -> ProfileService:
    return _profile_service


def get_calendar_client() -> CalendarClient:
    return _calendar_client


def get_profile_repo() -> ProfileRepository:
    return _profile_repo


def get_task_repo() -> TaskRepository:
    return _task_repo


def get_link_repo() -> LinkRepository:
    return _link_repo
