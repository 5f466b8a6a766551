# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Duty task data access.
In-memory daily and weekly checklists. NO business rules here — pure CRUD.
"""

from datetime import datetime
from typing import Optional

from hausmeister.models.domain import DutyTask

DEFAULT_WEEKLY_TASKS: tuple[str, ...] = (
    "Check Macs in Aquarium",
    "Clean up admin office",
    "Create agenda for next meeting",
)
DEFAULT_DAILY_TASKS: tuple[str, ...] = (
    "Check for new tickets",
    "Check for new messages in Slack",
    "Check monitoring",
)


class TaskRepository:
    """In-memory task storage, keyed by kind."""

    def __init__(self) -> None:
        self._store: dict[str, list[DutyTask]] = {}
        self._last_check: Optional[datetime] = None
        self.seed()

    # ── Read ──

    def get_by_kind(self, kind: str) -> list[DutyTask]:
        return list(self._store.get(kind, []))

    def get(self, kind: str, name: str) -> Optional[DutyTask]:
        for task in self._store.get(kind, []):
            if task.name == name:
                return task
        return None

    @property
    def last_check(self) -> Optional[datetime]:
        return self._last_check

    # ── Write ──

    def set_done(self, kind: str, name: str, done: bool) -> Optional[DutyTask]:
        task = self.get(kind, name)
        if task is not None:
            task.done = done
        return task

    def reset_kind(self, kind: str) -> None:
        for task in self._store.get(kind, []):
            task.done = False

    def mark_checked(self, when: datetime) -> None:
        self._last_check = when

    # ── Bulk / internal ──

    def seed(self) -> None:
        self._store = {
            "daily": [DutyTask(name=n, kind="daily") for n in DEFAULT_DAILY_TASKS],
            "weekly": [DutyTask(name=n, kind="weekly") for n in DEFAULT_WEEKLY_TASKS],
        }
        self._last_check = None
