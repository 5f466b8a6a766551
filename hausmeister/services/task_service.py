# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Duty checklist — daily tasks reset each day, weekly tasks each week.
"""

from datetime import datetime
from typing import Any, Optional

from hausmeister.core.logging import get_logger
from hausmeister.metrics.prometheus import TASK_RESETS
from hausmeister.repositories.task_repository import TaskRepository
from hausmeister.services.dates import local_now

logger = get_logger(__name__)

TASK_KINDS: tuple[str, ...] = ("daily", "weekly")


class TaskService:
    """Business logic for the duty holder's to-do lists."""

    def __init__(self, task_repo: TaskRepository) -> None:
        self._tasks = task_repo

    def list_tasks(self, now: Optional[datetime] = None) -> dict[str, list[dict[str, Any]]]:
        self.reset_if_needed(now)
        return {
            kind: [t.model_dump() for t in self._tasks.get_by_kind(kind)]
            for kind in TASK_KINDS
        }

    def set_done(self, kind: str, name: str, done: bool) -> dict[str, Any]:
        """Mark one task. Raises KeyError if it does not exist."""
        task = self._tasks.set_done(kind, name, done)
        if task is None:
            raise KeyError(f"No {kind} task named '{name}'")
        logger.info("Task updated: kind=%s, name=%s, done=%s", kind, name, done)
        return task.model_dump()

    def reset_if_needed(self, now: Optional[datetime] = None) -> list[str]:
        """Clear done flags when the day or week changed since the last check.

        Returns the kinds that were reset.
        """
        now = now or local_now()
        last = self._tasks.last_check
        reset: list[str] = []
        if last is not None:
            if last.date() != now.date():
                reset.append("daily")
            if last.isocalendar()[:2] != now.isocalendar()[:2]:
                reset.append("weekly")
        for kind in reset:
            self._tasks.reset_kind(kind)
            TASK_RESETS.labels(kind=kind).inc()
            logger.info("Resetting %s tasks", kind)
        self._tasks.mark_checked(now)
        return reset
