"""Derived, read-only views over the loaded task page (dashboard panels)."""

from collections.abc import Sequence
from datetime import datetime

from pydantic import BaseModel

from src.core.config import constants
from src.domain.task import Task, TaskStatus, as_aware


class TaskStats(BaseModel):
    """Status counts over the currently loaded page."""

    total: int = 0
    pending: int = 0
    in_progress: int = 0
    completed: int = 0
    overdue: int = 0


def compute_task_stats(tasks: Sequence[Task], now: datetime) -> TaskStats:
    """Count tasks by status, plus overdue (past due and not completed)."""
    counts = {status: 0 for status in TaskStatus}
    overdue = 0
    for task in tasks:
        counts[task.status] += 1
        if task.is_overdue(now):
            overdue += 1

    return TaskStats(
        total=len(tasks),
        pending=counts[TaskStatus.PENDING],
        in_progress=counts[TaskStatus.IN_PROGRESS],
        completed=counts[TaskStatus.COMPLETED],
        overdue=overdue,
    )


def recent_tasks(tasks: Sequence[Task], limit: int = constants.DASHBOARD_PREVIEW_SIZE) -> list[Task]:
    """First `limit` tasks in server order."""
    return list(tasks[:limit])


def upcoming_tasks(
    tasks: Sequence[Task],
    now: datetime,
    limit: int = constants.DASHBOARD_PREVIEW_SIZE,
) -> list[Task]:
    """Open tasks due after `now`, soonest first.

    Returns a new list; the store's own ordering is never changed.
    """
    now = as_aware(now)
    upcoming = [task for task in tasks if as_aware(task.due_date) > now and task.status != TaskStatus.COMPLETED]
    upcoming.sort(key=lambda task: as_aware(task.due_date))
    return upcoming[:limit]
