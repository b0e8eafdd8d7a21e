"""Tests for dashboard views derived from the loaded page."""

from datetime import datetime

import pytest

from src.domain.task import Task, TaskStatus
from src.services.task_views import TaskStats, compute_task_stats, recent_tasks, upcoming_tasks


@pytest.mark.unit
class TestComputeTaskStats:
    def test_counts_seed_tasks(self, seed_tasks: list[Task], now: datetime) -> None:
        stats = compute_task_stats(seed_tasks, now)

        assert stats == TaskStats(total=8, pending=5, in_progress=2, completed=1, overdue=1)

    def test_empty_page(self, now: datetime) -> None:
        assert compute_task_stats([], now) == TaskStats()

    def test_completed_task_is_never_overdue(self, seed_tasks: list[Task], now: datetime) -> None:
        overdue = seed_tasks[4]
        assert overdue.is_overdue(now) is True

        done = overdue.model_copy(update={"status": TaskStatus.COMPLETED})

        assert done.is_overdue(now) is False

    def test_naive_now_counts_like_aware_now(self, seed_tasks: list[Task], now: datetime) -> None:
        naive_now = now.astimezone().replace(tzinfo=None)

        assert compute_task_stats(seed_tasks, naive_now) == compute_task_stats(seed_tasks, now)
        assert seed_tasks[4].is_overdue(naive_now) is True


@pytest.mark.unit
class TestRecentTasks:
    def test_keeps_server_order(self, seed_tasks: list[Task]) -> None:
        assert [task.id for task in recent_tasks(seed_tasks)] == ["t1", "t2", "t3", "t4", "t5"]

    def test_limit(self, seed_tasks: list[Task]) -> None:
        assert len(recent_tasks(seed_tasks, limit=2)) == 2


@pytest.mark.unit
class TestUpcomingTasks:
    def test_open_tasks_due_soonest_first(self, seed_tasks: list[Task], now: datetime) -> None:
        upcoming = upcoming_tasks(seed_tasks, now)

        assert [task.id for task in upcoming] == ["t3", "t7", "t1", "t2", "t8"]

    def test_does_not_reorder_input(self, seed_tasks: list[Task], now: datetime) -> None:
        before = [task.id for task in seed_tasks]

        upcoming_tasks(seed_tasks, now, limit=10)

        assert [task.id for task in seed_tasks] == before

    def test_naive_now_matches_aware_now(self, seed_tasks: list[Task], now: datetime) -> None:
        naive_now = now.astimezone().replace(tzinfo=None)

        assert upcoming_tasks(seed_tasks, naive_now) == upcoming_tasks(seed_tasks, now)
