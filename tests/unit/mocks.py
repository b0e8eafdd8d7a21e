"""Pure Python in-memory Task Repository for unit testing."""

import asyncio
import math
from datetime import UTC, datetime
from typing import Any

from src.core.errors import TaskRepositoryError
from src.domain.create_models import TaskCreate
from src.domain.filters import TaskFilters
from src.domain.pagination import Pagination, TaskPage
from src.domain.task import Task, TaskPriority, TaskStatus, UserRef
from src.domain.update_models import TaskUpdate
from src.domain.user import User


def matches_filters(task: Task, filters: TaskFilters) -> bool:
    """Server-side filter semantics: every present key must match."""
    if filters.status and task.status != filters.status:
        return False
    if filters.priority and task.priority != filters.priority:
        return False
    if filters.search:
        needle = filters.search.lower()
        if needle not in task.title.lower() and needle not in task.description.lower():
            return False
    if filters.assigned_to and (task.assigned_to is None or task.assigned_to.id != filters.assigned_to):
        return False
    return not (filters.created_by and task.created_by.id != filters.created_by)


class InMemoryTaskRepository:
    """In-memory implementation of the TaskRepository interface.

    Records every call, can be told to fail the next call of an operation, and
    can hold list responses until a test releases them in any order.
    """

    def __init__(self, tasks: list[Task] | None = None, users: list[User] | None = None) -> None:
        self._tasks: list[Task] = list(tasks or [])
        self._users: list[User] = list(users or [])
        self._failures: dict[str, TaskRepositoryError] = {}
        self._id_counter = 1000
        self._hold_lists = False
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.list_gates: list[asyncio.Event] = []

    # Test controls

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    @property
    def list_calls(self) -> list[dict[str, Any]]:
        return [kwargs for operation, kwargs in self.calls if operation == "list_tasks"]

    def fail_next(self, operation: str, message: str | None = None, status_code: int | None = 500) -> None:
        self._failures[operation] = TaskRepositoryError(message, status_code=status_code)

    def hold_lists(self) -> None:
        """Make every following list call wait until released."""
        self._hold_lists = True

    def release_list(self, index: int) -> None:
        self.list_gates[index].set()

    def _record(self, operation: str, **kwargs: Any) -> None:
        self.calls.append((operation, kwargs))

    def _raise_if_failing(self, operation: str) -> None:
        error = self._failures.pop(operation, None)
        if error is not None:
            raise error

    def _find(self, task_id: str) -> int:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        raise TaskRepositoryError("Task not found", status_code=404)

    def _user_ref(self, user_id: str | None) -> UserRef | None:
        if user_id is None:
            return None
        for user in self._users:
            if user.id == user_id:
                return UserRef(id=user.id, name=user.name, email=user.email)
        return UserRef(id=user_id, name=user_id)

    def _replace(self, index: int, **changes: Any) -> Task:
        updated = self._tasks[index].model_copy(update={**changes, "updated_at": datetime.now(UTC)})
        self._tasks[index] = updated
        return updated

    # TaskRepository interface

    async def list_tasks(self, *, page: int, limit: int, filters: TaskFilters) -> TaskPage:
        self._record("list_tasks", page=page, limit=limit, filters=filters)
        if self._hold_lists:
            gate = asyncio.Event()
            self.list_gates.append(gate)
            await gate.wait()
        self._raise_if_failing("list_tasks")

        matching = [task for task in self._tasks if matches_filters(task, filters)]
        start = (page - 1) * limit
        pagination = Pagination(
            current_page=page,
            total_pages=max(1, math.ceil(len(matching) / limit)),
            total_tasks=len(matching),
        )
        return TaskPage(tasks=tuple(matching[start : start + limit]), pagination=pagination)

    async def get_task(self, task_id: str) -> Task:
        self._record("get_task", task_id=task_id)
        self._raise_if_failing("get_task")
        return self._tasks[self._find(task_id)]

    async def create_task(self, data: TaskCreate) -> Task:
        self._record("create_task", data=data)
        self._raise_if_failing("create_task")
        self._id_counter += 1
        now = datetime.now(UTC)
        creator = self._users[0] if self._users else User(id="u-test", name="Test User", email="test@example.com")
        task = Task(
            id=f"new-{self._id_counter}",
            title=data.title,
            description=data.description,
            due_date=data.due_date,
            priority=data.priority,
            status=data.status,
            tags=tuple(data.tags),
            created_by=UserRef(id=creator.id, name=creator.name, email=creator.email),
            assigned_to=self._user_ref(data.assigned_to),
            created_at=now,
            updated_at=now,
        )
        self._tasks.insert(0, task)
        return task

    async def update_task(self, task_id: str, data: TaskUpdate) -> Task:
        self._record("update_task", task_id=task_id, data=data)
        self._raise_if_failing("update_task")
        index = self._find(task_id)
        changes = data.model_dump(exclude_unset=True)
        if "assigned_to" in changes:
            changes["assigned_to"] = self._user_ref(changes["assigned_to"])
        if "tags" in changes and changes["tags"] is not None:
            changes["tags"] = tuple(changes["tags"])
        return self._replace(index, **changes)

    async def update_status(self, task_id: str, status: TaskStatus) -> Task:
        self._record("update_status", task_id=task_id, status=status)
        self._raise_if_failing("update_status")
        return self._replace(self._find(task_id), status=status)

    async def update_priority(self, task_id: str, priority: TaskPriority) -> Task:
        self._record("update_priority", task_id=task_id, priority=priority)
        self._raise_if_failing("update_priority")
        return self._replace(self._find(task_id), priority=priority)

    async def delete_task(self, task_id: str) -> None:
        self._record("delete_task", task_id=task_id)
        self._raise_if_failing("delete_task")
        del self._tasks[self._find(task_id)]

    async def list_users(self) -> list[User]:
        self._record("list_users")
        self._raise_if_failing("list_users")
        return list(self._users)
