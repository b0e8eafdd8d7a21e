"""Create/update/delete operations that fold server responses into the store."""

import logging
from collections.abc import Awaitable, Callable, Mapping

from pydantic import BaseModel, Field

from src.core.errors import RepositoryOperation, TaskRepositoryError, fallback_message, resolve_error_message
from src.core.logging import log_with_context, span
from src.domain.create_models import TaskCreate
from src.domain.task import Task, TaskPriority, TaskStatus
from src.domain.update_models import TaskUpdate
from src.interface.task_repository import TaskRepository
from src.services.state_container import StateContainer
from src.services.task_reducer import Action, TaskCreated, TaskDeleted, TaskUpdated


logger = logging.getLogger(__name__)


class MutationResult(BaseModel):
    """Result of a task mutation or single-task read."""

    success: bool = Field(..., description="Whether the server accepted the request")
    task: Task | None = Field(None, description="Server snapshot of the task, when one was returned")
    error: str | None = Field(None, description="Error message if failed")


class MutationCoordinator:
    """Wraps single-task operations.

    Each operation issues exactly one request. On success it dispatches at most
    one reducer action; on failure the store is left untouched. No operation
    re-fetches the list.
    """

    def __init__(self, container: StateContainer, repository: TaskRepository) -> None:
        self._container = container
        self._repository = repository

    async def _run(
        self,
        operation: RepositoryOperation,
        call: Callable[[], Awaitable[Task]],
        fold: Callable[[Task], Action] | None,
        **context: object,
    ) -> MutationResult:
        with span(f"mutation_coordinator.{operation.value}"):
            try:
                task = await call()
            except TaskRepositoryError as e:
                message = resolve_error_message(e, operation)
                log_with_context(
                    logger,
                    "warning",
                    "mutation_failed",
                    operation=operation.value,
                    status=e.status_code,
                    error=message,
                    **context,
                )
                return MutationResult(success=False, error=message)

            if fold is not None:
                self._container.dispatch(fold(task))
            log_with_context(logger, "info", "mutation_applied", operation=operation.value, task_id=task.id)
            return MutationResult(success=True, task=task)

    async def create(self, data: TaskCreate | Mapping[str, object]) -> MutationResult:
        """Create a task and prepend it to the current page."""
        payload = data if isinstance(data, TaskCreate) else TaskCreate.model_validate(data)
        return await self._run(
            RepositoryOperation.CREATE_TASK,
            lambda: self._repository.create_task(payload),
            lambda task: TaskCreated(task=task),
        )

    async def update(self, task_id: str, data: TaskUpdate | Mapping[str, object]) -> MutationResult:
        """Apply a partial update and replace the task on the current page."""
        payload = data if isinstance(data, TaskUpdate) else TaskUpdate.model_validate(data)
        return await self._run(
            RepositoryOperation.UPDATE_TASK,
            lambda: self._repository.update_task(task_id, payload),
            lambda task: TaskUpdated(task=task),
            task_id=task_id,
        )

    def _rejected(self, operation: RepositoryOperation, task_id: str, value: object) -> MutationResult:
        message = fallback_message(operation)
        log_with_context(
            logger, "warning", "mutation_rejected", operation=operation.value, task_id=task_id, value=repr(value)
        )
        return MutationResult(success=False, error=message)

    async def update_status(self, task_id: str, status: TaskStatus | str) -> MutationResult:
        """Set a task's status; a value outside TaskStatus fails without a request."""
        try:
            status = TaskStatus(status)
        except ValueError:
            return self._rejected(RepositoryOperation.UPDATE_STATUS, task_id, status)
        return await self._run(
            RepositoryOperation.UPDATE_STATUS,
            lambda: self._repository.update_status(task_id, status),
            lambda task: TaskUpdated(task=task),
            task_id=task_id,
        )

    async def update_priority(self, task_id: str, priority: TaskPriority | str) -> MutationResult:
        """Set a task's priority; a value outside TaskPriority fails without a request."""
        try:
            priority = TaskPriority(priority)
        except ValueError:
            return self._rejected(RepositoryOperation.UPDATE_PRIORITY, task_id, priority)
        return await self._run(
            RepositoryOperation.UPDATE_PRIORITY,
            lambda: self._repository.update_priority(task_id, priority),
            lambda task: TaskUpdated(task=task),
            task_id=task_id,
        )

    async def delete(self, task_id: str) -> MutationResult:
        """Delete a task and drop it from the current page."""
        with span("mutation_coordinator.delete_task"):
            try:
                await self._repository.delete_task(task_id)
            except TaskRepositoryError as e:
                message = resolve_error_message(e, RepositoryOperation.DELETE_TASK)
                log_with_context(
                    logger, "warning", "mutation_failed", operation="delete_task", task_id=task_id, error=message
                )
                return MutationResult(success=False, error=message)

            self._container.dispatch(TaskDeleted(task_id=task_id))
            log_with_context(logger, "info", "mutation_applied", operation="delete_task", task_id=task_id)
            return MutationResult(success=True)

    async def get_by_id(self, task_id: str) -> MutationResult:
        """Read the server's current snapshot of a task without touching the store."""
        return await self._run(
            RepositoryOperation.GET_TASK,
            lambda: self._repository.get_task(task_id),
            None,
            task_id=task_id,
        )
