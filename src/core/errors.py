"""Error types and message resolution for Task Repository calls."""

from enum import Enum


class RepositoryOperation(Enum):
    """Operations issued against the Task Repository."""

    LIST_TASKS = "list_tasks"
    GET_TASK = "get_task"
    CREATE_TASK = "create_task"
    UPDATE_TASK = "update_task"
    UPDATE_STATUS = "update_status"
    UPDATE_PRIORITY = "update_priority"
    DELETE_TASK = "delete_task"
    LIST_USERS = "list_users"


class ErrorMessage:
    """Generic fallback messages used when the server gives none."""

    FETCH_TASKS = "Failed to fetch tasks"
    FETCH_TASK = "Failed to fetch task"
    CREATE_TASK = "Failed to create task"
    UPDATE_TASK = "Failed to update task"
    UPDATE_STATUS = "Failed to update task status"
    UPDATE_PRIORITY = "Failed to update task priority"
    DELETE_TASK = "Failed to delete task"
    FETCH_USERS = "Failed to fetch users"


_FALLBACK_MESSAGES: dict[RepositoryOperation, str] = {
    RepositoryOperation.LIST_TASKS: ErrorMessage.FETCH_TASKS,
    RepositoryOperation.GET_TASK: ErrorMessage.FETCH_TASK,
    RepositoryOperation.CREATE_TASK: ErrorMessage.CREATE_TASK,
    RepositoryOperation.UPDATE_TASK: ErrorMessage.UPDATE_TASK,
    RepositoryOperation.UPDATE_STATUS: ErrorMessage.UPDATE_STATUS,
    RepositoryOperation.UPDATE_PRIORITY: ErrorMessage.UPDATE_PRIORITY,
    RepositoryOperation.DELETE_TASK: ErrorMessage.DELETE_TASK,
    RepositoryOperation.LIST_USERS: ErrorMessage.FETCH_USERS,
}


class TaskRepositoryError(Exception):
    """Raised by the repository client for any failed call.

    Not-found and authorization failures are not distinguished from other server
    errors; `status_code` is kept for logging only. Transport failures and
    malformed response bodies carry `status_code=None`.
    """

    def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message or f"Task Repository request failed (status={status_code})")


def fallback_message(operation: RepositoryOperation) -> str:
    """Return the generic failure message for an operation."""
    return _FALLBACK_MESSAGES[operation]


def resolve_error_message(error: TaskRepositoryError, operation: RepositoryOperation) -> str:
    """Return the server-provided message verbatim, else the operation's fallback."""
    if error.message:
        return error.message
    return fallback_message(operation)
