"""Task Repository HTTP client using httpx."""

import logging
from typing import Any, Protocol
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from src.core.config import constants, settings
from src.core.errors import TaskRepositoryError
from src.domain.create_models import TaskCreate
from src.domain.filters import TaskFilters
from src.domain.pagination import TaskPage
from src.domain.session import AuthSession
from src.domain.task import Task, TaskPriority, TaskStatus
from src.domain.update_models import TaskPriorityUpdate, TaskStatusUpdate, TaskUpdate
from src.domain.user import User


logger = logging.getLogger(__name__)

_users_adapter = TypeAdapter(list[User])


class TaskRepository(Protocol):
    """Async interface the store uses to reach the Task Repository."""

    async def list_tasks(self, *, page: int, limit: int, filters: TaskFilters) -> TaskPage: ...

    async def get_task(self, task_id: str) -> Task: ...

    async def create_task(self, data: TaskCreate) -> Task: ...

    async def update_task(self, task_id: str, data: TaskUpdate) -> Task: ...

    async def update_status(self, task_id: str, status: TaskStatus) -> Task: ...

    async def update_priority(self, task_id: str, priority: TaskPriority) -> Task: ...

    async def delete_task(self, task_id: str) -> None: ...

    async def list_users(self) -> list[User]: ...


def build_list_params(*, page: int, limit: int, filters: TaskFilters) -> dict[str, str]:
    """Encode list query parameters: page, limit and the non-empty filter keys."""
    return {"page": str(page), "limit": str(limit), **filters.to_query_params()}


def _task_path(task_id: str, suffix: str = "") -> str:
    """Path for one task, with the opaque id escaped as a single segment."""
    segment = quote(task_id, safe="")
    path = f"{constants.TASKS_PATH}/{segment}"
    return f"{path}/{suffix}" if suffix else path


def _error_message(response: httpx.Response) -> str | None:
    """Extract `{message: string}` from an error body, if present."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None


class TaskRepositoryClient:
    """Translates store operations into Task Repository HTTP calls.

    Holds no business logic beyond parameter encoding and response parsing.
    Every failure surfaces as TaskRepositoryError.
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        session: AuthSession | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if session is not None:
            headers.update(session.auth_headers())
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.task_api_base_url,
            headers=headers,
            timeout=timeout if timeout is not None else settings.task_api_timeout_seconds,
            transport=transport,
        )

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._client

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "TaskRepositoryClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        try:
            response = await self._client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            logger.warning("repository_transport_error", extra={"method": method, "path": path, "error": str(e)})
            raise TaskRepositoryError(status_code=None) from e

        if not response.is_success:
            message = _error_message(response)
            logger.info(
                "repository_error_response",
                extra={"method": method, "path": path, "status": response.status_code, "server_message": message},
            )
            raise TaskRepositoryError(message, status_code=response.status_code)
        return response

    async def _request_task(self, method: str, path: str, *, json: dict[str, Any] | None = None) -> Task:
        response = await self._request(method, path, json=json)
        try:
            return Task.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.warning("repository_malformed_task", extra={"method": method, "path": path, "error": str(e)})
            raise TaskRepositoryError(status_code=response.status_code) from e

    async def list_tasks(
        self,
        *,
        page: int,
        limit: int = constants.DEFAULT_PAGE_LIMIT,
        filters: TaskFilters,
    ) -> TaskPage:
        """GET /api/tasks with page, limit and filter query parameters."""
        params = build_list_params(page=page, limit=limit, filters=filters)
        response = await self._request("GET", constants.TASKS_PATH, params=params)
        try:
            return TaskPage.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.warning("repository_malformed_page", extra={"params": params, "error": str(e)})
            raise TaskRepositoryError(status_code=response.status_code) from e

    async def get_task(self, task_id: str) -> Task:
        """GET /api/tasks/:id."""
        return await self._request_task("GET", _task_path(task_id))

    async def create_task(self, data: TaskCreate) -> Task:
        """POST /api/tasks."""
        return await self._request_task("POST", constants.TASKS_PATH, json=data.to_payload())

    async def update_task(self, task_id: str, data: TaskUpdate) -> Task:
        """PUT /api/tasks/:id with the explicitly set fields."""
        return await self._request_task("PUT", _task_path(task_id), json=data.to_payload())

    async def update_status(self, task_id: str, status: TaskStatus) -> Task:
        """PUT /api/tasks/:id/status."""
        body = TaskStatusUpdate(status=status).model_dump(mode="json")
        return await self._request_task("PUT", _task_path(task_id, "status"), json=body)

    async def update_priority(self, task_id: str, priority: TaskPriority) -> Task:
        """PUT /api/tasks/:id/priority."""
        body = TaskPriorityUpdate(priority=priority).model_dump(mode="json")
        return await self._request_task("PUT", _task_path(task_id, "priority"), json=body)

    async def delete_task(self, task_id: str) -> None:
        """DELETE /api/tasks/:id. The response body is ignored."""
        await self._request("DELETE", _task_path(task_id))

    async def list_users(self) -> list[User]:
        """GET /api/auth/users."""
        response = await self._request("GET", constants.USERS_PATH)
        try:
            return _users_adapter.validate_python(response.json())
        except (ValueError, ValidationError) as e:
            logger.warning("repository_malformed_users", extra={"error": str(e)})
            raise TaskRepositoryError(status_code=response.status_code) from e
