"""Session-scoped task store handle.

A TaskStore is created for one authenticated session and handed to views
explicitly. It combines the state container, the fetch orchestrator and the
mutation coordinator behind one API.

Usage:
    async with task_store_context(session) as store:
        store.set_filters({"priority": "urgent"})
        await store.wait_idle()
        print(store.state.tasks)
"""

import logging
from collections.abc import AsyncIterator, Callable, Mapping
from contextlib import asynccontextmanager

import httpx

from src.core.config import Settings, settings as default_settings
from src.core.errors import TaskRepositoryError
from src.core.logging import instrument_httpx
from src.domain.create_models import TaskCreate
from src.domain.filters import FilterInput, TaskFilters
from src.domain.session import AuthSession
from src.domain.state import StoreState
from src.domain.task import TaskPriority, TaskStatus
from src.domain.update_models import TaskUpdate
from src.domain.user import User
from src.interface.task_repository import TaskRepository, TaskRepositoryClient
from src.services.fetch_orchestrator import FetchOrchestrator
from src.services.mutation_coordinator import MutationCoordinator, MutationResult
from src.services.state_container import Listener, StateContainer
from src.services.task_reducer import FiltersCleared, FiltersSet


logger = logging.getLogger(__name__)


class TaskStore:
    """Task state for one session plus the operations views call."""

    def __init__(
        self,
        repository: TaskRepository,
        session: AuthSession,
        *,
        settings: Settings | None = None,
    ) -> None:
        config = settings or default_settings
        self._repository = repository
        self._session = session
        self._container = StateContainer()
        self._fetcher = FetchOrchestrator(
            self._container,
            repository,
            session,
            page_limit=config.task_page_limit,
            discard_stale_responses=config.discard_stale_responses,
        )
        self._mutations = MutationCoordinator(self._container, repository)

    @property
    def state(self) -> StoreState:
        return self._container.state

    @property
    def session(self) -> AuthSession:
        return self._session

    @property
    def page_limit(self) -> int:
        return self._fetcher.page_limit

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self._container.subscribe(listener)

    def start(self) -> None:
        """Schedule the initial fetch with the active filters."""
        self._fetcher.request_refresh()

    async def wait_idle(self) -> None:
        await self._fetcher.wait_idle()

    async def close(self) -> None:
        """Drop scheduled refreshes at session teardown."""
        await self._fetcher.cancel_pending()

    # Listing

    async def list_tasks(self, page: int = 1, filters: TaskFilters | FilterInput | None = None) -> None:
        await self._fetcher.list_tasks(page, filters)

    async def next_page(self) -> None:
        pagination = self.state.pagination
        if not pagination.has_next_page:
            return
        await self._fetcher.list_tasks(pagination.current_page + 1, self.state.filters)

    async def prev_page(self) -> None:
        pagination = self.state.pagination
        if not pagination.has_prev_page:
            return
        await self._fetcher.list_tasks(pagination.current_page - 1, self.state.filters)

    # Filters

    def set_filters(self, partial: TaskFilters | FilterInput) -> None:
        """Merge filter keys and schedule a refresh if their values changed."""
        self._container.dispatch(FiltersSet(partial=partial))
        self._fetcher.request_refresh()

    def clear_filters(self) -> None:
        """Reset to the empty filter set and schedule a refresh if that is a change."""
        self._container.dispatch(FiltersCleared())
        self._fetcher.request_refresh()

    # Mutations

    async def create_task(self, data: TaskCreate | Mapping[str, object]) -> MutationResult:
        return await self._mutations.create(data)

    async def update_task(self, task_id: str, data: TaskUpdate | Mapping[str, object]) -> MutationResult:
        return await self._mutations.update(task_id, data)

    async def update_task_status(self, task_id: str, status: TaskStatus | str) -> MutationResult:
        return await self._mutations.update_status(task_id, status)

    async def update_task_priority(self, task_id: str, priority: TaskPriority | str) -> MutationResult:
        return await self._mutations.update_priority(task_id, priority)

    async def delete_task(self, task_id: str) -> MutationResult:
        return await self._mutations.delete(task_id)

    async def get_task_by_id(self, task_id: str) -> MutationResult:
        return await self._mutations.get_by_id(task_id)

    # Collaborators

    async def list_assignable_users(self) -> list[User]:
        """Users a task can be assigned to; empty when the lookup fails."""
        try:
            return await self._repository.list_users()
        except TaskRepositoryError as e:
            logger.warning("list_users_failed", extra={"status": e.status_code, "error": str(e)})
            return []


@asynccontextmanager
async def task_store_context(
    session: AuthSession,
    *,
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[TaskStore]:
    """Create a store for `session`, start it, and tear it down on exit (logout)."""
    config = settings or default_settings
    async with TaskRepositoryClient(
        base_url=config.task_api_base_url,
        session=session,
        timeout=config.task_api_timeout_seconds,
        transport=transport,
    ) as client:
        if config.logfire_token:
            instrument_httpx(client.http_client)
        store = TaskStore(client, session, settings=config)
        store.start()
        logger.info("task_store_started", extra={"authenticated": session.is_authenticated})
        try:
            yield store
        finally:
            await store.close()
            logger.info("task_store_closed")
