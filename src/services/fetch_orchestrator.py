"""List fetching and filter-change reactivity for the task store."""

import asyncio
import logging

from src.core.config import constants, settings
from src.core.errors import RepositoryOperation, TaskRepositoryError, resolve_error_message
from src.core.logging import span
from src.domain.filters import FilterInput, TaskFilters
from src.domain.session import AuthSession
from src.interface.task_repository import TaskRepository
from src.services.state_container import StateContainer
from src.services.task_reducer import ErrorReceived, SetLoading, TasksReceived


logger = logging.getLogger(__name__)


class FetchOrchestrator:
    """Issues list fetches and folds their outcomes into the store.

    Concurrent fetches are not deduplicated or cancelled. By default whichever
    response resolves last is applied last, even if its request was issued
    first. With `discard_stale_responses` each fetch carries a sequence number
    and a response older than the last applied one is dropped.
    """

    def __init__(
        self,
        container: StateContainer,
        repository: TaskRepository,
        session: AuthSession,
        *,
        page_limit: int | None = None,
        discard_stale_responses: bool | None = None,
    ) -> None:
        self._container = container
        self._repository = repository
        self._session = session
        self._page_limit = page_limit or settings.task_page_limit
        self._discard_stale = (
            settings.discard_stale_responses if discard_stale_responses is None else discard_stale_responses
        )
        self._issued_seq = 0
        self._applied_seq = 0
        self._last_refresh_key: tuple[str | None, ...] | None = None
        self._refresh_scheduled = False
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def page_limit(self) -> int:
        return self._page_limit

    def _is_stale(self, seq: int) -> bool:
        if not self._discard_stale:
            return False
        if seq < self._applied_seq:
            logger.info("list_response_discarded", extra={"seq": seq, "applied_seq": self._applied_seq})
            return True
        self._applied_seq = seq
        return False

    async def list_tasks(self, page: int = 1, filters: TaskFilters | FilterInput | None = None) -> None:
        """Fetch one page and apply it to the store.

        Silently does nothing when the session is not authenticated. Passing no
        filters fetches without constraints.
        """
        if not self._session.is_authenticated:
            logger.debug("list_tasks_skipped", extra={"reason": "unauthenticated", "page": page})
            return

        if filters is None:
            filters = TaskFilters()
        elif not isinstance(filters, TaskFilters):
            filters = TaskFilters.from_mapping(filters)

        self._issued_seq += 1
        seq = self._issued_seq

        with span("fetch_orchestrator.list_tasks"):
            self._container.dispatch(SetLoading(loading=True))
            try:
                result = await self._repository.list_tasks(page=page, limit=self._page_limit, filters=filters)
            except TaskRepositoryError as e:
                if self._is_stale(seq):
                    return
                message = resolve_error_message(e, RepositoryOperation.LIST_TASKS)
                logger.warning("list_tasks_failed", extra={"page": page, "seq": seq, "error": message})
                self._container.dispatch(ErrorReceived(message=message))
                return

            if self._is_stale(seq):
                return
            logger.info(
                "tasks_received",
                extra={"page": page, "seq": seq, "count": len(result.tasks), "total": result.pagination.total_tasks},
            )
            self._container.dispatch(TasksReceived(tasks=result.tasks, pagination=result.pagination))

    def request_refresh(self) -> None:
        """Schedule a filter-change check on the running loop.

        Calls made before the loop next runs are coalesced into one check, which
        fetches page 1 only if the filter values differ from the last refresh.
        """
        if self._refresh_scheduled:
            return
        self._refresh_scheduled = True
        task = asyncio.get_running_loop().create_task(self._refresh_if_filters_changed())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _refresh_if_filters_changed(self) -> None:
        self._refresh_scheduled = False
        if not self._session.is_authenticated:
            return

        filters = self._container.state.filters
        if filters.key == self._last_refresh_key:
            logger.debug("filters_unchanged", extra={"filters": filters.to_query_params()})
            return

        self._last_refresh_key = filters.key
        await self.list_tasks(constants.FIRST_PAGE, filters)

    async def wait_idle(self) -> None:
        """Wait until no scheduled refresh is outstanding."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def cancel_pending(self) -> None:
        """Cancel scheduled refreshes (used on session teardown)."""
        pending = list(self._pending)
        for task in pending:
            task.cancel()
        self._refresh_scheduled = False
        await asyncio.gather(*pending, return_exceptions=True)
