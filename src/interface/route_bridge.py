"""Bridge between view routes / the search form and the task store filters.

Route handlers call into this bridge on mount and whenever their URL
parameters change. Repeated pushes of value-equal filters are absorbed by the
store's change detection, so they never cause repeated fetches.
"""

import logging
import re
from enum import Enum

from src.domain.task import TaskPriority
from src.services.task_store import TaskStore


logger = logging.getLogger(__name__)


_PRIORITY_ROUTE = re.compile(r"^/tasks/priority/(?P<priority>[^/]+)/?$")
_ALL_TASKS_ROUTE = re.compile(r"^/tasks/?$")


class RouteKind(Enum):
    """Routes that affect the task list filters."""

    ALL_TASKS = "all_tasks"
    PRIORITY = "priority"
    OTHER = "other"


def classify_route(path: str) -> tuple[RouteKind, TaskPriority | None]:
    """Work out which filter-bearing route `path` is, if any.

    An unknown priority segment is treated as a route that leaves filters alone.
    """
    path = path.split("?", 1)[0]
    if _ALL_TASKS_ROUTE.match(path):
        return RouteKind.ALL_TASKS, None

    match = _PRIORITY_ROUTE.match(path)
    if match:
        raw = match.group("priority").lower()
        try:
            return RouteKind.PRIORITY, TaskPriority(raw)
        except ValueError:
            logger.warning("route_priority_unknown", extra={"path": path, "priority": raw})
    return RouteKind.OTHER, None


class RouteFilterBridge:
    """Pushes route and search-form state into a TaskStore."""

    def __init__(self, store: TaskStore) -> None:
        self._store = store

    def on_route(self, path: str) -> RouteKind:
        """Apply the filters implied by `path`.

        `/tasks` clears every filter and `/tasks/priority/<p>` sets the priority
        filter. Detail, edit, create and dashboard routes leave filters untouched.
        """
        kind, priority = classify_route(path)
        if kind is RouteKind.ALL_TASKS:
            self._store.clear_filters()
        elif kind is RouteKind.PRIORITY:
            self._store.set_filters({"priority": priority})
        logger.debug("route_applied", extra={"path": path, "route": kind.value})
        return kind

    def apply_search_form(self, *, search: str = "", status: str = "", priority: str = "") -> None:
        """Replace the form-controlled keys; an emptied field drops its constraint."""
        self._store.set_filters({"search": search, "status": status, "priority": priority})

    def reset_search_form(self) -> None:
        self._store.clear_filters()
