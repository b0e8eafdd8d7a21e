"""Pure state transitions for the client-side task store.

`reduce(state, action)` maps a StoreState and an action to the next StoreState.
No I/O happens here. Transitions that change nothing return the same state
object, so callers can detect a no-op with an identity check.
"""

from dataclasses import dataclass, field

from src.domain.filters import FilterInput, TaskFilters
from src.domain.pagination import Pagination
from src.domain.state import StoreState
from src.domain.task import Task


@dataclass(frozen=True)
class SetLoading:
    """Toggle the loading flag; existing tasks stay visible."""

    loading: bool


@dataclass(frozen=True)
class TasksReceived:
    """A full page arrived from the server."""

    tasks: tuple[Task, ...]
    pagination: Pagination


@dataclass(frozen=True)
class ErrorReceived:
    """A list fetch failed; existing tasks stay visible."""

    message: str


@dataclass(frozen=True)
class TaskCreated:
    task: Task


@dataclass(frozen=True)
class TaskUpdated:
    task: Task


@dataclass(frozen=True)
class TaskDeleted:
    task_id: str


@dataclass(frozen=True)
class FiltersSet:
    """Merge the given keys into the active filter set."""

    partial: FilterInput | TaskFilters = field(default_factory=dict)


@dataclass(frozen=True)
class FiltersCleared:
    """Reset the filter set to empty."""


Action = SetLoading | TasksReceived | ErrorReceived | TaskCreated | TaskUpdated | TaskDeleted | FiltersSet | FiltersCleared


def _with(state: StoreState, **changes: object) -> StoreState:
    """Copy `state` with `changes`, or return it untouched if nothing differs."""
    if all(getattr(state, name) == value for name, value in changes.items()):
        return state
    return state.model_copy(update=changes)


def reduce(state: StoreState, action: Action) -> StoreState:  # noqa: PLR0911
    """Apply one action to the store state."""
    match action:
        case SetLoading(loading=loading):
            return _with(state, loading=loading)

        case TasksReceived(tasks=tasks, pagination=pagination):
            # The only transition allowed to replace the whole list
            return _with(
                state,
                tasks=tuple(tasks),
                pagination=pagination,
                loading=False,
                error=None,
                counts_stale=False,
            )

        case ErrorReceived(message=message):
            return _with(state, error=message, loading=False)

        case TaskCreated(task=task):
            # Prepend; total_tasks is deliberately not adjusted until the next fetch
            rest = tuple(existing for existing in state.tasks if existing.id != task.id)
            return _with(state, tasks=(task, *rest), counts_stale=True)

        case TaskUpdated(task=task):
            if state.find_task(task.id) is None:
                return state
            tasks = tuple(task if existing.id == task.id else existing for existing in state.tasks)
            return _with(state, tasks=tasks)

        case TaskDeleted(task_id=task_id):
            if state.find_task(task_id) is None:
                return state
            tasks = tuple(existing for existing in state.tasks if existing.id != task_id)
            return _with(state, tasks=tasks, counts_stale=True)

        case FiltersSet(partial=partial):
            merged = state.filters.merge(partial)
            if merged is state.filters:
                return state
            return state.model_copy(update={"filters": merged})

        case FiltersCleared():
            if state.filters.is_empty:
                return state
            return state.model_copy(update={"filters": TaskFilters()})

    raise TypeError(f"Unknown task store action: {action!r}")
