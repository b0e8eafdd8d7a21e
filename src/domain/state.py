"""Store state held by the task store."""

from pydantic import BaseModel, ConfigDict, Field

from src.domain.filters import TaskFilters
from src.domain.pagination import Pagination
from src.domain.task import Task


class StoreState(BaseModel):
    """Immutable snapshot of the client-side task view.

    `tasks` is the current page in server order. `counts_stale` is raised by
    local create/delete folds, which leave `pagination.total_tasks` untouched,
    and cleared by the next full list fetch.
    """

    model_config = ConfigDict(frozen=True)

    tasks: tuple[Task, ...] = Field(default=())
    pagination: Pagination = Field(default_factory=Pagination)
    loading: bool = False
    error: str | None = None
    filters: TaskFilters = Field(default_factory=TaskFilters)
    counts_stale: bool = False

    def find_task(self, task_id: str) -> Task | None:
        """Return the task with `task_id` on the current page, if loaded."""
        return next((task for task in self.tasks if task.id == task_id), None)


def initial_state() -> StoreState:
    """State at session start: no tasks, page 1, empty filters."""
    return StoreState()
