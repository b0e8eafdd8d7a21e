"""Pagination descriptor for task list pages."""

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from src.domain.task import Task


class Pagination(BaseModel):
    """Position of the current page within the full result set.

    `has_next_page` and `has_prev_page` are derived from the page numbers
    rather than trusted from the server, so they always agree with them.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    current_page: int = Field(default=1, ge=1, alias="currentPage")
    total_pages: int = Field(default=1, alias="totalPages")
    total_tasks: int = Field(default=0, ge=0, alias="totalTasks")

    @field_validator("total_pages")
    @classmethod
    def at_least_one_page(cls, v: int) -> int:
        """An empty result set still has one (empty) page."""
        return max(v, 1)

    @computed_field(alias="hasNextPage")  # type: ignore[prop-decorator]
    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @computed_field(alias="hasPrevPage")  # type: ignore[prop-decorator]
    @property
    def has_prev_page(self) -> bool:
        return self.current_page > 1


class TaskPage(BaseModel):
    """Body of a successful `GET /api/tasks` response."""

    model_config = ConfigDict(frozen=True)

    tasks: tuple[Task, ...]
    pagination: Pagination


def result_window(pagination: Pagination, limit: int) -> tuple[int, int, int]:
    """Return the 1-based (first, last, total) row numbers shown on the current page."""
    total = pagination.total_tasks
    if total == 0:
        return (0, 0, 0)
    first = (pagination.current_page - 1) * limit + 1
    last = min(pagination.current_page * limit, total)
    return (min(first, total), last, total)

