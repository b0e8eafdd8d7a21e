"""Update models for Task Repository operations."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.domain.task import TaskPriority, TaskStatus


class TaskUpdate(BaseModel):
    """Partial update payload for `PUT /api/tasks/:id`.

    Only fields explicitly set by the caller are sent.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    description: str | None = None
    due_date: datetime | None = Field(default=None, alias="dueDate")
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    assigned_to: str | None = Field(default=None, alias="assignedTo")
    tags: list[str] | None = None

    def to_payload(self) -> dict:
        """Serialize the explicitly set fields to the JSON body the server expects."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class TaskStatusUpdate(BaseModel):
    """Payload for `PUT /api/tasks/:id/status`."""

    status: TaskStatus


class TaskPriorityUpdate(BaseModel):
    """Payload for `PUT /api/tasks/:id/priority`."""

    priority: TaskPriority
