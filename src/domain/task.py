"""Task domain models and enums."""

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


def as_aware(value: datetime) -> datetime:
    """Read a naive datetime as local time and return it in UTC; aware values pass through."""
    return value.astimezone(UTC) if value.tzinfo is None else value


class TaskPriority(StrEnum):
    """How urgent a task is."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class TaskStatus(StrEnum):
    """Task lifecycle status."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class UserRef(BaseModel):
    """Snapshot of a user embedded in a task (creator or assignee)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., alias="_id", description="User ID")
    name: str = Field(..., description="Display name at the time of the snapshot")
    email: str = Field(default="", description="Email at the time of the snapshot")


class Task(BaseModel):
    """Task snapshot as returned by the Task Repository.

    Instances are immutable; the client only ever replaces a task with a newer
    server response, it never edits fields locally.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., alias="_id", description="Opaque task identifier")
    title: str = Field(..., description="Task title")
    description: str = Field(default="", description="Detailed task description")
    due_date: datetime = Field(..., alias="dueDate", description="When the task is due")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="Task priority")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Task status")
    tags: tuple[str, ...] = Field(default=(), description="Ordered tags")
    created_by: UserRef = Field(..., alias="createdBy", description="Creator snapshot")
    assigned_to: UserRef | None = Field(default=None, alias="assignedTo", description="Assignee snapshot")
    created_at: datetime = Field(..., alias="createdAt", description="Creation timestamp")
    updated_at: datetime = Field(..., alias="updatedAt", description="Last update timestamp")

    def is_overdue(self, now: datetime) -> bool:
        """Return True when the due date has passed and the task is not completed.

        A naive `now` is read as local time.
        """
        return as_aware(self.due_date) < as_aware(now) and self.status != TaskStatus.COMPLETED
