"""Pydantic models for creating records through the Task Repository."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.domain.task import TaskPriority, TaskStatus


class TaskCreate(BaseModel):
    """Payload for `POST /api/tasks` (task fields minus id and timestamps)."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, description="Task title")
    description: str = Field(default="", description="Detailed task description")
    due_date: datetime = Field(..., alias="dueDate", description="When the task is due")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="Task priority")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Initial status")
    assigned_to: str | None = Field(default=None, alias="assignedTo", description="Assignee user ID")
    tags: list[str] = Field(default_factory=list, description="Ordered tags")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Strip surrounding whitespace and reject blank titles."""
        v = v.strip()
        if not v:
            raise ValueError("Title cannot be empty")
        return v

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: list[str]) -> list[str]:
        """Drop blank tags, keeping order."""
        return [tag.strip() for tag in v if tag.strip()]

    def to_payload(self) -> dict:
        """Serialize to the JSON body the server expects."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
