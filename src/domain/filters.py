"""Filter set applied to task list queries."""

import logging
from collections.abc import Mapping
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.domain.task import TaskPriority, TaskStatus


logger = logging.getLogger(__name__)


# Wire name -> field name for every recognised filter key
_KEY_FIELDS: dict[str, str] = {
    "status": "status",
    "priority": "priority",
    "search": "search",
    "assignedTo": "assigned_to",
    "assigned_to": "assigned_to",
    "createdBy": "created_by",
    "created_by": "created_by",
}

# Fields whose values must be one of a fixed set
_ENUM_FIELDS: dict[str, type[StrEnum]] = {"status": TaskStatus, "priority": TaskPriority}

FilterInput = Mapping[str, object]


class TaskFilters(BaseModel):
    """Normalized, order-independent filter set.

    An absent key (None) means "no constraint". Blank strings normalise to None,
    so two filter sets built along different paths compare equal whenever their
    recognised key/value pairs match.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    search: str | None = None
    assigned_to: str | None = Field(default=None, alias="assignedTo")
    created_by: str | None = Field(default=None, alias="createdBy")

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        """Treat empty and whitespace-only values as an absent key."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @classmethod
    def from_mapping(cls, data: FilterInput) -> "TaskFilters":
        """Build a filter set from a loose mapping, ignoring unrecognised keys."""
        return cls.model_validate(_recognised_items(data))

    @property
    def key(self) -> tuple[str | None, ...]:
        """Value tuple over the recognised keys, used for change detection."""
        return (
            self.status.value if self.status else None,
            self.priority.value if self.priority else None,
            self.search,
            self.assigned_to,
            self.created_by,
        )

    @property
    def is_empty(self) -> bool:
        return all(value is None for value in self.key)

    def merge(self, partial: "FilterInput | TaskFilters") -> "TaskFilters":
        """Return a new filter set with the keys present in `partial` overriding ours.

        Keys absent from `partial` are preserved. A key present with a blank or
        None value removes that constraint.
        """
        if isinstance(partial, TaskFilters):
            updates = partial.model_dump(include=partial.model_fields_set)
        else:
            updates = _recognised_items(partial)

        if not updates:
            return self

        merged = TaskFilters.model_validate({**self.model_dump(), **updates})
        return self if merged.key == self.key else merged

    def to_query_params(self) -> dict[str, str]:
        """Return only the non-empty recognised keys, using their wire names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def _recognised_items(data: FilterInput) -> dict[str, object]:
    """Map wire or field names onto field names, dropping unknown keys.

    Status and priority are matched case-insensitively. A value outside their
    fixed set is logged and dropped, leaving that key as it was.
    """
    items: dict[str, object] = {}
    for name, value in data.items():
        field_name = _KEY_FIELDS.get(name)
        if field_name is None:
            logger.debug("filter_key_ignored", extra={"key": name})
            continue

        enum_type = _ENUM_FIELDS.get(field_name)
        if enum_type is not None and value is not None and not isinstance(value, enum_type):
            candidate = value.strip().lower() if isinstance(value, str) else value
            if candidate != "" and candidate not in [member.value for member in enum_type]:
                logger.warning("filter_value_ignored", extra={"key": name, "value": repr(value)})
                continue
            value = candidate
        items[field_name] = value
    return items
