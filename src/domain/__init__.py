"""Domain models and DTOs."""

from src.domain.create_models import TaskCreate
from src.domain.filters import TaskFilters
from src.domain.pagination import Pagination, TaskPage
from src.domain.session import AuthSession
from src.domain.state import StoreState, initial_state
from src.domain.task import Task, TaskPriority, TaskStatus, UserRef
from src.domain.update_models import TaskPriorityUpdate, TaskStatusUpdate, TaskUpdate
from src.domain.user import User, UserRole


__all__ = [
    "AuthSession",
    "Pagination",
    "StoreState",
    "Task",
    "TaskCreate",
    "TaskFilters",
    "TaskPage",
    "TaskPriority",
    "TaskPriorityUpdate",
    "TaskStatus",
    "TaskStatusUpdate",
    "TaskUpdate",
    "User",
    "UserRef",
    "UserRole",
    "initial_state",
]
