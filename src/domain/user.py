"""User domain models and enums."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class UserRole(StrEnum):
    """User role in the workspace."""

    ADMIN = "admin"
    USER = "user"


class User(BaseModel):
    """Assignable user returned by the Auth Service."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., alias="_id", description="Unique user ID")
    name: str = Field(..., description="Display name of the user")
    email: str = Field(..., description="Email address")
    role: UserRole = Field(default=UserRole.USER, description="User role")
