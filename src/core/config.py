"""Configuration management for the task store client."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Task Repository Configuration
    task_api_base_url: str = Field(default="http://127.0.0.1:5000", description="Task Repository server URL")
    task_api_timeout_seconds: float = Field(default=30.0, description="Per-request timeout for repository calls")
    task_page_limit: int = Field(default=10, ge=1, description="Page size sent as the `limit` list parameter")

    # Store behaviour
    discard_stale_responses: bool = Field(
        default=False,
        description="Drop list responses that resolve after a newer request's response was applied",
    )

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="development", description="Deployment environment name")

    def require_credential(self, field_name: str, service_name: str) -> str:
        """Validate that a required credential is set, raising a clear error if missing.

        Args:
            field_name: Name of the field to check
            service_name: Human-readable service name for error message

        Returns:
            The credential value

        Raises:
            ValueError: If the credential is None or empty
        """
        value = getattr(self, field_name)
        if not value:
            raise ValueError(
                f"{service_name} credential not configured. "
                f"Set {field_name.upper()} environment variable or add to .env file."
            )
        return value


# Application Constants
class Constants:
    """Application-wide constants."""

    # API Paths
    TASKS_PATH: str = "/api/tasks"
    USERS_PATH: str = "/api/auth/users"

    # Pagination Defaults
    DEFAULT_PAGE_LIMIT: int = 10  # Page size the task list views are built around
    FIRST_PAGE: int = 1

    # Dashboard
    DASHBOARD_PREVIEW_SIZE: int = 5  # Rows shown in the recent/upcoming panels


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
