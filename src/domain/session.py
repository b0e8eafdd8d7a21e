"""Authenticated session snapshot handed over by the Auth Service."""

from pydantic import BaseModel, ConfigDict, Field

from src.domain.user import User


class AuthSession(BaseModel):
    """Credentials and identity for the current session.

    Token issuance happens elsewhere; the task store only reads this snapshot.
    """

    model_config = ConfigDict(frozen=True)

    token: str | None = Field(default=None, description="Bearer token for the Task Repository")
    user: User | None = Field(default=None, description="Signed-in user")

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def auth_headers(self) -> dict[str, str]:
        """Return the Authorization header for repository calls, if any."""
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}
