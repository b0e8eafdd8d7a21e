"""Pytest configuration and shared fixtures."""

from datetime import datetime

import pytest

from src.domain.session import AuthSession
from src.domain.task import Task
from src.domain.user import User
from tests.factories import NOW, SEED_USERS, seed_task_payloads


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def seed_tasks() -> list[Task]:
    return [Task.model_validate(payload) for payload in seed_task_payloads()]


@pytest.fixture
def seed_users() -> list[User]:
    return [User.model_validate(user) for user in SEED_USERS]


@pytest.fixture
def session(seed_users: list[User]) -> AuthSession:
    """Authenticated session for the demo admin."""
    return AuthSession(token="test-token", user=seed_users[0])


@pytest.fixture
def anonymous_session() -> AuthSession:
    return AuthSession()
