"""Pytest configuration and fixtures for unit tests."""

import httpx
import pytest
from fastapi import FastAPI

from src.core.config import Settings
from src.domain.session import AuthSession
from src.domain.task import Task
from src.domain.user import User
from src.interface.task_repository import TaskRepositoryClient
from src.services.task_store import TaskStore
from tests.factories import SEED_USERS, seed_task_payloads
from tests.unit.fake_repository import create_app
from tests.unit.mocks import InMemoryTaskRepository


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the environment and any local .env file."""
    return Settings(
        _env_file=None,
        task_api_base_url="http://repository.test",
        task_page_limit=10,
        discard_stale_responses=False,
        logfire_token=None,
    )


@pytest.fixture
def repository(seed_tasks: list[Task], seed_users: list[User]) -> InMemoryTaskRepository:
    """Provides a fresh in-memory repository seeded with the demo tasks."""
    return InMemoryTaskRepository(tasks=seed_tasks, users=seed_users)


@pytest.fixture
def store(repository: InMemoryTaskRepository, session: AuthSession, test_settings: Settings) -> TaskStore:
    """Authenticated store over the in-memory repository (not started)."""
    return TaskStore(repository, session, settings=test_settings)


@pytest.fixture
def fake_app() -> FastAPI:
    """Task Repository HTTP app seeded with the demo data."""
    return create_app(tasks=seed_task_payloads(), users=SEED_USERS)


@pytest.fixture
def transport(fake_app: FastAPI) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=fake_app)


@pytest.fixture
def repository_client(transport: httpx.ASGITransport, session: AuthSession) -> TaskRepositoryClient:
    """HTTP client wired to the fake repository app."""
    return TaskRepositoryClient(base_url="http://repository.test", session=session, transport=transport)
