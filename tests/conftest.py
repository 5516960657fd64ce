"""
Pytest configuration and fixtures for testing.

This module provides shared fixtures for database sessions, repositories
and an HTTP client running the full application on a throwaway database.
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set environment variables for testing before importing app modules
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_FILE_PATH", os.devnull)
os.environ.setdefault("DB_INIT_RETRY_INTERVAL", "0")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

from novels_api.repositories.base import BaseRepository  # noqa: E402


@pytest.fixture
def mock_session():
    """
    Provides a mock AsyncSession for testing.

    Returns:
        AsyncMock: Mocked database session
    """
    session = AsyncMock(spec=AsyncSession)
    session.add = MagicMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.rollback = AsyncMock()
    session.exec = AsyncMock()
    session.get = AsyncMock()
    session.delete = AsyncMock()
    return session


@pytest.fixture
def mock_repository():
    """
    Provides a generic mock repository with common CRUD methods.

    ``model`` is left unset; tests assign the model class they exercise.

    Returns:
        AsyncMock: Mocked BaseRepository instance
    """
    repo_mock = AsyncMock(spec=BaseRepository)
    repo_mock.get_by_id = AsyncMock(return_value=None)
    repo_mock.get_all = AsyncMock(return_value=[])
    repo_mock.create = AsyncMock()
    repo_mock.update = AsyncMock()
    repo_mock.delete = AsyncMock()
    return repo_mock


@pytest.fixture
def client(monkeypatch):
    """
    Provides a TestClient for the full application on a fresh database.

    Every test gets its own in-memory SQLite database; the application
    lifespan creates the tables on startup.

    Yields:
        TestClient: Client bound to the running application
    """
    from novels_api import application
    from novels_api.storage import db

    test_engine = db.create_engine("sqlite+aiosqlite://")
    monkeypatch.setattr(db, "engine", test_engine)
    monkeypatch.setattr(
        db,
        "async_session",
        sessionmaker(test_engine, expire_on_commit=False, class_=AsyncSession),
    )

    with TestClient(application()) as test_client:
        yield test_client


@pytest.fixture
def create_author(client):
    """
    Returns a helper creating an author through the API.

    Returns:
        Callable: ``create_author(name, **fields)`` returning the author dict
    """

    def _create(name: str = "Isaac Asimov", **fields):
        response = client.post("/api/authors", json={"name": name, **fields})
        assert response.status_code == 201, response.text
        return response.json()["author"]

    return _create


@pytest.fixture
def create_novel(client):
    """
    Returns a helper creating a novel through the API.

    Returns:
        Callable: ``create_novel(name, **fields)`` returning the novel dict
    """

    def _create(name: str = "Foundation", **fields):
        response = client.post("/api/novels", json={"name": name, **fields})
        assert response.status_code == 201, response.text
        return response.json()["novel"]

    return _create


@pytest.fixture
def create_character(client):
    """
    Returns a helper creating a character through the API.

    Returns:
        Callable: ``create_character(name, **fields)`` returning the dict
    """

    def _create(name: str = "Hari Seldon", **fields):
        response = client.post(
            "/api/characters", json={"name": name, **fields}
        )
        assert response.status_code == 201, response.text
        return response.json()["character"]

    return _create
