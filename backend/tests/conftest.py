"""
Review Board Backend — Test Configuration (conftest.py)
========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test that touches storage gets its own SQLite file under
       pytest's tmp_path, so tests never share rows or id counters.

Fixture Overview:
    ├── database_url:   sqlite+aiosqlite URL of a fresh file in tmp_path
    ├── test_settings:  Settings pointing at that file
    ├── store:          Opened + initialized ReviewStore on that file
    ├── mock_store:     AsyncMock standing in for ReviewStore
    ├── test_app:       create_app(test_settings)
    └── test_client:    HTTPX AsyncClient with the app lifespan running
"""

import os
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Override settings for testing BEFORE any app imports, so the module-level
# app in reviewboard.main never points at ./reviews.db
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"

from reviewboard.config import Settings  # noqa: E402
from reviewboard.main import create_app  # noqa: E402
from reviewboard.store import ReviewStore  # noqa: E402


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'reviews.db'}"


@pytest.fixture
def test_settings(database_url):
    return Settings(database_url=database_url, log_level="WARNING")


@pytest_asyncio.fixture
async def store(database_url):
    """A ReviewStore on a fresh file, already opened and initialized."""
    review_store = ReviewStore(database_url)
    await review_store.open()
    await review_store.initialize()
    yield review_store
    await review_store.close()


@pytest.fixture
def mock_store():
    """
    AsyncMock with ReviewStore's interface and an empty table.

    Used where a test needs a store call to fail on demand.
    """
    review_store = AsyncMock(spec=ReviewStore)
    review_store.max_id.return_value = None
    review_store.list_all.return_value = []
    return review_store


@pytest.fixture
def test_app(test_settings):
    return create_app(test_settings)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient talking to the app in-process.

    ASGITransport does not send lifespan events, so the lifespan is entered
    here explicitly: the ReviewService is started exactly as under uvicorn.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/reviews")
            assert response.status_code == 200
    """
    async with test_app.router.lifespan_context(test_app):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
