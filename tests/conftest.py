"""
AttnViz Backend: Test Configuration (conftest.py)
====================================================

Shared pytest fixtures for the entire test suite.

Fixture Hierarchy (all function-scoped, fresh per test):
    ├── app_settings: Settings pointing at a temp-file SQLite database
    ├── text_store: TextStore with the schema created
    ├── mock_db_session: Mock async session (no real DB) for failure paths
    ├── mock_session_factory: Session factory handing out mock_db_session
    ├── app / test_client: App built by create_app(), lifespan entered,
    │                      driven through an HTTPX AsyncClient
    └── strict_client: Same, with strict payload decoding enabled
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Settings are read at import time; point them at a throwaway database
# BEFORE anything from attnviz is imported
os.environ["DATABASE_URL"] = (
    f"sqlite+aiosqlite:///{tempfile.mkdtemp(prefix='attnviz_test_')}/import.db"
)
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from attnviz.config import Settings
from attnviz.main import create_app
from attnviz.services.text_store import TextStore


def _sqlite_settings(tmp_path, **overrides) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        log_level="WARNING",
        **overrides,
    )


@pytest.fixture
def app_settings(tmp_path):
    return _sqlite_settings(tmp_path)


@pytest_asyncio.fixture
async def text_store(app_settings):
    """A TextStore over a fresh, empty database."""
    store = TextStore.from_settings(app_settings)
    await store.create_schema()
    yield store
    await store.close()


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        store._session_factory = mock_session_factory
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.get = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def mock_session_factory(mock_db_session):
    """A stand-in async_sessionmaker whose sessions are all mock_db_session."""
    factory = MagicMock()
    factory.return_value.__aenter__ = AsyncMock(return_value=mock_db_session)
    factory.return_value.__aexit__ = AsyncMock(return_value=False)
    return factory


@pytest.fixture
def app(app_settings):
    return create_app(app_settings)


async def _client_for(application):
    async with application.router.lifespan_context(application):
        transport = ASGITransport(app=application)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient talking to the app in-process.

    ASGITransport does not send lifespan events, so the lifespan (which
    creates the `texts` table) is entered explicitly.
    """
    async for client in _client_for(app):
        yield client


@pytest_asyncio.fixture
async def strict_client(tmp_path):
    """Like test_client, but malformed payloads are rejected with 400."""
    application = create_app(_sqlite_settings(tmp_path, strict_payload_decoding=True))
    async for client in _client_for(application):
        yield client
