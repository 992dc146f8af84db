"""
Notekeeper Backend: Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the test suite.
How:   Every test that touches the database gets a fresh SQLite file in
       pytest's tmp_path, driven through aiosqlite, so no PostgreSQL server
       is needed.

Fixture Hierarchy (all function-scoped):
    ├── db_engine:        process-wide engine pointed at a temporary database
    ├── db_session:       AsyncSession from that engine
    ├── session_factory:  opens additional independent sessions
    ├── test_client:      HTTPX AsyncClient talking to the FastAPI app
    └── valid_payload:    a note payload that passes validation
"""

import os

# Must run before notekeeper.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DB_CREATE_TABLES"] = "true"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from notekeeper import database


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """
    Initialize the process-wide engine on a throwaway SQLite file.

    The notes table is created up front; the engine is disposed afterwards
    so each test starts from an empty database.
    """
    engine = database.init_engine(f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}")
    await database.create_tables()
    yield engine
    await database.dispose_engine()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    """The session factory bound to the test engine."""
    return database.async_session_factory


@pytest_asyncio.fixture
async def db_session(session_factory):
    """
    Provides an AsyncSession on the test database.

    Usage:
        async def test_create(db_session, valid_note):
            note = await note_store.create(db_session, valid_note)
    """
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(db_engine):
    """
    Async HTTP client routed straight into the app (no server).

    ASGITransport does not run the lifespan, so the engine comes from the
    db_engine fixture instead of startup.
    """
    from notekeeper.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def valid_payload():
    """A payload with every field valid."""
    return {
        "title": "Shopping list",
        "text": "Milk, eggs, bread",
        "datetime": "2023-01-01T00:00:00Z",
    }
