"""
Notekeeper Backend: Database Engine & Session Management
==========================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI session dependency.
How:   One process-wide engine owns the connection pool. It is created by
       `init_engine()` during application startup and drained by
       `dispose_engine()` at shutdown. Each request borrows a connection
       through `get_db_session()`, which commits on success, rolls back on
       error, and always returns the connection to the pool.
Who:   The lifespan handler in main.py, route handlers via Depends(), tests.

Connection Pooling Strategy:
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for spikes (total max = 30)
    pool_pre_ping:     Validates connections before use
    pool_recycle=3600: Recycles connections every hour

    SQLite URLs (tests, local experiments) skip these options and use
    SQLAlchemy's default pool for the dialect.
"""

import logging
from typing import AsyncGenerator, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from notekeeper.config import settings

logger = logging.getLogger(__name__)


# ── Process-wide state ────────────────────────────────────────────────────
# Both are None until init_engine() runs, and reset by dispose_engine().
engine: Optional[AsyncEngine] = None
async_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which `create_tables()` uses to
    create the schema on startup.
    """
    pass


def _engine_options(database_url: str) -> dict:
    """Pool options for the given URL; empty for SQLite."""
    if make_url(database_url).get_backend_name() == "sqlite":
        return {}
    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": settings.db_pool_pre_ping,
        "pool_recycle": 3600,
    }


def init_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """
    Create the process-wide engine and session factory.

    What:  Builds the connection pool for `database_url` (defaults to
           settings.database_url).
    When:  Once at startup; tests call it with a temporary SQLite URL.

    Calling it again replaces the previous engine without disposing it;
    callers that re-initialize are expected to dispose first.
    """
    global engine, async_session_factory

    url = database_url or settings.database_url
    engine = create_async_engine(
        url,
        # Echo SQL only when debugging; it is very noisy
        echo=settings.log_level == "DEBUG",
        **_engine_options(url),
    )
    # expire_on_commit=False: returned notes stay readable after commit,
    # when the route serializes them.
    async_session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    logger.info("Database engine initialized (%s)", make_url(url).render_as_string(hide_password=True))
    return engine


def get_engine() -> AsyncEngine:
    """Returns the live engine, failing loudly if startup never ran."""
    if engine is None:
        raise RuntimeError("Database engine is not initialized; call init_engine() first")
    return engine


async def create_tables() -> None:
    """
    Create all tables registered on Base.metadata if they do not exist.

    There is no migration tooling; this only ever adds missing tables.
    """
    # Register models with Base.metadata before create_all
    from notekeeper.models import note  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory (borrows a pooled connection)
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back, then re-raises for the global error handler
        5. Always: closes the session (returns the connection to the pool)

    Example usage in a route:
        @router.get("/notes")
        async def list_notes(db: AsyncSession = Depends(get_db_session)):
            return await note_store.read_all(db)
    """
    if async_session_factory is None:
        raise RuntimeError("Database engine is not initialized; call init_engine() first")

    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            # Roll back for any failure, including ones raised after the query
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """
    What:  Closes every pooled connection and forgets the engine.
    When:  Application shutdown (lifespan handler) and test teardown.
    """
    global engine, async_session_factory

    if engine is not None:
        await engine.dispose()
        logger.info("Database engine disposed")
    engine = None
    async_session_factory = None
