from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator
from urllib.parse import urlsplit

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from campsite_api.settings import get_settings

logger = logging.getLogger(__name__)


def _validate_database_url(database_url: str) -> str:
    """Perform lightweight structural checks on the resolved database URL.

    PostgreSQL URLs must carry a host and a database name; SQLite URLs must
    name a file or ``:memory:``.  Failing here gives operators one clear error
    instead of a driver traceback on the first request.
    """

    parts = urlsplit(database_url)
    if database_url.startswith("sqlite"):
        if not parts.path or parts.path == "/":
            raise RuntimeError(
                "SQLite DATABASE_URL is missing a database path (e.g. sqlite+aiosqlite:///./data/campsites.db)."
            )
        return database_url

    if not parts.hostname or not parts.path or parts.path == "/":
        raise RuntimeError(
            "DATABASE_URL appears malformed. Verify the host and database name are present."
        )
    return database_url


def get_database_url() -> str:
    """Return the validated async database URL for the configured backend."""

    return _validate_database_url(get_settings().resolved_database_url)


def get_database_type() -> str:
    """Return ``postgresql`` or ``sqlite`` for the configured backend."""

    return get_settings().database_type


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _ensure_sqlite_directory(url: str) -> None:
    path = urlsplit(url).path
    # sqlite+aiosqlite:///./data/x.db -> "/./data/x.db"
    relative = path[1:] if path.startswith("/") else path
    if relative and relative != ":memory:":
        Path(relative).parent.mkdir(parents=True, exist_ok=True)


def create_engine(url: str | None = None) -> AsyncEngine:
    """Create the async SQLAlchemy engine for the configured database.

    PostgreSQL engines keep a warm pool; SQLite engines enable foreign key
    enforcement on every connection so cascading deletes behave the same way
    on both backends.
    """

    url = url or get_database_url()
    echo = get_settings().sql_echo

    if url.startswith("sqlite"):
        _ensure_sqlite_directory(url)
        engine = create_async_engine(url, future=True, echo=echo)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        url,
        future=True,
        echo=echo,
        pool_size=10,  # Maintain 10 warm connections
        max_overflow=20,  # Allow up to 30 total connections
        pool_pre_ping=True,  # Validate connections before use
        pool_recycle=1800,  # Recycle connections every 30 min
        pool_timeout=30,  # Timeout for getting connection from pool
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


@asynccontextmanager
async def get_session(engine: AsyncEngine | None = None):
    engine = engine or get_engine()
    session_factory = create_session_factory(engine)
    async with session_factory() as session:
        yield session


@asynccontextmanager
async def begin_engine_transaction(engine: AsyncEngine) -> AsyncIterator[Any]:
    """Yield a connection from ``engine.begin()`` with mock-friendly support."""

    begin_result = engine.begin()
    if asyncio.iscoroutine(begin_result):
        begin_context = await begin_result
    else:
        begin_context = begin_result

    async with begin_context as connection:
        yield connection


# Global engine/session instances for FastAPI dependency injection
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Get or create the global engine instance."""
    global _engine
    if _engine is None:
        _engine = create_engine()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Lazily create a session factory bound to the shared engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(get_engine())
    return _session_factory


async def dispose_engine() -> None:
    """Close pooled connections and forget the shared engine."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


async def get_db() -> AsyncIterator[AsyncSession]:
    """
    Dependency to provide database session.

    Each request runs in one transaction: committed when the handler returns,
    rolled back when it raises.
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
