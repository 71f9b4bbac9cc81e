"""
Daily Journal API - Database Lifecycle Management
===================================================

What:  Async SQLAlchemy engine, session factory, the per-request
       DatabaseLifecycle, and the FastAPI dependency built on it.
How:   Every request creates its own DatabaseLifecycle, calls connect() to
       check out a connection, hands the session to the service layer, and
       calls disconnect() when the request is over, whatever happened.
Who:   Used by route handlers via FastAPI's dependency injection system and by
       the health check.
When:  Engine is created at module import; connections are opened per request.

Connection Strategy:
    DB_USE_POOL=false (default): NullPool. disconnect() really closes the
        connection, so each request performs a full connect/disconnect cycle.
    DB_USE_POOL=true: QueuePool with pool_size / max_overflow / pre_ping.
        disconnect() returns the connection to the pool.
    External behavior is the same either way.
"""

import logging
from typing import Any, AsyncGenerator, Callable, Dict, Optional

from sqlalchemy import pool
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from journal_api.config import Settings, settings
from journal_api.exceptions import DatabaseConnectionError, DatabaseError

logger = logging.getLogger(__name__)


def engine_options(config: Settings) -> Dict[str, Any]:
    """Keyword arguments for create_async_engine derived from settings."""
    options: Dict[str, Any] = {"echo": config.log_level == "DEBUG"}
    if config.db_use_pool:
        options.update(
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
            pool_pre_ping=config.db_pool_pre_ping,
            pool_recycle=3600,
        )
    else:
        options["poolclass"] = pool.NullPool
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine: AsyncEngine = create_async_engine(settings.sqlalchemy_url, **engine_options(settings))

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: entries stay readable after commit, so the route can
# serialize them without another round-trip
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata for Alembic)."""
    pass


# ── Lifecycle Manager ─────────────────────────────────────────────────────
class DatabaseLifecycle:
    """
    Owns exactly one connection to the entry store for the span of a request.

    State machine:
        idle --connect()--> connected --disconnect()--> idle

    connect() while connected raises DatabaseConnectionError.
    disconnect() while idle is a no-op (logged at DEBUG), so cleanup after a
    failed connect() stays quiet.

    Example:
        lifecycle = DatabaseLifecycle()
        session = await lifecycle.connect()
        try:
            ...
        finally:
            await lifecycle.disconnect()
    """

    def __init__(self, session_factory: Optional[Callable[[], AsyncSession]] = None):
        self._session_factory = session_factory or async_session_factory
        self._session: Optional[AsyncSession] = None

    @property
    def is_connected(self) -> bool:
        return self._session is not None

    @property
    def session(self) -> Optional[AsyncSession]:
        return self._session

    async def connect(self) -> AsyncSession:
        """
        Open a session and force a connection checkout.

        A bare AsyncSession is lazy and would only touch the database on the
        first query; calling session.connection() surfaces an unreachable
        host or bad credentials here instead.

        Raises:
            DatabaseConnectionError: Already connected, store unreachable,
                or authentication rejected.
        """
        if self._session is not None:
            logger.warning("connect() called on a lifecycle that is already connected")
            raise DatabaseConnectionError(
                message="Database connection is already open",
                context={"state": "connected"},
            )

        session = self._session_factory()
        try:
            await session.connection()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Failed to connect to the database: %s", str(e))
            await session.close()
            raise DatabaseConnectionError(
                context={"error_type": type(e).__name__, "error": str(e)},
            ) from e

        self._session = session
        logger.debug("Connected to the database")
        return session

    async def disconnect(self) -> None:
        """
        Close the session and release its connection.

        Raises:
            DatabaseError: Closing the session failed. The lifecycle is back in
                the idle state regardless.
        """
        if self._session is None:
            logger.debug("disconnect() called without an open database connection")
            return

        session, self._session = self._session, None
        try:
            await session.close()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Failed to disconnect from the database: %s", str(e))
            raise DatabaseError(
                message="Failed to close the database connection",
                context={"error_type": type(e).__name__, "error": str(e)},
            ) from e
        logger.debug("Disconnected from the database")


async def release(lifecycle: DatabaseLifecycle) -> None:
    """
    Disconnect, logging instead of raising.

    Used on the way out of a request: the response has already been decided
    and a failed close must not replace it.
    """
    try:
        await lifecycle.disconnect()
    except DatabaseError as e:
        logger.error("Database cleanup failed: %s | Context: %s", e.message, e.context)


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a freshly connected session per request.

    How it works:
        1. connect() (DatabaseConnectionError propagates → 500)
        2. Yield the session to the route handler
        3. On error: roll back whatever the handler left pending, re-raise
        4. Always: disconnect exactly once

    Services commit their own writes, so nothing is committed here.

    Example usage in a route:
        @router.get("/entry")
        async def list_entries(db: AsyncSession = Depends(get_db_session)):
            return await entry_service.list_entries(db)
    """
    lifecycle = DatabaseLifecycle()
    try:
        session = await lifecycle.connect()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
    finally:
        await release(lifecycle)


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Close all engine resources. Called during application shutdown."""
    await engine.dispose()
