"""
Daily Journal API - Database Lifecycle Tests
==============================================

What we test:
    ✅ connect() forces a connection and reports failures as DatabaseConnectionError
    ✅ connect()/disconnect() state checks
    ✅ get_db_session() disconnects exactly once on every path
    ✅ Engine options for pooled and connection-per-request modes
"""

import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy import pool
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from journal_api import database
from journal_api.config import Settings
from journal_api.database import DatabaseLifecycle, engine_options, get_db_session
from journal_api.exceptions import (
    DatabaseConnectionError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)


def make_factory():
    session = AsyncMock()
    session.connection = AsyncMock()
    session.close = AsyncMock()
    factory = MagicMock(return_value=session)
    return factory, session


class TestDatabaseLifecycle:

    @pytest.mark.asyncio
    async def test_connect_and_disconnect(self):
        factory, session = make_factory()
        lifecycle = DatabaseLifecycle(session_factory=factory)

        assert await lifecycle.connect() is session
        session.connection.assert_awaited_once()
        assert lifecycle.is_connected

        await lifecycle.disconnect()
        session.close.assert_awaited_once()
        assert not lifecycle.is_connected

    @pytest.mark.asyncio
    async def test_connect_unreachable_store(self):
        factory, session = make_factory()
        session.connection.side_effect = OperationalError(
            "SELECT 1", {}, Exception("connection refused")
        )
        lifecycle = DatabaseLifecycle(session_factory=factory)

        with pytest.raises(DatabaseConnectionError) as exc_info:
            await lifecycle.connect()

        assert exc_info.value.context["error_type"] == "OperationalError"
        session.close.assert_awaited_once()
        assert not lifecycle.is_connected

    @pytest.mark.asyncio
    async def test_connect_twice_raises(self):
        factory, _ = make_factory()
        lifecycle = DatabaseLifecycle(session_factory=factory)
        await lifecycle.connect()

        with pytest.raises(DatabaseConnectionError):
            await lifecycle.connect()
        assert factory.call_count == 1

    @pytest.mark.asyncio
    async def test_disconnect_without_connect_is_noop(self, caplog):
        factory, session = make_factory()
        lifecycle = DatabaseLifecycle(session_factory=factory)

        with caplog.at_level(logging.WARNING, logger="journal_api.database"):
            await lifecycle.disconnect()

        session.close.assert_not_awaited()
        assert caplog.records == []

    @pytest.mark.asyncio
    async def test_release_after_failed_connect_logs_no_warning(self, caplog):
        factory, session = make_factory()
        session.connection.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))
        lifecycle = DatabaseLifecycle(session_factory=factory)

        with pytest.raises(DatabaseConnectionError):
            await lifecycle.connect()
        caplog.clear()
        with caplog.at_level(logging.WARNING, logger="journal_api.database"):
            await database.release(lifecycle)

        assert caplog.records == []
        session.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_disconnect_failure(self):
        factory, session = make_factory()
        session.close.side_effect = SQLAlchemyError("close failed")
        lifecycle = DatabaseLifecycle(session_factory=factory)
        await lifecycle.connect()

        with pytest.raises(DatabaseError):
            await lifecycle.disconnect()
        assert not lifecycle.is_connected


class TestSessionDependency:
    """get_db_session() must release the connection exactly once, whatever happens."""

    def setup_method(self):
        self.session = AsyncMock()
        self.lifecycle = MagicMock()
        self.lifecycle.connect = AsyncMock(return_value=self.session)
        self.lifecycle.disconnect = AsyncMock()

    @pytest.mark.asyncio
    async def test_success_path(self):
        with patch.object(database, "DatabaseLifecycle", return_value=self.lifecycle):
            gen = get_db_session()
            assert await gen.__anext__() is self.session
            with pytest.raises(StopAsyncIteration):
                await gen.__anext__()

        self.lifecycle.disconnect.assert_awaited_once()
        self.session.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [NotFoundError(), ValidationError("bad"), DatabaseError(), RuntimeError("boom")],
    )
    async def test_failure_paths_roll_back_and_release(self, error):
        with patch.object(database, "DatabaseLifecycle", return_value=self.lifecycle):
            gen = get_db_session()
            await gen.__anext__()
            with pytest.raises(type(error)):
                await gen.athrow(error)

        self.session.rollback.assert_awaited_once()
        self.lifecycle.disconnect.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_connect_failure_still_releases(self):
        self.lifecycle.connect.side_effect = DatabaseConnectionError()
        with patch.object(database, "DatabaseLifecycle", return_value=self.lifecycle):
            gen = get_db_session()
            with pytest.raises(DatabaseConnectionError):
                await gen.__anext__()

        self.lifecycle.disconnect.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_disconnect_failure_does_not_replace_outcome(self):
        self.lifecycle.disconnect.side_effect = DatabaseError("close failed")
        with patch.object(database, "DatabaseLifecycle", return_value=self.lifecycle):
            gen = get_db_session()
            await gen.__anext__()
            with pytest.raises(NotFoundError):
                await gen.athrow(NotFoundError())

        self.lifecycle.disconnect.assert_awaited_once()


class TestEngineOptions:

    def test_connection_per_request_uses_null_pool(self):
        config = Settings(_env_file=None, db_use_pool=False)
        options = engine_options(config)
        assert options["poolclass"] is pool.NullPool
        assert "pool_size" not in options

    def test_pooled_engine(self):
        config = Settings(_env_file=None, db_use_pool=True, db_pool_size=7)
        options = engine_options(config)
        assert "poolclass" not in options
        assert options["pool_size"] == 7
        assert options["pool_pre_ping"] is True
