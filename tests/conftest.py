"""
Daily Journal API - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment variables are set before anything from journal_api is
       imported, so the engine is built against a throwaway SQLite file.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession (no real DB needed)
    ├── sample_entry_data: Title/body pair within limits
    ├── database: Fresh `entries` table in the temporary SQLite file
    └── test_client: HTTPX AsyncClient talking to the ASGI app
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Must run before journal_api.config is imported anywhere
_test_dir = tempfile.mkdtemp(prefix="daily_journal_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_test_dir, 'test.db')}"
os.environ["LOG_LEVEL"] = "WARNING"
for _var in ("DB_USER", "DB_PASS", "DB_PASSWORD", "DB_USE_POOL"):
    os.environ.pop(_var, None)

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_entry(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = entry
            result = await entry_service.get_entry(mock_db_session, str(entry.id))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_entry_data():
    return {"title": "Day 1", "body": "Hello"}


@pytest_asyncio.fixture
async def database():
    """Recreate the entries table around each test that touches the store."""
    from journal_api.database import Base, engine
    import journal_api.models.entry  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient routed straight into the FastAPI app via ASGITransport.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from journal_api.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
