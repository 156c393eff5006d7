"""
Mood Tracker Backend — Test Configuration (conftest.py)
=========================================================

What:  Shared pytest fixtures for the test suite.
How:   The test environment is written to os.environ BEFORE any `app`
       import, because app.config builds its settings singleton (and
       app.database its engine) at import time.

Fixtures:
    mock_db_session   AsyncMock standing in for AsyncSession (unit tests)
    sample_entry      A fully populated MoodEntry ORM object
    database          Creates tables in a throwaway SQLite file, drops them after
    test_client       httpx AsyncClient wired to the app through ASGITransport
"""

import os
import tempfile

# ── Environment Setup (must precede app imports) ──────────────────────────
_TEST_DIR = tempfile.mkdtemp(prefix="moodtracker_test_")
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/test.db"
os.environ["STAGING_DATABASE_URL"] = ""
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "10000"
os.environ["CORS_ORIGINS"] = "http://localhost:3000"
os.environ["ALLOWED_HOSTS"] = "*"

from datetime import date, datetime, timezone  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402
from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.database import Base, dispose_engine, engine, init_models  # noqa: E402
from app.models.mood_entry import MoodEntry  # noqa: E402
from app.services.error_tracker import error_tracker  # noqa: E402
from app.services.metrics import metrics  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    A mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = entry
        result = await mood_service.get_entry(mock_db_session, entry.id)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_entry():
    """A MoodEntry as it would come back from the database."""
    now = datetime.now(timezone.utc)
    return MoodEntry(
        id=uuid4(),
        entry_date=date(2026, 10, 1),
        mood="calm",
        intensity=4,
        notes="Long walk after work.",
        created_at=now,
        updated_at=now,
    )


@pytest_asyncio.fixture
async def database():
    """Fresh tables for one test; connections are disposed so the next test's loop gets new ones."""
    await init_models()
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await dispose_engine()


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient talking to the FastAPI app without a server.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from app.main import app

    metrics.reset()
    error_tracker.clear()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
