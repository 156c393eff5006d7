"""
Mood Tracker Backend — Database Session Management
====================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine from `settings.effective_database_url` and
       provides a per-request session that commits on success and rolls
       back on error.
Who:   Route handlers (via Depends), the health check, and the lifespan.

Drivers:
    postgresql+asyncpg://...   Production and staging
    sqlite+aiosqlite:///...    Tests and quick local runs

Connection Pooling (PostgreSQL only):
    pool_size / max_overflow come from settings; pool_pre_ping validates
    connections before use, pool_recycle=3600 drops hour-old connections.
    SQLite URLs get SQLAlchemy's default pool for the dialect.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import settings


def _engine_options() -> Dict[str, Any]:
    """Engine keyword arguments for the configured database dialect."""
    options: Dict[str, Any] = {
        # Echo SQL queries in DEBUG mode for development visibility
        "echo": settings.log_level == "DEBUG",
    }
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine: AsyncEngine = create_async_engine(settings.effective_database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay loaded after commit, so response
# models can be built from ORM objects once the transaction is done
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object, which Alembic reads for --autogenerate and
    `init_models()` uses to create tables for SQLite runs.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handler
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/moods")
        async def list_moods(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def check_database() -> None:
    """
    Run a trivial query to prove the database is reachable.

    Raises whatever the driver raises; callers decide how to report it.
    """
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def init_models() -> None:
    """
    Create all tables that don't exist yet.

    Used for SQLite (tests, local runs). PostgreSQL schemas are managed by
    Alembic migrations (`alembic upgrade head`).
    """
    # Import models so they register with Base.metadata
    from app import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Close all pooled connections. Called during application shutdown."""
    await engine.dispose()
