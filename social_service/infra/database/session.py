"""Database engine and session management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from social_service.core.database import Base
from social_service.core.settings import get_app_settings, get_db_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)

db_settings = get_db_settings()
app_settings = get_app_settings()


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on foreign-key enforcement for every new SQLite connection.

    SQLite ignores ``ON DELETE CASCADE`` and foreign keys in general unless
    the pragma is set per connection. No-op for other dialects.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, connection_record: Any) -> None:
        _ = connection_record
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_async_engine(
    db_settings.database_url,
    echo=db_settings.echo or app_settings.debug,
    pool_pre_ping=db_settings.pool_pre_ping,
)
enable_sqlite_foreign_keys(engine)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session.

    Yields:
        Database session that is automatically closed.

    Example:
        async with get_async_session() as session:
            result = await session.execute(select(User))
            users = result.scalars().all()
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def create_schema(bind: AsyncEngine, *, seed: bool = True) -> None:
    """Create all tables on ``bind`` and optionally seed membership tiers.

    Table creation uses ``checkfirst`` and seeding skips existing tiers, so
    calling this against an initialized database changes nothing.
    """
    # Register every model on the metadata
    from social_service.core import models  # noqa: F401
    from social_service.core.repositories import get_member_type_repository

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if not seed:
        return

    session_factory = async_sessionmaker(bind, expire_on_commit=False)
    async with session_factory() as session:
        await get_member_type_repository().seed(session)
        await session.commit()


async def init_database() -> None:
    """Verify connectivity, create tables and seed membership tiers.

    Raises:
        Exception: Re-raised after logging when the database is unreachable.
    """
    logger.info("Initializing database", extra={"url": _safe_url()})

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        await create_schema(engine, seed=db_settings.seed_member_types)
    except Exception as e:
        logger.error(
            "Failed to initialize database",
            extra={"url": _safe_url(), "error": str(e)},
        )
        raise

    logger.info("Database initialized", extra={"url": _safe_url()})


async def close_database() -> None:
    """Dispose the engine's connection pool.

    This should be called during application shutdown.
    """
    logger.info("Closing database connection")
    await engine.dispose()
    logger.info("Database connection closed successfully")


def _safe_url() -> str:
    return engine.url.render_as_string(hide_password=True)


__all__ = [
    "AsyncSessionLocal",
    "close_database",
    "create_schema",
    "enable_sqlite_foreign_keys",
    "engine",
    "get_async_session",
    "init_database",
]
