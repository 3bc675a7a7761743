"""Database dependencies for FastAPI route handlers.

Two session getters exist:

1. ``get_db_session()`` (this module): FastAPI dependency, session lifecycle
   tied to the HTTP request. Tests override it to point at their own engine.
2. ``get_async_session()`` (infra.database): plain async context manager for
   the CLI and startup code.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from social_service.infra.database import get_async_session


async def get_db_session() -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency for database session.

    Yields:
        Database session that is automatically closed after request.

    Example:
        @router.get("/items")
        async def list_items(session: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with get_async_session() as session:
        yield session
