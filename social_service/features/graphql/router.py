"""GraphQL router for FastAPI integration.

Provides:
- GraphQL endpoint (POST, plus the IDE on GET when enabled)
- Request context with a database session and a fresh DataLoader set

The router serves at its own root; ``app/router.py`` mounts it under the
configured path.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated, Any, cast

from fastapi import BackgroundTasks, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession
from strawberry.fastapi import GraphQLRouter

from social_service.core.dependencies.database import get_db_session
from social_service.core.settings import get_graphql_settings
from social_service.features.graphql.context import GraphQLContext

if TYPE_CHECKING:
    import strawberry

    from social_service.core.settings import GraphQLSettings

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Request-ID"


async def get_graphql_context(
    request: Request,
    response: Response,
    background_tasks: BackgroundTasks,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> GraphQLContext:
    """Create GraphQL context from FastAPI dependencies.

    Each call builds a new loader set, so caches and batch windows never
    outlive the request.

    Args:
        request: FastAPI request
        response: FastAPI response (for setting headers/cookies)
        background_tasks: FastAPI background tasks
        session: Database session from dependency

    Returns:
        GraphQLContext for use in resolvers
    """
    settings = get_graphql_settings()
    return GraphQLContext.for_session(
        session,
        max_batch_size=settings.max_batch_size,
        request=request,
        response=response,
        background_tasks=background_tasks,
        correlation_id=request.headers.get(CORRELATION_HEADER),
    )


def create_graphql_router(
    schema: strawberry.Schema | None = None,
    settings: GraphQLSettings | None = None,
) -> GraphQLRouter:
    """Create GraphQL router with settings-based configuration."""
    if schema is None:
        from social_service.features.graphql.schema import schema as default_schema

        schema = default_schema
    settings = settings or get_graphql_settings()

    logger.debug(
        "Creating GraphQL router",
        extra={"path": settings.path, "graphql_ide": settings.graphql_ide},
    )
    return GraphQLRouter(
        schema,
        context_getter=cast("Any", get_graphql_context),
        graphql_ide=settings.graphql_ide or None,
        path="",  # mounted prefix supplies the actual path
    )


__all__ = ["create_graphql_router", "get_graphql_context"]
