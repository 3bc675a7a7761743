"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from social_service.core.settings import get_graphql_settings
from social_service.features.metrics.router import router as metrics_router

if TYPE_CHECKING:
    import strawberry
    from fastapi import FastAPI

    from social_service.core.settings import GraphQLSettings

logger = logging.getLogger(__name__)


def setup_routers(
    app: FastAPI,
    graphql_settings: GraphQLSettings | None = None,
    schema: strawberry.Schema | None = None,
) -> None:
    """Register all feature routers with the application.

    Args:
        app: FastAPI application instance.
        graphql_settings: Optional override controlling GraphQL availability.
        schema: Optional schema override (tests build one per depth bound).
    """
    graphql_settings = graphql_settings or get_graphql_settings()

    # Include metrics endpoint (no prefix - accessible at /metrics)
    app.include_router(metrics_router)

    if graphql_settings.enabled:
        from social_service.features.graphql.router import create_graphql_router

        graphql_router = create_graphql_router(schema, graphql_settings)
        app.include_router(graphql_router, prefix=graphql_settings.path, tags=["graphql"])
        logger.info(
            "GraphQL endpoint enabled at %s (ide: %s)",
            graphql_settings.path,
            graphql_settings.graphql_ide or "disabled",
        )

    logger.info(
        "Router setup complete",
        extra={"graphql_enabled": graphql_settings.enabled},
    )


__all__ = ["setup_routers"]
