"""FastAPI application factory."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import FastAPI

from social_service.app.lifespan import lifespan
from social_service.app.router import setup_routers
from social_service.core.settings import get_app_settings, get_graphql_settings

if TYPE_CHECKING:
    import strawberry

    from social_service.core.settings import AppSettings, GraphQLSettings


def create_app(
    app_settings: AppSettings | None = None,
    graphql_settings: GraphQLSettings | None = None,
    schema: strawberry.Schema | None = None,
    *,
    with_lifespan: bool = True,
) -> FastAPI:
    """Create and configure FastAPI application.

    Settings are loaded once and cached via LRU cache unless passed in.

    Returns:
        Configured FastAPI application instance.
    """
    app_settings = app_settings or get_app_settings()

    app = FastAPI(
        title=app_settings.title,
        version=app_settings.version,
        debug=app_settings.debug,
        lifespan=lifespan if with_lifespan else None,
    )

    setup_routers(app, graphql_settings or get_graphql_settings(), schema)
    return app


# Application instance for uvicorn
app = create_app()
