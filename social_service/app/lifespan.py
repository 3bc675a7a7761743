"""Application lifespan management.

Startup Order:
1. Core (logging, metrics)
2. Database (create tables, seed membership tiers)

Shutdown Order: Reverse of startup
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from social_service.core.settings import get_app_settings, get_logging_settings
from social_service.infra.logging.config import setup_logging
from social_service.infra.metrics.prometheus import application_info

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


async def _startup_core() -> None:
    """Initialize logging and the application info metric."""
    app = get_app_settings()

    setup_logging(log_settings=get_logging_settings(), force=True, service_name=app.service_name)
    logger.info(
        "Application starting",
        extra={"service": app.service_name, "environment": app.environment},
    )

    application_info.labels(
        version=app.version,
        service=app.service_name,
        environment=app.environment,
    ).set(1)


async def _startup_database() -> None:
    """Create tables and seed membership tiers."""
    from social_service.infra.database.session import init_database

    await init_database()


async def _shutdown_database() -> None:
    from social_service.infra.database.session import close_database

    await close_database()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start services before serving requests and stop them afterwards."""
    _ = app
    await _startup_core()
    await _startup_database()
    logger.info("Application startup complete")
    try:
        yield
    finally:
        await _shutdown_database()
        logger.info("Application shutdown complete")


__all__ = ["lifespan"]
