"""Modular Pydantic Settings v2 configuration.

One settings model per domain, each frozen and read from its own
environment prefix:

    APP_      application identity and server binding
    DB_       database URL and seeding
    GRAPHQL_  endpoint, IDE, depth bound, loader batching
    LOG_      logging level and format

Import settings via the cached loaders:
    from social_service.core.settings import get_graphql_settings
"""

from __future__ import annotations

from .app import AppSettings
from .database import DatabaseSettings
from .graphql import GraphQLSettings
from .loader import (
    clear_settings_cache,
    get_app_settings,
    get_db_settings,
    get_graphql_settings,
    get_logging_settings,
)
from .logs import LoggingSettings

__all__ = [
    "AppSettings",
    "DatabaseSettings",
    "GraphQLSettings",
    "LoggingSettings",
    "clear_settings_cache",
    "get_app_settings",
    "get_db_settings",
    "get_graphql_settings",
    "get_logging_settings",
]
