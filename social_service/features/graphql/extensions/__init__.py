"""Strawberry extensions for the GraphQL schema.

Provides:
- Static depth guard (validation rule, default max depth 5)
- Prometheus metrics
- Error masking in production
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from strawberry.extensions import AddValidationRules, MaskErrors

from social_service.core.settings import get_app_settings, get_graphql_settings
from social_service.features.graphql.error_handler import should_mask_error
from social_service.features.graphql.extensions.depth_guard import (
    DEPTH_LIMIT_EXCEEDED,
    DepthViolation,
    check,
    depth_guard_rule,
    measure_depths,
)
from social_service.features.graphql.extensions.metrics import GraphQLMetricsExtension

if TYPE_CHECKING:
    from social_service.core.settings import AppSettings, GraphQLSettings

logger = logging.getLogger(__name__)


def get_extensions(
    graphql_settings: GraphQLSettings | None = None,
    app_settings: AppSettings | None = None,
) -> list[Any]:
    """Get list of Strawberry extensions for the schema.

    Returns:
        Extension classes and factories, in execution order; each schema
        operation builds fresh instances from them
    """
    graphql_settings = graphql_settings or get_graphql_settings()
    app_settings = app_settings or get_app_settings()

    depth_rule = depth_guard_rule(graphql_settings.max_query_depth)
    extensions: list[Any] = [lambda: AddValidationRules([depth_rule])]
    if graphql_settings.metrics_enabled:
        extensions.append(GraphQLMetricsExtension)
    if app_settings.is_production:
        extensions.append(lambda: MaskErrors(should_mask_error=should_mask_error))

    logger.debug(
        "GraphQL extensions configured",
        extra={
            "max_query_depth": graphql_settings.max_query_depth,
            "metrics": graphql_settings.metrics_enabled,
            "mask_errors": app_settings.is_production,
        },
    )
    return extensions


__all__ = [
    "DEPTH_LIMIT_EXCEEDED",
    "DepthViolation",
    "GraphQLMetricsExtension",
    "check",
    "depth_guard_rule",
    "get_extensions",
    "measure_depths",
]
