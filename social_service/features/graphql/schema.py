"""GraphQL schema assembly.

Combines the root Query and Mutation types into a single schema with the
configured extensions.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import strawberry

from social_service.features.graphql.error_handler import log_error
from social_service.features.graphql.extensions import get_extensions
from social_service.features.graphql.resolvers import Mutation, Query

if TYPE_CHECKING:
    from graphql import GraphQLError
    from strawberry.types import ExecutionContext

    from social_service.core.settings import AppSettings, GraphQLSettings

logger = logging.getLogger(__name__)


class SocialSchema(strawberry.Schema):
    """Schema that logs errors through the application's error handler."""

    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: ExecutionContext | None = None,
    ) -> None:
        for error in errors:
            log_error(error, execution_context)


def create_schema(
    graphql_settings: GraphQLSettings | None = None,
    app_settings: AppSettings | None = None,
) -> SocialSchema:
    """Build the schema with extensions derived from settings."""
    return SocialSchema(
        query=Query,
        mutation=Mutation,
        extensions=get_extensions(graphql_settings, app_settings),
    )


schema = create_schema()

logger.info("GraphQL schema created successfully")

__all__ = ["SocialSchema", "create_schema", "schema"]
