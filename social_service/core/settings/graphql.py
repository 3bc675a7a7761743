"""GraphQL server configuration settings.

Controls the GraphQL endpoint, IDE, query depth bound and loader batching.
Environment variables use GRAPHQL_ prefix.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

GraphQLIDE = Literal["graphiql", "apollo-sandbox", "pathfinder", False]


class GraphQLSettings(BaseSettings):
    """GraphQL server configuration.

    Environment variables use GRAPHQL_ prefix.
    Example: GRAPHQL_ENABLED=true, GRAPHQL_MAX_QUERY_DEPTH=5
    """

    enabled: bool = Field(
        default=True,
        description="Enable GraphQL endpoint",
    )

    path: str = Field(
        default="/graphql",
        min_length=1,
        max_length=255,
        pattern=r"^/.*$",
        description="GraphQL endpoint path",
    )

    graphql_ide: GraphQLIDE = Field(
        default="graphiql",
        description="GraphQL IDE served on GET: graphiql, apollo-sandbox, pathfinder, or false",
    )

    # Query limits
    max_query_depth: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Maximum query nesting depth",
    )

    # DataLoader batching
    max_batch_size: int | None = Field(
        default=None,
        ge=1,
        le=10_000,
        description="Split loader batch windows larger than this (None = unbounded)",
    )

    metrics_enabled: bool = Field(
        default=True,
        description="Record Prometheus metrics for GraphQL operations",
    )

    model_config = SettingsConfigDict(
        env_prefix="GRAPHQL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )
