"""GraphQL feature module using Strawberry.

This module provides the GraphQL endpoint with:
- Query resolvers for users, profiles, posts and membership tiers
- Mutation resolvers for create/change/delete and subscriptions
- Request-scoped DataLoaders and an eager-join planner against N+1 queries
- A static depth guard that rejects over-deep documents before execution
"""

from __future__ import annotations

from typing import Any

__all__ = ["create_graphql_router", "schema"]


def __getattr__(name: str) -> Any:
    if name == "create_graphql_router":
        from social_service.features.graphql.router import create_graphql_router

        return create_graphql_router
    if name == "schema":
        from social_service.features.graphql.schema import schema as graphql_schema

        return graphql_schema
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
