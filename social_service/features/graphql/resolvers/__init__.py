"""Root resolvers."""

from social_service.features.graphql.resolvers.mutations import Mutation
from social_service.features.graphql.resolvers.queries import Query

__all__ = ["Mutation", "Query"]
