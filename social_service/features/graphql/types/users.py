"""GraphQL types for users.

Scalar fields are copied from the model. Relation fields go through the
request's loaders: when the root query already joined a relation the loader
cache holds the value, otherwise the call joins the current batch window.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import strawberry
from strawberry.types import Info

from social_service.features.graphql.context import GraphQLContext
from social_service.features.graphql.types.posts import PostType
from social_service.features.graphql.types.profiles import ProfileType

if TYPE_CHECKING:
    from social_service.core.models import User


@strawberry.type(name="User", description="A user of the social graph")
class UserType:
    id: UUID
    name: str
    balance: float

    @strawberry.field(description="The user's profile, if one was created")
    async def profile(self, info: Info[GraphQLContext, None]) -> ProfileType | None:
        profile = await info.context.loaders.profile_by_user.load(self.id)
        return ProfileType.from_model(profile) if profile else None

    @strawberry.field(description="Posts written by this user")
    async def posts(self, info: Info[GraphQLContext, None]) -> list[PostType]:
        posts = await info.context.loaders.posts_by_author.load(self.id)
        return [PostType.from_model(post) for post in posts]

    @strawberry.field(description="Users this user is subscribed to")
    async def user_subscribed_to(self, info: Info[GraphQLContext, None]) -> list[UserType]:
        authors = await info.context.loaders.subscribed_authors.load(self.id)
        return [UserType.from_model(author) for author in authors]

    @strawberry.field(description="Users subscribed to this user")
    async def subscribed_to_user(self, info: Info[GraphQLContext, None]) -> list[UserType]:
        subscribers = await info.context.loaders.subscribers.load(self.id)
        return [UserType.from_model(subscriber) for subscriber in subscribers]

    @classmethod
    def from_model(cls, user: User) -> UserType:
        return cls(id=user.id, name=user.name, balance=user.balance)


__all__ = ["UserType"]
