"""Query resolvers for the GraphQL API.

Root fields:
- memberTypes / memberType(id)
- users / user(id): planned fetch, relations joined and primed
- posts / post(id)
- profiles / profile(id)

List roots read through the request session under the session lock and
prime the identity loaders with what they fetched. Singleton roots go
through the identity loaders so repeated or aliased lookups share one fetch.
"""

from __future__ import annotations

import logging
from uuid import UUID

import strawberry
from strawberry.types import Info

from social_service.core.repositories import (
    get_member_type_repository,
    get_post_repository,
    get_profile_repository,
    get_user_repository,
)
from social_service.features.graphql.context import GraphQLContext
from social_service.features.graphql.planner import plan_user_relations, prime_user_loaders
from social_service.features.graphql.types import (
    MemberTypeIdEnum,
    MemberTypeType,
    PostType,
    ProfileType,
    UserType,
)

logger = logging.getLogger(__name__)


def _root_selections(info: Info[GraphQLContext, None]) -> list:
    fields = info.selected_fields
    return fields[0].selections if fields else []


@strawberry.type(name="RootQueryType", description="Root query type")
class Query:
    """GraphQL Query resolvers."""

    @strawberry.field(description="List all membership tiers")
    async def member_types(self, info: Info[GraphQLContext, None]) -> list[MemberTypeType]:
        ctx = info.context
        async with ctx.session_lock:
            member_types = await get_member_type_repository().list(ctx.session)
        for member_type in member_types:
            ctx.loaders.member_types.prime(member_type.id, member_type)
        return [MemberTypeType.from_model(m) for m in member_types]

    @strawberry.field(description="Get a membership tier by ID")
    async def member_type(
        self,
        info: Info[GraphQLContext, None],
        id: MemberTypeIdEnum,  # noqa: A002
    ) -> MemberTypeType | None:
        member_type = await info.context.loaders.member_types.load(id)
        return MemberTypeType.from_model(member_type) if member_type else None

    @strawberry.field(description="List all users")
    async def users(self, info: Info[GraphQLContext, None]) -> list[UserType]:
        """List users, joining the relations the query selected.

        ``{ users { profile { ... } } }`` runs one joined statement and the
        ``profile`` resolvers are served from the primed loader cache.
        """
        ctx = info.context
        plan = plan_user_relations(_root_selections(info))

        async with ctx.session_lock:
            users = await get_user_repository().list_users(ctx.session, include=plan.relations)
        prime_user_loaders(ctx.loaders, users, plan)

        logger.debug(
            "Resolved users root",
            extra={"count": len(users), "joined": sorted(plan.relations)},
        )
        return [UserType.from_model(user) for user in users]

    @strawberry.field(description="Get a user by ID")
    async def user(
        self,
        info: Info[GraphQLContext, None],
        id: UUID,  # noqa: A002
    ) -> UserType | None:
        ctx = info.context
        plan = plan_user_relations(_root_selections(info))

        if plan.is_empty:
            user = await ctx.loaders.users.load(id)
        else:
            async with ctx.session_lock:
                user = await get_user_repository().get_user(
                    ctx.session, id, include=plan.relations,
                )
            if user is not None:
                prime_user_loaders(ctx.loaders, [user], plan)

        return UserType.from_model(user) if user else None

    @strawberry.field(description="List all posts")
    async def posts(self, info: Info[GraphQLContext, None]) -> list[PostType]:
        ctx = info.context
        async with ctx.session_lock:
            posts = await get_post_repository().list(ctx.session)
        for post in posts:
            ctx.loaders.posts.prime(post.id, post)
        return [PostType.from_model(post) for post in posts]

    @strawberry.field(description="Get a post by ID")
    async def post(
        self,
        info: Info[GraphQLContext, None],
        id: UUID,  # noqa: A002
    ) -> PostType | None:
        post = await info.context.loaders.posts.load(id)
        return PostType.from_model(post) if post else None

    @strawberry.field(description="List all profiles")
    async def profiles(self, info: Info[GraphQLContext, None]) -> list[ProfileType]:
        ctx = info.context
        async with ctx.session_lock:
            profiles = await get_profile_repository().list(ctx.session)
        for profile in profiles:
            ctx.loaders.profiles.prime(profile.id, profile)
            ctx.loaders.profile_by_user.prime(profile.user_id, profile)
        return [ProfileType.from_model(profile) for profile in profiles]

    @strawberry.field(description="Get a profile by ID")
    async def profile(
        self,
        info: Info[GraphQLContext, None],
        id: UUID,  # noqa: A002
    ) -> ProfileType | None:
        profile = await info.context.loaders.profiles.load(id)
        return ProfileType.from_model(profile) if profile else None


__all__ = ["Query"]
