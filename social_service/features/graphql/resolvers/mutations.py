"""Mutation resolvers for the GraphQL API.

Provides write operations:
- createUser / changeUser / deleteUser
- createProfile / changeProfile / deleteProfile
- createPost / changePost / deletePost
- subscribeTo / unsubscribeFrom

Mutations write through the repositories and commit once per field. They do
not use the loaders for writing; after a commit the loader caches are
cleared so later fields of the same request read fresh data.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING
from uuid import UUID

import strawberry
from strawberry.types import Info

from social_service.core.database import IntegrityViolationError, NotFoundError
from social_service.core.exceptions import ConflictException, NotFoundException
from social_service.core.models import Post, Profile, User
from social_service.core.repositories import (
    get_post_repository,
    get_profile_repository,
    get_subscription_repository,
    get_user_repository,
)
from social_service.features.graphql.context import GraphQLContext
from social_service.features.graphql.types import (
    ChangePostInput,
    ChangeProfileInput,
    ChangeUserInput,
    CreatePostInput,
    CreateProfileInput,
    CreateUserInput,
    PostType,
    ProfileType,
    UserType,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _write(ctx: GraphQLContext, operation: str) -> AsyncIterator[AsyncSession]:
    """Run one mutation in the request session and commit it.

    Repository errors are rolled back and re-raised as application
    exceptions, whose ``code`` reaches the client in ``extensions``.
    """
    async with ctx.session_lock:
        session = ctx.session
        try:
            yield session
            await session.commit()
        except NotFoundError as exc:
            await session.rollback()
            raise NotFoundException(detail=str(exc), extra={"operation": operation}) from exc
        except IntegrityViolationError as exc:
            await session.rollback()
            raise ConflictException(detail=str(exc), extra={"operation": operation}) from exc
        except Exception:
            await session.rollback()
            raise
    ctx.loaders.clear_all()


@strawberry.type(name="Mutations", description="Root mutation type")
class Mutation:
    """GraphQL Mutation resolvers."""

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    @strawberry.mutation(description="Create a user")
    async def create_user(self, info: Info[GraphQLContext, None], dto: CreateUserInput) -> UserType:
        async with _write(info.context, "createUser") as session:
            user = await get_user_repository().create(
                session, User(name=dto.name, balance=dto.balance),
            )
        logger.info("User created", extra={"user_id": str(user.id)})
        return UserType.from_model(user)

    @strawberry.mutation(description="Change a user's name or balance")
    async def change_user(
        self,
        info: Info[GraphQLContext, None],
        id: UUID,  # noqa: A002
        dto: ChangeUserInput,
    ) -> UserType:
        repo = get_user_repository()
        async with _write(info.context, "changeUser") as session:
            user = await repo.get_or_raise(session, id)
            user = await repo.update(session, user, {"name": dto.name, "balance": dto.balance})
        logger.info("User changed", extra={"user_id": str(id)})
        return UserType.from_model(user)

    @strawberry.mutation(description="Delete a user with their profile, posts and subscriptions")
    async def delete_user(self, info: Info[GraphQLContext, None], id: UUID) -> str:  # noqa: A002
        async with _write(info.context, "deleteUser") as session:
            await get_user_repository().delete_by_id(session, id)
        logger.info("User deleted", extra={"user_id": str(id)})
        return "User deleted"

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------

    @strawberry.mutation(description="Create the profile of a user")
    async def create_profile(
        self,
        info: Info[GraphQLContext, None],
        dto: CreateProfileInput,
    ) -> ProfileType:
        """Create a profile.

        A second profile for the same user, or an unknown ``userId``, is
        rejected with a ``CONFLICT`` error.
        """
        profile = Profile(
            is_male=dto.is_male,
            year_of_birth=dto.year_of_birth,
            user_id=dto.user_id,
            member_type_id=dto.member_type_id,
        )
        async with _write(info.context, "createProfile") as session:
            profile = await get_profile_repository().create(session, profile)
        logger.info(
            "Profile created",
            extra={"profile_id": str(profile.id), "user_id": str(profile.user_id)},
        )
        return ProfileType.from_model(profile)

    @strawberry.mutation(description="Change a profile")
    async def change_profile(
        self,
        info: Info[GraphQLContext, None],
        id: UUID,  # noqa: A002
        dto: ChangeProfileInput,
    ) -> ProfileType:
        repo = get_profile_repository()
        values = {
            "is_male": dto.is_male,
            "year_of_birth": dto.year_of_birth,
            "member_type_id": dto.member_type_id,
        }
        async with _write(info.context, "changeProfile") as session:
            profile = await repo.get_or_raise(session, id)
            profile = await repo.update(session, profile, values)
        logger.info("Profile changed", extra={"profile_id": str(id)})
        return ProfileType.from_model(profile)

    @strawberry.mutation(description="Delete a profile")
    async def delete_profile(self, info: Info[GraphQLContext, None], id: UUID) -> str:  # noqa: A002
        async with _write(info.context, "deleteProfile") as session:
            await get_profile_repository().delete_by_id(session, id)
        logger.info("Profile deleted", extra={"profile_id": str(id)})
        return "Profile deleted"

    # ------------------------------------------------------------------
    # Posts
    # ------------------------------------------------------------------

    @strawberry.mutation(description="Create a post")
    async def create_post(self, info: Info[GraphQLContext, None], dto: CreatePostInput) -> PostType:
        post = Post(title=dto.title, content=dto.content, author_id=dto.author_id)
        async with _write(info.context, "createPost") as session:
            post = await get_post_repository().create(session, post)
        logger.info(
            "Post created",
            extra={"post_id": str(post.id), "author_id": str(post.author_id)},
        )
        return PostType.from_model(post)

    @strawberry.mutation(description="Change a post")
    async def change_post(
        self,
        info: Info[GraphQLContext, None],
        id: UUID,  # noqa: A002
        dto: ChangePostInput,
    ) -> PostType:
        repo = get_post_repository()
        async with _write(info.context, "changePost") as session:
            post = await repo.get_or_raise(session, id)
            post = await repo.update(session, post, {"title": dto.title, "content": dto.content})
        logger.info("Post changed", extra={"post_id": str(id)})
        return PostType.from_model(post)

    @strawberry.mutation(description="Delete a post")
    async def delete_post(self, info: Info[GraphQLContext, None], id: UUID) -> str:  # noqa: A002
        async with _write(info.context, "deletePost") as session:
            await get_post_repository().delete_by_id(session, id)
        logger.info("Post deleted", extra={"post_id": str(id)})
        return "Post deleted"

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    @strawberry.mutation(description="Subscribe user `userId` to author `authorId`")
    async def subscribe_to(
        self,
        info: Info[GraphQLContext, None],
        user_id: UUID,
        author_id: UUID,
    ) -> str:
        async with _write(info.context, "subscribeTo") as session:
            await get_subscription_repository().subscribe(session, user_id, author_id)
        logger.info(
            "Subscription created",
            extra={"subscriber_id": str(user_id), "author_id": str(author_id)},
        )
        return "Subscribed"

    @strawberry.mutation(description="Remove the subscription of `userId` to `authorId`")
    async def unsubscribe_from(
        self,
        info: Info[GraphQLContext, None],
        user_id: UUID,
        author_id: UUID,
    ) -> str:
        async with _write(info.context, "unsubscribeFrom") as session:
            await get_subscription_repository().unsubscribe(session, user_id, author_id)
        logger.info(
            "Subscription removed",
            extra={"subscriber_id": str(user_id), "author_id": str(author_id)},
        )
        return "Unsubscribed"


__all__ = ["Mutation"]
