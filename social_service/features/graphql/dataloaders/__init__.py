"""DataLoader container and factory.

DataLoaders batch and cache database lookups within a single request,
preventing N+1 query problems common in GraphQL resolvers.

Each GraphQL request gets its own DataLoader instances so batching windows
and caches are never shared across requests.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from social_service.features.graphql.dataloaders.base import (
    KeyBatchedLoader,
    MultiValueLoader,
    SingleValueLoader,
)
from social_service.features.graphql.dataloaders.member_types import MemberTypeDataLoader
from social_service.features.graphql.dataloaders.posts import (
    PostDataLoader,
    PostsByAuthorDataLoader,
)
from social_service.features.graphql.dataloaders.profiles import (
    ProfileByUserDataLoader,
    ProfileDataLoader,
)
from social_service.features.graphql.dataloaders.subscriptions import (
    SubscribedAuthorsDataLoader,
    SubscribersDataLoader,
)
from social_service.features.graphql.dataloaders.users import UserDataLoader

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


@dataclass
class DataLoaders:
    """Container for all DataLoader instances.

    One instance created per GraphQL request. ``session_lock`` is shared by
    every loader and by root resolvers that use the session directly.

    Usage in resolver:
        ctx = info.context
        posts = await ctx.loaders.posts_by_author.load(user_id)
    """

    users: UserDataLoader
    posts: PostDataLoader
    profiles: ProfileDataLoader
    member_types: MemberTypeDataLoader
    profile_by_user: ProfileByUserDataLoader
    posts_by_author: PostsByAuthorDataLoader
    subscribed_authors: SubscribedAuthorsDataLoader
    subscribers: SubscribersDataLoader
    session_lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def all(self) -> list[KeyBatchedLoader]:
        return [
            self.users,
            self.posts,
            self.profiles,
            self.member_types,
            self.profile_by_user,
            self.posts_by_author,
            self.subscribed_authors,
            self.subscribers,
        ]

    def clear_all(self) -> None:
        """Drop every cached entry, e.g. after a mutation changed the store."""
        for loader in self.all():
            loader.clear_all()


def create_dataloaders(
    session: AsyncSession,
    *,
    max_batch_size: int | None = None,
) -> DataLoaders:
    """Factory for creating request-scoped DataLoaders.

    Args:
        session: Database session for the current request
        max_batch_size: Optional cap on keys per backend call

    Returns:
        DataLoaders container with all loaders initialized
    """
    lock = asyncio.Lock()
    options = {"lock": lock, "max_batch_size": max_batch_size}
    return DataLoaders(
        users=UserDataLoader(session, **options),
        posts=PostDataLoader(session, **options),
        profiles=ProfileDataLoader(session, **options),
        member_types=MemberTypeDataLoader(session, **options),
        profile_by_user=ProfileByUserDataLoader(session, **options),
        posts_by_author=PostsByAuthorDataLoader(session, **options),
        subscribed_authors=SubscribedAuthorsDataLoader(session, **options),
        subscribers=SubscribersDataLoader(session, **options),
        session_lock=lock,
    )


__all__ = [
    "DataLoaders",
    "KeyBatchedLoader",
    "MemberTypeDataLoader",
    "MultiValueLoader",
    "PostDataLoader",
    "PostsByAuthorDataLoader",
    "ProfileByUserDataLoader",
    "ProfileDataLoader",
    "SingleValueLoader",
    "SubscribedAuthorsDataLoader",
    "SubscribersDataLoader",
    "UserDataLoader",
    "create_dataloaders",
]
