"""DataLoaders for posts: by post ID and by author."""

from __future__ import annotations

from typing import TYPE_CHECKING

from social_service.core.repositories import get_post_repository
from social_service.features.graphql.dataloaders.base import MultiValueLoader, SingleValueLoader

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Sequence
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession

    from social_service.core.models import Post


class PostDataLoader(SingleValueLoader["UUID", "Post"]):
    """Identity loader for posts (serves the ``post(id)`` root)."""

    def __init__(
        self,
        session: AsyncSession,
        *,
        lock: asyncio.Lock | None = None,
        max_batch_size: int | None = None,
    ) -> None:
        self._session = session
        super().__init__(
            "posts",
            self._fetch_posts,
            key_of=lambda post: post.id,
            lock=lock,
            max_batch_size=max_batch_size,
        )

    async def _fetch_posts(self, ids: list[UUID]) -> Sequence[Post]:
        return await get_post_repository().fetch_by_ids(self._session, ids)


class PostsByAuthorDataLoader(MultiValueLoader["UUID", "Post"]):
    """Loads every post of each author ID in one statement.

    Prevents N+1 queries for ``users { posts { ... } }``: all authors of one
    tick share a single ``WHERE author_id IN (...)``.
    """

    def __init__(
        self,
        session: AsyncSession,
        *,
        lock: asyncio.Lock | None = None,
        max_batch_size: int | None = None,
    ) -> None:
        self._session = session
        super().__init__(
            "posts_by_author",
            self._fetch_posts,
            key_of=lambda post: post.author_id,
            lock=lock,
            max_batch_size=max_batch_size,
        )

    async def _fetch_posts(self, author_ids: list[UUID]) -> Sequence[Post]:
        return await get_post_repository().fetch_by_author_ids(self._session, author_ids)


__all__ = ["PostDataLoader", "PostsByAuthorDataLoader"]
