"""Repository for posts."""

from __future__ import annotations

from typing import TYPE_CHECKING

from social_service.core.database.repository import BaseRepository
from social_service.core.models import Post

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession


class PostRepository(BaseRepository[Post]):
    """Repository for Post model."""

    def __init__(self) -> None:
        super().__init__(Post)

    async def fetch_by_ids(
        self,
        session: AsyncSession,
        post_ids: Sequence[UUID],
    ) -> Sequence[Post]:
        return await self.fetch_by_keys(session, Post.id, post_ids)

    async def fetch_by_author_ids(
        self,
        session: AsyncSession,
        author_ids: Sequence[UUID],
    ) -> Sequence[Post]:
        """Fetch every post written by any of ``author_ids``.

        Args:
            session: Database session
            author_ids: Author (user) UUIDs

        Returns:
            Posts in backend order, several per author possible
        """
        return await self.fetch_by_keys(session, Post.author_id, author_ids)


_post_repository: PostRepository | None = None


def get_post_repository() -> PostRepository:
    """Get the shared PostRepository instance."""
    global _post_repository
    if _post_repository is None:
        _post_repository = PostRepository()
    return _post_repository
