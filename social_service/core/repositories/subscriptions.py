"""Repository for subscription edges."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload

from social_service.core.database.exceptions import IntegrityViolationError, NotFoundError
from social_service.core.database.repository import BaseRepository
from social_service.core.models import SubscriptionEdge

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession


class SubscriptionRepository(BaseRepository[SubscriptionEdge]):
    """Repository for the subscriber/author join table.

    Both fetches join the user on the far side of the edge, so a loader can
    map edges straight to users.
    """

    def __init__(self) -> None:
        super().__init__(SubscriptionEdge)

    async def fetch_by_subscriber_ids(
        self,
        session: AsyncSession,
        subscriber_ids: Sequence[UUID],
    ) -> Sequence[SubscriptionEdge]:
        """Fetch outgoing edges of ``subscriber_ids`` with their authors."""
        return await self.fetch_by_keys(
            session,
            SubscriptionEdge.subscriber_id,
            subscriber_ids,
            options=[joinedload(SubscriptionEdge.author)],
        )

    async def fetch_by_author_ids(
        self,
        session: AsyncSession,
        author_ids: Sequence[UUID],
    ) -> Sequence[SubscriptionEdge]:
        """Fetch incoming edges of ``author_ids`` with their subscribers."""
        return await self.fetch_by_keys(
            session,
            SubscriptionEdge.author_id,
            author_ids,
            options=[joinedload(SubscriptionEdge.subscriber)],
        )

    async def subscribe(
        self,
        session: AsyncSession,
        subscriber_id: UUID,
        author_id: UUID,
    ) -> None:
        """Insert the edge ``subscriber_id -> author_id``.

        Raises:
            IntegrityViolationError: If the edge exists or a user is unknown
        """
        stmt = insert(SubscriptionEdge).values(subscriber_id=subscriber_id, author_id=author_id)
        try:
            await session.execute(stmt)
        except IntegrityError as exc:
            self._logger.info(
                "Subscription rejected",
                extra={
                    "subscriber_id": str(subscriber_id),
                    "author_id": str(author_id),
                    "error": str(exc.orig),
                },
            )
            raise IntegrityViolationError(
                "Subscription",
                "already exists or references an unknown user",
                details={"subscriber_id": str(subscriber_id), "author_id": str(author_id)},
            ) from exc

    async def unsubscribe(
        self,
        session: AsyncSession,
        subscriber_id: UUID,
        author_id: UUID,
    ) -> None:
        """Delete the edge ``subscriber_id -> author_id``.

        Raises:
            NotFoundError: If no such edge exists
        """
        stmt = delete(SubscriptionEdge).where(
            SubscriptionEdge.subscriber_id == subscriber_id,
            SubscriptionEdge.author_id == author_id,
        )
        result = await session.execute(stmt)
        if not result.rowcount:
            raise NotFoundError(
                "Subscription",
                {"subscriber_id": str(subscriber_id), "author_id": str(author_id)},
            )


_subscription_repository: SubscriptionRepository | None = None


def get_subscription_repository() -> SubscriptionRepository:
    """Get the shared SubscriptionRepository instance."""
    global _subscription_repository
    if _subscription_repository is None:
        _subscription_repository = SubscriptionRepository()
    return _subscription_repository
