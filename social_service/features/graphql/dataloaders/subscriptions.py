"""DataLoaders for the subscription join table.

Each edge row is fetched together with the user on the far side, so both
loaders resolve a user ID straight to a list of users.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from social_service.core.repositories import get_subscription_repository
from social_service.features.graphql.dataloaders.base import MultiValueLoader

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Sequence
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession

    from social_service.core.models import SubscriptionEdge


class SubscribedAuthorsDataLoader(MultiValueLoader["UUID", "SubscriptionEdge"]):
    """Subscriber ID -> authors that user follows (``userSubscribedTo``)."""

    def __init__(
        self,
        session: AsyncSession,
        *,
        lock: asyncio.Lock | None = None,
        max_batch_size: int | None = None,
    ) -> None:
        self._session = session
        super().__init__(
            "subscribed_authors",
            self._fetch_edges,
            key_of=lambda edge: edge.subscriber_id,
            value_of=lambda edge: edge.author,
            lock=lock,
            max_batch_size=max_batch_size,
        )

    async def _fetch_edges(self, subscriber_ids: list[UUID]) -> Sequence[SubscriptionEdge]:
        return await get_subscription_repository().fetch_by_subscriber_ids(
            self._session, subscriber_ids,
        )


class SubscribersDataLoader(MultiValueLoader["UUID", "SubscriptionEdge"]):
    """Author ID -> users following that author (``subscribedToUser``)."""

    def __init__(
        self,
        session: AsyncSession,
        *,
        lock: asyncio.Lock | None = None,
        max_batch_size: int | None = None,
    ) -> None:
        self._session = session
        super().__init__(
            "subscribers",
            self._fetch_edges,
            key_of=lambda edge: edge.author_id,
            value_of=lambda edge: edge.subscriber,
            lock=lock,
            max_batch_size=max_batch_size,
        )

    async def _fetch_edges(self, author_ids: list[UUID]) -> Sequence[SubscriptionEdge]:
        return await get_subscription_repository().fetch_by_author_ids(self._session, author_ids)


__all__ = ["SubscribedAuthorsDataLoader", "SubscribersDataLoader"]
