"""DataLoader for batch-loading users by ID."""

from __future__ import annotations

from typing import TYPE_CHECKING

from social_service.core.repositories import get_user_repository
from social_service.features.graphql.dataloaders.base import SingleValueLoader

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Sequence
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession

    from social_service.core.models import User


class UserDataLoader(SingleValueLoader["UUID", "User"]):
    """Identity loader for users.

    Also primed with every user a root query or a joined subscription
    already fetched, so nested references to those users cost nothing.

    Usage:
        loader = UserDataLoader(session)
        user = await loader.load(uuid)  # Batched with other loads
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
            "users",
            self._fetch_users,
            key_of=lambda user: user.id,
            lock=lock,
            max_batch_size=max_batch_size,
        )

    async def _fetch_users(self, ids: list[UUID]) -> Sequence[User]:
        return await get_user_repository().fetch_by_ids(self._session, ids)


__all__ = ["UserDataLoader"]
