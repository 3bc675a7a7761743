"""DataLoader for membership tiers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from social_service.core.repositories import get_member_type_repository
from social_service.features.graphql.dataloaders.base import SingleValueLoader

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

    from social_service.core.models import MemberType, MemberTypeId


class MemberTypeDataLoader(SingleValueLoader["MemberTypeId", "MemberType"]):
    """Loads tiers by ``MemberTypeId``.

    Many profiles share a handful of tiers, so a page of profiles resolves
    ``memberType`` with one statement for the distinct tier IDs.
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
            "member_types",
            self._fetch_member_types,
            key_of=lambda member_type: member_type.id,
            lock=lock,
            max_batch_size=max_batch_size,
        )

    async def _fetch_member_types(self, ids: list[MemberTypeId]) -> Sequence[MemberType]:
        return await get_member_type_repository().fetch_by_ids(self._session, ids)


__all__ = ["MemberTypeDataLoader"]
