"""Repository for profiles."""

from __future__ import annotations

from typing import TYPE_CHECKING

from social_service.core.database.repository import BaseRepository
from social_service.core.models import Profile

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession


class ProfileRepository(BaseRepository[Profile]):
    """Repository for Profile model."""

    def __init__(self) -> None:
        super().__init__(Profile)

    async def fetch_by_ids(
        self,
        session: AsyncSession,
        profile_ids: Sequence[UUID],
    ) -> Sequence[Profile]:
        return await self.fetch_by_keys(session, Profile.id, profile_ids)

    async def fetch_by_user_ids(
        self,
        session: AsyncSession,
        user_ids: Sequence[UUID],
    ) -> Sequence[Profile]:
        """Fetch the profiles owned by ``user_ids`` (at most one per user)."""
        return await self.fetch_by_keys(session, Profile.user_id, user_ids)


_profile_repository: ProfileRepository | None = None


def get_profile_repository() -> ProfileRepository:
    """Get the shared ProfileRepository instance."""
    global _profile_repository
    if _profile_repository is None:
        _profile_repository = ProfileRepository()
    return _profile_repository
