"""DataLoaders for profiles: by profile ID and by owning user."""

from __future__ import annotations

from typing import TYPE_CHECKING

from social_service.core.repositories import get_profile_repository
from social_service.features.graphql.dataloaders.base import SingleValueLoader

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Sequence
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession

    from social_service.core.models import Profile


class ProfileDataLoader(SingleValueLoader["UUID", "Profile"]):
    """Identity loader for profiles (serves the ``profile(id)`` root)."""

    def __init__(
        self,
        session: AsyncSession,
        *,
        lock: asyncio.Lock | None = None,
        max_batch_size: int | None = None,
    ) -> None:
        self._session = session
        super().__init__(
            "profiles",
            self._fetch_profiles,
            key_of=lambda profile: profile.id,
            lock=lock,
            max_batch_size=max_batch_size,
        )

    async def _fetch_profiles(self, ids: list[UUID]) -> Sequence[Profile]:
        return await get_profile_repository().fetch_by_ids(self._session, ids)


class ProfileByUserDataLoader(SingleValueLoader["UUID", "Profile"]):
    """Loads the profile of each user ID; ``None`` for users without one.

    Usage:
        profile = await loaders.profile_by_user.load(user.id)
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
            "profile_by_user",
            self._fetch_profiles,
            key_of=lambda profile: profile.user_id,
            lock=lock,
            max_batch_size=max_batch_size,
        )

    async def _fetch_profiles(self, user_ids: list[UUID]) -> Sequence[Profile]:
        return await get_profile_repository().fetch_by_user_ids(self._session, user_ids)


__all__ = ["ProfileByUserDataLoader", "ProfileDataLoader"]
