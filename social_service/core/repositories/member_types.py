"""Repository for membership tiers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from social_service.core.database.repository import BaseRepository
from social_service.core.models import DEFAULT_MEMBER_TYPES, MemberType, MemberTypeId

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession


class MemberTypeRepository(BaseRepository[MemberType]):
    """Repository for MemberType model."""

    def __init__(self) -> None:
        super().__init__(MemberType)

    async def fetch_by_ids(
        self,
        session: AsyncSession,
        member_type_ids: Sequence[MemberTypeId],
    ) -> Sequence[MemberType]:
        return await self.fetch_by_keys(session, MemberType.id, member_type_ids)

    async def seed(self, session: AsyncSession) -> list[MemberTypeId]:
        """Insert the default tiers that are not stored yet.

        Existing rows are left untouched, so seeding can run on every start.

        Returns:
            Identifiers of the tiers that were inserted
        """
        result = await session.execute(select(MemberType.id))
        existing = set(result.scalars().all())

        created: list[MemberTypeId] = []
        for member_type_id, values in DEFAULT_MEMBER_TYPES.items():
            if member_type_id in existing:
                continue
            session.add(MemberType(id=member_type_id, **values))
            created.append(member_type_id)

        if created:
            await self._flush(session, "could not be seeded")
            self._logger.info(
                "Seeded member types",
                extra={"member_types": [m.value for m in created]},
            )
        return created


_member_type_repository: MemberTypeRepository | None = None


def get_member_type_repository() -> MemberTypeRepository:
    """Get the shared MemberTypeRepository instance."""
    global _member_type_repository
    if _member_type_repository is None:
        _member_type_repository = MemberTypeRepository()
    return _member_type_repository
