"""GraphQL types for profiles."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import strawberry
from strawberry.types import Info

from social_service.features.graphql.context import GraphQLContext
from social_service.features.graphql.types.member_types import MemberTypeIdEnum, MemberTypeType

if TYPE_CHECKING:
    from social_service.core.models import Profile


@strawberry.type(name="Profile", description="User profile with its membership tier")
class ProfileType:
    id: UUID
    is_male: bool
    year_of_birth: int
    user_id: UUID
    member_type_id: MemberTypeIdEnum

    @strawberry.field(description="Membership tier of this profile")
    async def member_type(self, info: Info[GraphQLContext, None]) -> MemberTypeType:
        """Resolve the tier through the member type loader.

        ``member_type_id`` is a foreign key, so a missing tier means the
        store is inconsistent and the error is reported at this field.
        """
        member_type = await info.context.loaders.member_types.load(self.member_type_id)
        if member_type is None:
            msg = f"MemberType {self.member_type_id.value} does not exist"
            raise LookupError(msg)
        return MemberTypeType.from_model(member_type)

    @classmethod
    def from_model(cls, profile: Profile) -> ProfileType:
        return cls(
            id=profile.id,
            is_male=profile.is_male,
            year_of_birth=profile.year_of_birth,
            user_id=profile.user_id,
            member_type_id=profile.member_type_id,
        )


__all__ = ["ProfileType"]
