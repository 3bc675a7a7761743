"""GraphQL types for membership tiers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from social_service.core.models import MemberTypeId

if TYPE_CHECKING:
    from social_service.core.models import MemberType

# The model enum doubles as the GraphQL enum so values never drift
MemberTypeIdEnum = strawberry.enum(MemberTypeId, name="MemberTypeId")


@strawberry.type(name="MemberType", description="Membership tier")
class MemberTypeType:
    id: MemberTypeIdEnum
    discount: float
    posts_limit_per_month: int

    @classmethod
    def from_model(cls, member_type: MemberType) -> MemberTypeType:
        return cls(
            id=member_type.id,
            discount=member_type.discount,
            posts_limit_per_month=member_type.posts_limit_per_month,
        )


__all__ = ["MemberTypeIdEnum", "MemberTypeType"]
