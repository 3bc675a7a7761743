"""Membership tier model.

Tiers are a closed set identified by an enumerated value rather than a UUID.
"""

from __future__ import annotations

from enum import Enum

from sqlalchemy import Enum as SAEnum
from sqlalchemy import Float, Integer
from sqlalchemy.orm import Mapped, mapped_column

from social_service.core.database import Base


class MemberTypeId(str, Enum):
    """Identifier of a membership tier."""

    BASIC = "BASIC"
    BUSINESS = "BUSINESS"


# Non-native so SQLite and PostgreSQL store the same VARCHAR column.
MemberTypeIdType = SAEnum(MemberTypeId, name="member_type_id", native_enum=False, length=16)


class MemberType(Base):
    """Membership tier with its pricing discount and monthly post limit."""

    __tablename__ = "member_types"

    id: Mapped[MemberTypeId] = mapped_column(MemberTypeIdType, primary_key=True)
    discount: Mapped[float] = mapped_column(Float, nullable=False)
    posts_limit_per_month: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<MemberType(id={self.id.value}, discount={self.discount})>"


# Seed values for the two tiers.
DEFAULT_MEMBER_TYPES: dict[MemberTypeId, dict[str, float | int]] = {
    MemberTypeId.BASIC: {"discount": 2.3, "posts_limit_per_month": 20},
    MemberTypeId.BUSINESS: {"discount": 7.7, "posts_limit_per_month": 100},
}
