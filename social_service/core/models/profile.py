"""Profile model (one per user)."""

from __future__ import annotations

import uuid

from sqlalchemy import Boolean, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from social_service.core.database import Base, UUIDPKMixin

from .member_type import MemberTypeId, MemberTypeIdType


class Profile(Base, UUIDPKMixin):
    """User profile holding the membership tier.

    ``user_id`` is unique: a user has at most one profile.
    """

    __tablename__ = "profiles"

    is_male: Mapped[bool] = mapped_column(Boolean, nullable=False)
    year_of_birth: Mapped[int] = mapped_column(Integer, nullable=False)

    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False,
    )
    member_type_id: Mapped[MemberTypeId] = mapped_column(
        MemberTypeIdType,
        ForeignKey("member_types.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, user_id={self.user_id})>"
