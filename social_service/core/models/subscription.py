"""Subscription edge between two users."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from social_service.core.database import Base

if TYPE_CHECKING:
    from .user import User


class SubscriptionEdge(Base):
    """``subscriber`` follows ``author``.

    The (subscriber_id, author_id) pair is the primary key, so a duplicate
    subscription is rejected by the store.
    """

    __tablename__ = "subscriptions"

    subscriber_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True,
    )

    subscriber: Mapped[User] = relationship(
        "User",
        foreign_keys=[subscriber_id],
        lazy="raise",
        viewonly=True,
    )
    author: Mapped[User] = relationship(
        "User",
        foreign_keys=[author_id],
        lazy="raise",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<SubscriptionEdge(subscriber_id={self.subscriber_id}, author_id={self.author_id})>"
