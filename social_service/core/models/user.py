"""User model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Float, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from social_service.core.database import Base, UUIDPKMixin

if TYPE_CHECKING:
    from .profile import Profile
    from .subscription import SubscriptionEdge


class User(Base, UUIDPKMixin):
    """User account.

    Relationships default to ``lazy="raise"``: an async session cannot lazy
    load, so every relation must come from an explicit eager load or from a
    GraphQL loader. The planner adds ``joinedload`` options for the ones a
    query asks for.
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    balance: Mapped[float] = mapped_column(Float, nullable=False)

    profile: Mapped[Profile | None] = relationship(
        "Profile", uselist=False, lazy="raise", viewonly=True,
    )
    # Edges where this user is the subscriber (users this user follows)
    outgoing_subscriptions: Mapped[list[SubscriptionEdge]] = relationship(
        "SubscriptionEdge",
        foreign_keys="SubscriptionEdge.subscriber_id",
        lazy="raise",
        viewonly=True,
    )
    # Edges where this user is the author (users following this user)
    incoming_subscriptions: Mapped[list[SubscriptionEdge]] = relationship(
        "SubscriptionEdge",
        foreign_keys="SubscriptionEdge.author_id",
        lazy="raise",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name={self.name})>"
