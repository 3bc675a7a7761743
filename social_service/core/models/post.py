"""Post model."""

from __future__ import annotations

import uuid

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from social_service.core.database import Base, UUIDPKMixin


class Post(Base, UUIDPKMixin):
    """Post written by a user."""

    __tablename__ = "posts"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    author_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, title={self.title}, author_id={self.author_id})>"
