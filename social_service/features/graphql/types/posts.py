"""GraphQL types for posts."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import strawberry

if TYPE_CHECKING:
    from social_service.core.models import Post


@strawberry.type(name="Post", description="A post written by a user")
class PostType:
    id: UUID
    title: str
    content: str
    author_id: UUID

    @classmethod
    def from_model(cls, post: Post) -> PostType:
        return cls(id=post.id, title=post.title, content=post.content, author_id=post.author_id)


__all__ = ["PostType"]
