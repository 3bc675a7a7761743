"""Input types for mutations.

``Create*`` inputs require every column; ``Change*`` inputs make every field
optional and only the provided ones are written.
"""

from __future__ import annotations

from uuid import UUID

import strawberry

from social_service.features.graphql.types.member_types import MemberTypeIdEnum


@strawberry.input(description="Input for creating a user")
class CreateUserInput:
    name: str
    balance: float


@strawberry.input(description="Input for changing a user")
class ChangeUserInput:
    name: str | None = None
    balance: float | None = None


@strawberry.input(description="Input for creating a profile")
class CreateProfileInput:
    is_male: bool
    year_of_birth: int
    user_id: UUID
    member_type_id: MemberTypeIdEnum


@strawberry.input(description="Input for changing a profile")
class ChangeProfileInput:
    is_male: bool | None = None
    year_of_birth: int | None = None
    member_type_id: MemberTypeIdEnum | None = None


@strawberry.input(description="Input for creating a post")
class CreatePostInput:
    title: str
    content: str
    author_id: UUID


@strawberry.input(description="Input for changing a post")
class ChangePostInput:
    title: str | None = None
    content: str | None = None


__all__ = [
    "ChangePostInput",
    "ChangeProfileInput",
    "ChangeUserInput",
    "CreatePostInput",
    "CreateProfileInput",
    "CreateUserInput",
]
