"""GraphQL object and input types."""

from social_service.features.graphql.types.inputs import (
    ChangePostInput,
    ChangeProfileInput,
    ChangeUserInput,
    CreatePostInput,
    CreateProfileInput,
    CreateUserInput,
)
from social_service.features.graphql.types.member_types import MemberTypeIdEnum, MemberTypeType
from social_service.features.graphql.types.posts import PostType
from social_service.features.graphql.types.profiles import ProfileType
from social_service.features.graphql.types.users import UserType

__all__ = [
    "ChangePostInput",
    "ChangeProfileInput",
    "ChangeUserInput",
    "CreatePostInput",
    "CreateProfileInput",
    "CreateUserInput",
    "MemberTypeIdEnum",
    "MemberTypeType",
    "PostType",
    "ProfileType",
    "UserType",
]
