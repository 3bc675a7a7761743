"""Entity repositories."""

from __future__ import annotations

from .member_types import MemberTypeRepository, get_member_type_repository
from .posts import PostRepository, get_post_repository
from .profiles import ProfileRepository, get_profile_repository
from .subscriptions import SubscriptionRepository, get_subscription_repository
from .users import (
    PROFILE,
    SUBSCRIBED_AUTHORS,
    SUBSCRIBERS,
    USER_RELATIONS,
    UserRepository,
    get_user_repository,
)

__all__ = [
    "PROFILE",
    "SUBSCRIBED_AUTHORS",
    "SUBSCRIBERS",
    "USER_RELATIONS",
    "MemberTypeRepository",
    "PostRepository",
    "ProfileRepository",
    "SubscriptionRepository",
    "UserRepository",
    "get_member_type_repository",
    "get_post_repository",
    "get_profile_repository",
    "get_subscription_repository",
    "get_user_repository",
]
