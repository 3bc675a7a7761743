"""Database models package.

Importing this package registers every model on ``Base.metadata``.
"""

from __future__ import annotations

from .member_type import DEFAULT_MEMBER_TYPES, MemberType, MemberTypeId
from .post import Post
from .profile import Profile
from .subscription import SubscriptionEdge
from .user import User

__all__ = [
    "DEFAULT_MEMBER_TYPES",
    "MemberType",
    "MemberTypeId",
    "Post",
    "Profile",
    "SubscriptionEdge",
    "User",
]
