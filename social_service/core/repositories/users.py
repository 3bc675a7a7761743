"""Repository for users, including eager-join planning for root queries."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy.orm import joinedload

from social_service.core.database.repository import BaseRepository
from social_service.core.models import SubscriptionEdge, User

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession


# Relation names accepted by ``include=``; each maps to one joined eager load.
PROFILE = "profile"
SUBSCRIBED_AUTHORS = "outgoing_subscriptions"
SUBSCRIBERS = "incoming_subscriptions"

USER_RELATIONS = frozenset({PROFILE, SUBSCRIBED_AUTHORS, SUBSCRIBERS})


def eager_options(include: Iterable[str]) -> list[Any]:
    """Build ``joinedload`` options for the requested relation names.

    Subscription edges are joined together with the user on the other side
    of the edge, so the relation is usable without further statements.

    Raises:
        ValueError: If a name is not one of ``USER_RELATIONS``
    """
    options: list[Any] = []
    for name in sorted(set(include)):
        if name == PROFILE:
            options.append(joinedload(User.profile))
        elif name == SUBSCRIBED_AUTHORS:
            options.append(
                joinedload(User.outgoing_subscriptions).joinedload(SubscriptionEdge.author),
            )
        elif name == SUBSCRIBERS:
            options.append(
                joinedload(User.incoming_subscriptions).joinedload(SubscriptionEdge.subscriber),
            )
        else:
            msg = f"Unknown user relation: {name!r}"
            raise ValueError(msg)
    return options


class UserRepository(BaseRepository[User]):
    """Repository for User model.

    Inherits from BaseRepository:
        - get(session, id) -> User | None
        - get_or_raise(session, id) -> User
        - list(session) -> Sequence[User]
        - create(session, instance) -> User
        - update(session, instance, values) -> User
        - delete_by_id(session, id) -> None
    """

    def __init__(self) -> None:
        """Initialize with User model."""
        super().__init__(User)

    async def list_users(
        self,
        session: AsyncSession,
        *,
        include: Iterable[str] = frozenset(),
    ) -> Sequence[User]:
        """List all users, joining the named relations in the same statement."""
        return await self.list(session, options=eager_options(include))

    async def get_user(
        self,
        session: AsyncSession,
        user_id: UUID,
        *,
        include: Iterable[str] = frozenset(),
    ) -> User | None:
        """Get one user, joining the named relations in the same statement."""
        return await self.get(session, user_id, options=eager_options(include))

    async def fetch_by_ids(
        self,
        session: AsyncSession,
        user_ids: Sequence[UUID],
    ) -> Sequence[User]:
        """Fetch users whose id is in ``user_ids`` with one statement."""
        return await self.fetch_by_keys(session, User.id, user_ids)


_user_repository: UserRepository | None = None


def get_user_repository() -> UserRepository:
    """Get the shared UserRepository instance."""
    global _user_repository
    if _user_repository is None:
        _user_repository = UserRepository()
    return _user_repository
