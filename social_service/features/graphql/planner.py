"""Field-selection planner for user root queries.

A root ``users`` or ``user(id)`` resolver looks at its own selection set
before fetching. Relations that were asked for are joined into the root
statement, and the joined rows are primed into the request's loaders, so the
nested relation resolvers find every value cached and issue no statements.
Relations the planner did not see still resolve through the batched loaders.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from strawberry.types.nodes import FragmentSpread, InlineFragment, SelectedField

from social_service.core.repositories import PROFILE, SUBSCRIBED_AUTHORS, SUBSCRIBERS

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from strawberry.types.nodes import Selection

    from social_service.core.models import User
    from social_service.features.graphql.dataloaders import DataLoaders


@dataclass(frozen=True, slots=True)
class RelationPlan:
    """Which user relations to join into the root fetch."""

    profile: bool = False
    subscribed_to: bool = False
    subscribers: bool = False

    @property
    def relations(self) -> frozenset[str]:
        """Relation names for ``UserRepository.list_users(include=...)``."""
        names = set()
        if self.profile:
            names.add(PROFILE)
        if self.subscribed_to:
            names.add(SUBSCRIBED_AUTHORS)
        if self.subscribers:
            names.add(SUBSCRIBERS)
        return frozenset(names)

    @property
    def is_empty(self) -> bool:
        return not (self.profile or self.subscribed_to or self.subscribers)


def _is_skipped(directives: dict[str, Any]) -> bool:
    skip = directives.get("skip")
    if skip and skip.get("if") is True:
        return True
    include = directives.get("include")
    return bool(include) and include.get("if") is False


def _requested_fields(selections: Iterable[Selection]) -> set[str]:
    # Field names (never aliases) of the selection set, fragments flattened
    names: set[str] = set()
    for selection in selections:
        if _is_skipped(selection.directives or {}):
            continue
        if isinstance(selection, SelectedField):
            names.add(selection.name)
        elif isinstance(selection, (InlineFragment, FragmentSpread)):
            names |= _requested_fields(selection.selections)
    return names


def plan_user_relations(selections: Iterable[Selection]) -> RelationPlan:
    """Inspect the selections under a user root field.

    Args:
        selections: ``info.selected_fields[0].selections`` of the root field

    Returns:
        Plan flagging ``profile``, ``userSubscribedTo`` and ``subscribedToUser``
    """
    requested = _requested_fields(selections)
    return RelationPlan(
        profile="profile" in requested,
        subscribed_to="userSubscribedTo" in requested,
        subscribers="subscribedToUser" in requested,
    )


def prime_user_loaders(loaders: DataLoaders, users: Sequence[User], plan: RelationPlan) -> None:
    """Seed the request's loaders with what the planned root fetch returned.

    Every user, including users reached through a joined subscription edge,
    is primed into the identity loader. Each joined relation primes its
    relation loader for every root user, with ``None`` or ``[]`` when the
    join found nothing. Keys that are already cached keep their value.
    """
    for user in users:
        loaders.users.prime(user.id, user)

        if plan.profile:
            loaders.profile_by_user.prime(user.id, user.profile)
            if user.profile is not None:
                loaders.profiles.prime(user.profile.id, user.profile)

        if plan.subscribed_to:
            authors = [edge.author for edge in user.outgoing_subscriptions]
            loaders.subscribed_authors.prime(user.id, authors)
            for author in authors:
                loaders.users.prime(author.id, author)

        if plan.subscribers:
            subscribers = [edge.subscriber for edge in user.incoming_subscriptions]
            loaders.subscribers.prime(user.id, subscribers)
            for subscriber in subscribers:
                loaders.users.prime(subscriber.id, subscriber)


__all__ = ["RelationPlan", "plan_user_relations", "prime_user_loaders"]
