"""Unit tests for the user relation planner and loader priming."""

from __future__ import annotations

import uuid
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from strawberry.types.nodes import FragmentSpread, InlineFragment, SelectedField

from social_service.features.graphql.dataloaders import create_dataloaders
from social_service.features.graphql.planner import (
    RelationPlan,
    plan_user_relations,
    prime_user_loaders,
)


def field(name: str, *children, directives=None, alias=None) -> SelectedField:
    return SelectedField(
        name=name,
        directives=directives or {},
        arguments={},
        selections=list(children),
        alias=alias,
    )


class TestPlanUserRelations:
    def test_scalars_only_plan_is_empty(self) -> None:
        plan = plan_user_relations([field("id"), field("name"), field("posts", field("id"))])

        assert plan.is_empty
        assert plan.relations == frozenset()

    def test_each_relation_is_flagged(self) -> None:
        plan = plan_user_relations(
            [
                field("profile", field("id")),
                field("userSubscribedTo", field("id")),
                field("subscribedToUser", field("id")),
            ],
        )

        assert plan == RelationPlan(profile=True, subscribed_to=True, subscribers=True)
        assert plan.relations == {"profile", "outgoing_subscriptions", "incoming_subscriptions"}

    def test_alias_does_not_hide_field(self) -> None:
        plan = plan_user_relations([field("profile", field("id"), alias="card")])

        assert plan.profile

    def test_fragments_are_flattened(self) -> None:
        inline = InlineFragment(
            type_condition="User",
            selections=[field("subscribedToUser", field("id"))],
            directives={},
        )
        spread = FragmentSpread(
            name="Bits",
            type_condition="User",
            directives={},
            selections=[field("profile", field("id"))],
        )

        plan = plan_user_relations([inline, spread])

        assert plan == RelationPlan(profile=True, subscribers=True)

    def test_skipped_fields_are_not_planned(self) -> None:
        plan = plan_user_relations(
            [
                field("profile", field("id"), directives={"skip": {"if": True}}),
                field("userSubscribedTo", field("id"), directives={"include": {"if": False}}),
                field("subscribedToUser", field("id"), directives={"include": {"if": True}}),
            ],
        )

        assert plan == RelationPlan(subscribers=True)


def make_user(name: str, *, profile=None):
    return SimpleNamespace(
        id=uuid.uuid4(),
        name=name,
        profile=profile,
        outgoing_subscriptions=[],
        incoming_subscriptions=[],
    )


def follow(subscriber, author) -> None:
    edge = SimpleNamespace(subscriber=subscriber, author=author)
    subscriber.outgoing_subscriptions.append(edge)
    author.incoming_subscriptions.append(edge)


@pytest.fixture
def loaders():
    session = MagicMock()
    session.execute = AsyncMock(side_effect=RuntimeError("database reached"))
    return create_dataloaders(session)


@pytest.mark.asyncio
class TestPrimeUserLoaders:
    async def test_joined_relations_are_served_from_cache(self, loaders) -> None:
        profile = SimpleNamespace(id=uuid.uuid4())
        ann = make_user("Ann", profile=profile)
        ben = make_user("Ben")
        follow(ann, ben)

        prime_user_loaders(
            loaders,
            [ann, ben],
            RelationPlan(profile=True, subscribed_to=True, subscribers=True),
        )

        assert await loaders.users.load(ann.id) is ann
        assert await loaders.profile_by_user.load(ann.id) is profile
        assert await loaders.profiles.load(profile.id) is profile
        assert await loaders.profile_by_user.load(ben.id) is None
        assert await loaders.subscribed_authors.load(ann.id) == [ben]
        assert await loaders.subscribed_authors.load(ben.id) == []
        assert await loaders.subscribers.load(ben.id) == [ann]

    async def test_far_side_users_are_primed(self, loaders) -> None:
        ann = make_user("Ann")
        outsider = make_user("Outsider")
        follow(ann, outsider)

        prime_user_loaders(loaders, [ann], RelationPlan(subscribed_to=True))

        assert await loaders.users.load(outsider.id) is outsider

    async def test_unplanned_relations_are_left_alone(self, loaders) -> None:
        ann = make_user("Ann", profile=SimpleNamespace(id=uuid.uuid4()))

        prime_user_loaders(loaders, [ann], RelationPlan())

        assert await loaders.users.load(ann.id) is ann
        with pytest.raises(RuntimeError, match="database reached"):
            await loaders.profile_by_user.load(ann.id)
