"""Unit tests for the static depth guard."""

from __future__ import annotations

import pytest
from graphql import parse, validate

from social_service.features.graphql.extensions.depth_guard import (
    DEPTH_LIMIT_EXCEEDED,
    check,
    depth_guard_rule,
    measure_depths,
)
from social_service.features.graphql.schema import schema


def depth_of(source: str) -> int:
    [(_, depth)] = measure_depths(parse(source))
    return depth


class TestMeasureDepth:
    def test_scalar_only_root(self) -> None:
        assert depth_of("{ users { id } }") == 1

    def test_each_nested_relation_adds_one(self) -> None:
        assert depth_of("{ users { posts { id } } }") == 2
        assert depth_of("{ users { profile { memberType { id } } } }") == 3

    def test_deepest_branch_wins(self) -> None:
        source = """
            {
                users {
                    posts { id }
                    userSubscribedTo { subscribedToUser { id } }
                }
                memberTypes { id }
            }
        """
        assert depth_of(source) == 3

    def test_fragment_spread_counts_as_its_body(self) -> None:
        source = """
            query { users { ...Rel } }
            fragment Rel on User { profile { memberType { id } } }
        """
        assert depth_of(source) == 3

    def test_inline_fragment_adds_nothing(self) -> None:
        assert depth_of("{ users { ... on User { posts { id } } } }") == 2

    def test_introspection_fields_are_ignored(self) -> None:
        source = "{ __schema { types { fields { type { name } } } } users { id } }"
        assert depth_of(source) == 1

    def test_fragment_cycle_terminates(self) -> None:
        source = """
            query { users { ...A } }
            fragment A on User { userSubscribedTo { ...B } }
            fragment B on User { subscribedToUser { ...A } }
        """
        assert depth_of(source) == 3

    def test_every_operation_is_measured(self) -> None:
        document = parse(
            """
            query Shallow { users { id } }
            query Deep { users { posts { id } } }
            """,
        )
        depths = {op.name.value: depth for op, depth in measure_depths(document)}
        assert depths == {"Shallow": 1, "Deep": 2}


class TestCheck:
    def test_at_bound_passes(self) -> None:
        assert check(parse("{ users { posts { id } } }"), 2) == []

    def test_over_bound_reports_violation(self) -> None:
        [violation] = check(parse("query Q { users { posts { id } } }"), 1)

        assert violation.operation_name == "Q"
        assert violation.depth == 2
        assert violation.message == "'Q' exceeds maximum operation depth of 1"

    def test_anonymous_operation_is_named_in_message(self) -> None:
        [violation] = check(parse("{ users { posts { id } } }"), 1)

        assert violation.message == "'anonymous' exceeds maximum operation depth of 1"

    def test_error_carries_code_and_numbers(self) -> None:
        [violation] = check(parse("{ users { posts { id } } }"), 1)

        error = violation.to_error()

        assert error.extensions == {"code": DEPTH_LIMIT_EXCEEDED, "depth": 2, "limit": 1}


class TestValidationRule:
    def test_rule_reports_through_validation(self) -> None:
        document = parse("{ users { profile { memberType { id } } } }")

        errors = validate(schema._schema, document, [depth_guard_rule(2)])

        assert len(errors) == 1
        assert errors[0].extensions["code"] == DEPTH_LIMIT_EXCEEDED

    def test_rule_accepts_shallow_documents(self) -> None:
        document = parse("{ users { profile { id } } }")

        assert validate(schema._schema, document, [depth_guard_rule(5)]) == []

    def test_bound_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="at least 1"):
            depth_guard_rule(0)
