"""Static depth guard for GraphQL documents.

Rejects operations nested deeper than a configured bound before any resolver
runs. Depth is the number of nested fields that carry a selection set along
the deepest path, so ``{ users { id } }`` has depth 1 and
``{ users { posts { id } } }`` has depth 2. A fragment spread counts as the
fragment body. Introspection fields (``__schema``, ``__type``) are ignored.

Usage:
    from strawberry.extensions import AddValidationRules

    extensions = [AddValidationRules([depth_guard_rule(5)])]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from graphql import (
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    GraphQLError,
    InlineFragmentNode,
    OperationDefinitionNode,
    ValidationRule,
)

if TYPE_CHECKING:
    from graphql import DocumentNode, SelectionSetNode

logger = logging.getLogger(__name__)

DEPTH_LIMIT_EXCEEDED = "DEPTH_LIMIT_EXCEEDED"


@dataclass(frozen=True, slots=True)
class DepthViolation:
    """An operation whose depth exceeds the bound."""

    operation_name: str | None
    depth: int
    max_depth: int
    node: OperationDefinitionNode

    @property
    def message(self) -> str:
        name = self.operation_name or "anonymous"
        return f"'{name}' exceeds maximum operation depth of {self.max_depth}"

    def to_error(self) -> GraphQLError:
        return GraphQLError(
            self.message,
            nodes=[self.node],
            extensions={
                "code": DEPTH_LIMIT_EXCEEDED,
                "depth": self.depth,
                "limit": self.max_depth,
            },
        )


class _DepthMeter:
    """Measures selection depth, expanding each fragment at most once."""

    def __init__(self, document: DocumentNode) -> None:
        self._fragments = {
            definition.name.value: definition
            for definition in document.definitions
            if isinstance(definition, FragmentDefinitionNode)
        }
        self._fragment_depths: dict[str, int] = {}
        self._visiting: set[str] = set()

    def selection_depth(self, selection_set: SelectionSetNode | None) -> int:
        if selection_set is None:
            return 0

        deepest = 0
        for selection in selection_set.selections:
            if isinstance(selection, FieldNode):
                if selection.name.value.startswith("__"):
                    continue
                if selection.selection_set is not None:
                    deepest = max(deepest, 1 + self.selection_depth(selection.selection_set))
            elif isinstance(selection, InlineFragmentNode):
                deepest = max(deepest, self.selection_depth(selection.selection_set))
            elif isinstance(selection, FragmentSpreadNode):
                deepest = max(deepest, self.fragment_depth(selection.name.value))
        return deepest

    def fragment_depth(self, name: str) -> int:
        if name in self._fragment_depths:
            return self._fragment_depths[name]
        fragment = self._fragments.get(name)
        # Unknown fragments and cycles are reported by the standard rules
        if fragment is None or name in self._visiting:
            return 0

        self._visiting.add(name)
        try:
            depth = self.selection_depth(fragment.selection_set)
        finally:
            self._visiting.discard(name)
        self._fragment_depths[name] = depth
        return depth


def measure_depths(document: DocumentNode) -> list[tuple[OperationDefinitionNode, int]]:
    """Return every operation of ``document`` paired with its depth."""
    meter = _DepthMeter(document)
    return [
        (definition, meter.selection_depth(definition.selection_set))
        for definition in document.definitions
        if isinstance(definition, OperationDefinitionNode)
    ]


def check(document: DocumentNode, max_depth: int) -> list[DepthViolation]:
    """Return one violation per operation deeper than ``max_depth``.

    Pure and linear in the size of the document; performs no I/O.
    """
    violations: list[DepthViolation] = []
    for operation, depth in measure_depths(document):
        if depth > max_depth:
            violations.append(
                DepthViolation(
                    operation_name=operation.name.value if operation.name else None,
                    depth=depth,
                    max_depth=max_depth,
                    node=operation,
                ),
            )
    return violations


def depth_guard_rule(max_depth: int) -> type[ValidationRule]:
    """Build a validation rule class bound to ``max_depth``.

    graphql-core instantiates rules itself with only a validation context,
    so the bound is closed over rather than passed in.
    """
    if max_depth < 1:
        msg = f"max_depth must be at least 1, got {max_depth}"
        raise ValueError(msg)

    class DepthGuardRule(ValidationRule):
        def enter_document(self, node: DocumentNode, *_args: Any) -> None:
            for violation in check(node, max_depth):
                logger.info(
                    "Operation rejected by depth guard",
                    extra={
                        "operation_name": violation.operation_name,
                        "depth": violation.depth,
                        "max_depth": max_depth,
                    },
                )
                self.report_error(violation.to_error())

    DepthGuardRule.__name__ = f"DepthGuardRule{max_depth}"
    return DepthGuardRule


__all__ = [
    "DEPTH_LIMIT_EXCEEDED",
    "DepthViolation",
    "check",
    "depth_guard_rule",
    "measure_depths",
]
