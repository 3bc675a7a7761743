"""Prometheus metrics extension for GraphQL operations.

Records request rates, latencies, error codes, operation depth and
DataLoader efficiency.

Usage:
    from social_service.features.graphql.extensions.metrics import GraphQLMetricsExtension

    extensions = [
        GraphQLMetricsExtension,  # Enable metrics
    ]
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from prometheus_client import Counter, Gauge, Histogram
from strawberry.extensions import SchemaExtension

from social_service.features.graphql.extensions.depth_guard import (
    DEPTH_LIMIT_EXCEEDED,
    measure_depths,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from strawberry.types import ExecutionContext

logger = logging.getLogger(__name__)

__all__ = [
    "GRAPHQL_METRICS",
    "GraphQLMetricsExtension",
    "record_dataloader_batch",
    "record_dataloader_failure",
    "record_dataloader_load",
]


# ============================================================================
# Prometheus Metrics Definitions
# ============================================================================


class GraphQLMetrics:
    """Container for all GraphQL Prometheus metrics."""

    def __init__(self) -> None:
        """Initialize all GraphQL metrics."""
        # ====================================================================
        # Request Metrics
        # ====================================================================

        self.requests_total = Counter(
            "graphql_requests_total",
            "Total number of GraphQL requests",
            labelnames=["operation_type", "operation_name", "status"],
        )

        self.request_duration_seconds = Histogram(
            "graphql_request_duration_seconds",
            "GraphQL request duration in seconds",
            labelnames=["operation_type", "operation_name"],
            buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
        )

        self.errors_total = Counter(
            "graphql_errors_total",
            "Total number of GraphQL errors",
            labelnames=["operation_type", "operation_name", "error_code"],
        )

        self.active_requests = Gauge(
            "graphql_active_requests",
            "Number of currently active GraphQL requests",
        )

        # ====================================================================
        # Depth Metrics
        # ====================================================================

        self.query_depth = Histogram(
            "graphql_query_depth",
            "GraphQL query depth (nesting level)",
            labelnames=["operation_type", "operation_name"],
            buckets=(1, 2, 3, 4, 5, 7, 10, 15, 20),
        )

        self.depth_limit_exceeded_total = Counter(
            "graphql_depth_limit_exceeded_total",
            "Number of operations rejected by the depth guard",
        )

        # ====================================================================
        # DataLoader Metrics
        # ====================================================================

        self.dataloader_batch_size = Histogram(
            "graphql_dataloader_batch_size",
            "DataLoader batch size distribution",
            labelnames=["loader_name"],
            buckets=(1, 2, 5, 10, 20, 50, 100, 200, 500),
        )

        self.dataloader_loads_total = Counter(
            "graphql_dataloader_loads_total",
            "Total number of DataLoader load calls",
            labelnames=["loader_name"],
        )

        self.dataloader_batches_total = Counter(
            "graphql_dataloader_batches_total",
            "Total number of DataLoader batch executions",
            labelnames=["loader_name"],
        )

        self.dataloader_failures_total = Counter(
            "graphql_dataloader_failures_total",
            "DataLoader batches rejected by a backend error",
            labelnames=["loader_name"],
        )


# Global metrics instance
GRAPHQL_METRICS = GraphQLMetrics()


# ============================================================================
# Metrics Extension
# ============================================================================


def _operation_labels(execution_context: ExecutionContext) -> tuple[str, str]:
    # operation_type raises when the document failed to parse
    try:
        operation_type = execution_context.operation_type.value
    except RuntimeError:
        operation_type = "unknown"
    return operation_type, execution_context.operation_name or "anonymous"


class GraphQLMetricsExtension(SchemaExtension):
    """Prometheus metrics extension for GraphQL operations.

    Metrics are exposed via the standard Prometheus /metrics endpoint.

    Example:
        schema = SocialSchema(
            query=Query,
            mutation=Mutation,
            extensions=[GraphQLMetricsExtension],
        )
    """

    metrics = GRAPHQL_METRICS

    def on_operation(self) -> Iterator[None]:
        """Time the whole operation, from parsing to the final result."""
        self.metrics.active_requests.inc()
        start = time.perf_counter()
        try:
            yield
        finally:
            self.metrics.active_requests.dec()
            self._record(time.perf_counter() - start)

    def _record(self, duration: float) -> None:
        execution_context = self.execution_context
        operation_type, operation_name = _operation_labels(execution_context)

        self.metrics.request_duration_seconds.labels(
            operation_type=operation_type,
            operation_name=operation_name,
        ).observe(duration)

        errors = _collect_errors(execution_context)
        status = "error" if errors else "success"
        self.metrics.requests_total.labels(
            operation_type=operation_type,
            operation_name=operation_name,
            status=status,
        ).inc()

        for error in errors:
            error_code = "unknown"
            if getattr(error, "extensions", None):
                error_code = str(error.extensions.get("code", "unknown"))
            self.metrics.errors_total.labels(
                operation_type=operation_type,
                operation_name=operation_name,
                error_code=error_code,
            ).inc()
            if error_code == DEPTH_LIMIT_EXCEEDED:
                self.metrics.depth_limit_exceeded_total.inc()

        document = execution_context.graphql_document
        if document is not None:
            for _name, depth in measure_depths(document):
                self.metrics.query_depth.labels(
                    operation_type=operation_type,
                    operation_name=operation_name,
                ).observe(depth)


def _collect_errors(execution_context: ExecutionContext) -> list[Any]:
    result = getattr(execution_context, "result", None)
    if result is not None and getattr(result, "errors", None):
        return list(result.errors)
    return list(getattr(execution_context, "pre_execution_errors", None) or [])


# ============================================================================
# Helper Functions for Recording Metrics
# ============================================================================


def record_dataloader_batch(loader_name: str, batch_size: int) -> None:
    """Record DataLoader batch execution.

    Args:
        loader_name: Name of the DataLoader
        batch_size: Number of keys in the batch
    """
    GRAPHQL_METRICS.dataloader_batch_size.labels(loader_name=loader_name).observe(batch_size)
    GRAPHQL_METRICS.dataloader_batches_total.labels(loader_name=loader_name).inc()


def record_dataloader_load(loader_name: str) -> None:
    """Record a DataLoader load call.

    Args:
        loader_name: Name of the DataLoader
    """
    GRAPHQL_METRICS.dataloader_loads_total.labels(loader_name=loader_name).inc()


def record_dataloader_failure(loader_name: str) -> None:
    """Record a DataLoader batch that failed in the backend."""
    GRAPHQL_METRICS.dataloader_failures_total.labels(loader_name=loader_name).inc()
