"""Process-wide Prometheus registry and application metrics.

GraphQL metrics register themselves on the same default registry, so one
``/metrics`` scrape returns everything.
"""

from __future__ import annotations

from prometheus_client import REGISTRY, Gauge

application_info = Gauge(
    "application_info",
    "Application information (always 1)",
    labelnames=["version", "service", "environment"],
    registry=REGISTRY,
)

__all__ = ["REGISTRY", "application_info"]
