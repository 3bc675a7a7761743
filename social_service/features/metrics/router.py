"""Prometheus metrics endpoint for observability.

Endpoints:
    GET /metrics - Prometheus scrape endpoint

Metrics Exposed:
    GraphQL Metrics:
        - graphql_requests_total / graphql_request_duration_seconds
        - graphql_errors_total by error code
        - graphql_query_depth / graphql_depth_limit_exceeded_total

    DataLoader Metrics:
        - graphql_dataloader_loads_total / graphql_dataloader_batches_total
        - graphql_dataloader_batch_size

    Application Info:
        - application_info - Service version, name, and environment labels
"""

from __future__ import annotations

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from social_service.infra.metrics.prometheus import REGISTRY

router = APIRouter(tags=["observability"])


@router.get("/metrics")
async def metrics() -> Response:
    """Expose Prometheus metrics in the text exposition format."""
    data = generate_latest(REGISTRY)
    return Response(
        content=data,
        media_type=CONTENT_TYPE_LATEST,
        headers={"Cache-Control": "no-cache, no-store, must-revalidate"},
    )
