"""HTTP tests for the GraphQL endpoint and the metrics endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

from tests.test_graphql.conftest import (
    CHANGE_USER_MUTATION,
    TOO_DEEP_QUERY,
    USERS_WITH_POSTS_QUERY,
)

if TYPE_CHECKING:
    from httpx import AsyncClient

    from tests.conftest import SocialGraph

pytestmark = pytest.mark.integration

GRAPHQL_PATH = "/graphql"


@pytest.mark.asyncio
async def test_query_over_http(client: AsyncClient, social_graph: SocialGraph) -> None:
    """Test that a POSTed query returns JSON data."""
    response = await client.post(GRAPHQL_PATH, json={"query": USERS_WITH_POSTS_QUERY})

    assert response.status_code == 200
    body = response.json()
    assert "errors" not in body
    posts_per_user = {user["id"]: len(user["posts"]) for user in body["data"]["users"]}
    assert posts_per_user == {
        str(social_graph.alice): 2,
        str(social_graph.bob): 1,
        str(social_graph.carol): 0,
    }


@pytest.mark.asyncio
async def test_too_deep_query_over_http(client: AsyncClient) -> None:
    """Test that depth violations come back as GraphQL errors without data."""
    response = await client.post(GRAPHQL_PATH, json={"query": TOO_DEEP_QUERY})

    body = response.json()
    assert body.get("data") is None
    assert body["errors"][0]["extensions"]["code"] == "DEPTH_LIMIT_EXCEEDED"
    assert "exceeds maximum operation depth of 5" in body["errors"][0]["message"]


@pytest.mark.asyncio
async def test_mutation_error_code_over_http(client: AsyncClient) -> None:
    """Test that domain errors expose their code to HTTP clients."""
    response = await client.post(
        GRAPHQL_PATH,
        json={
            "query": CHANGE_USER_MUTATION,
            "variables": {"id": str(uuid4()), "dto": {"name": "Nobody"}},
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["data"] is None
    assert body["errors"][0]["extensions"]["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_requests_get_separate_sessions(
    client: AsyncClient,
    social_graph: SocialGraph,
) -> None:
    """Test that a write in one request is visible to the next."""
    mutation = await client.post(
        GRAPHQL_PATH,
        json={
            "query": CHANGE_USER_MUTATION,
            "variables": {"id": str(social_graph.carol), "dto": {"balance": 9.0}},
        },
        headers={"X-Request-ID": "req-1"},
    )
    assert mutation.json()["data"]["changeUser"]["balance"] == 9.0

    query = await client.post(
        GRAPHQL_PATH,
        json={
            "query": "query($id: UUID!) { user(id: $id) { balance } }",
            "variables": {"id": str(social_graph.carol)},
        },
    )
    assert query.json()["data"]["user"] == {"balance": 9.0}


@pytest.mark.asyncio
async def test_graphql_ide_served_on_get(client: AsyncClient) -> None:
    """Test that the IDE page is served to browsers."""
    response = await client.get(GRAPHQL_PATH, headers={"Accept": "text/html"})

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]


@pytest.mark.asyncio
async def test_metrics_endpoint_reports_graphql_operations(
    client: AsyncClient,
    social_graph: SocialGraph,
) -> None:
    """Test that Prometheus metrics include GraphQL and loader series."""
    await client.post(GRAPHQL_PATH, json={"query": USERS_WITH_POSTS_QUERY})

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert "graphql_requests_total" in response.text
    assert "graphql_dataloader_batches_total" in response.text
