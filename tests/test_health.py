"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"


async def test_health_needs_no_identity(client: AsyncClient) -> None:
    """Health is not guarded: no actor or tenant headers required."""
    response = await client.get("/api/v1/health", headers={"X-Actor-ID": "   "})
    assert response.status_code == 200


async def test_response_carries_request_id(client: AsyncClient) -> None:
    """A valid X-Request-ID is echoed; a missing one is generated."""
    echoed = await client.get("/api/v1/health", headers={"X-Request-ID": "req-123"})
    generated = await client.get("/api/v1/health")
    assert echoed.headers["X-Request-ID"] == "req-123"
    assert generated.headers["X-Request-ID"]


async def test_unsafe_request_id_is_replaced(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/health", headers={"X-Request-ID": "bad id\twith spaces"}
    )
    assert response.headers["X-Request-ID"] != "bad id\twith spaces"
