"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/health returns 200 and status ok."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"
    assert data.get("version")


async def test_unknown_route_returns_message_body(client: AsyncClient) -> None:
    """Unknown paths return 404 with the standard {message} body."""
    response = await client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert "message" in response.json()


async def test_response_carries_request_id(client: AsyncClient) -> None:
    """A safe client X-Request-ID is echoed back unchanged."""
    response = await client.get("/api/health", headers={"X-Request-ID": "req-abc_123"})
    assert response.headers.get("X-Request-ID") == "req-abc_123"
