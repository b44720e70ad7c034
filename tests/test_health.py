"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(app_client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await app_client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json().get("status") == "ok"


async def test_request_id_is_echoed(app_client: AsyncClient) -> None:
    """A safe client X-Request-ID is returned unchanged."""
    response = await app_client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers.get("x-request-id") == "abc-123"


async def test_unsafe_request_id_is_replaced(app_client: AsyncClient) -> None:
    """A request ID with unsafe characters is replaced by a generated one."""
    response = await app_client.get(
        "/api/v1/health", headers={"X-Request-ID": "bad id <script>"}
    )
    echoed = response.headers.get("x-request-id")
    assert echoed
    assert echoed != "bad id <script>"


async def test_unknown_route_uses_error_shape(app_client: AsyncClient) -> None:
    response = await app_client.get("/api/v1/does-not-exist")
    assert response.status_code == 404
    assert response.json()["error"] == "HTTP_ERROR"
