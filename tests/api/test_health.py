"""Tests for health endpoints."""

from unittest.mock import AsyncMock, patch


async def test_root_health_check(client):
    """Root health endpoint needs no authentication."""
    response = await client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data


async def test_api_health_check(client):
    response = await client.get("/api/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert data["uptime_seconds"] >= 0
    assert data["database"] is None


async def test_root_info(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["name"].endswith("API")


async def test_db_health_unavailable(client):
    """An unreachable database is reported, not raised."""
    with patch(
        "matinv.infrastructure.storage.sqlite.get_connection_pool",
        AsyncMock(side_effect=RuntimeError("no database")),
    ):
        response = await client.get("/api/health/db")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "unhealthy"
    assert data["database"]["available"] is False
    assert data["database"]["error"] == "no database"


async def test_request_id_header(client):
    response = await client.get("/health")
    assert response.headers.get("X-Request-ID")


async def test_request_id_from_proxy_is_echoed(client):
    response = await client.get("/health", headers={"X-Request-ID": "proxy-42"})
    assert response.headers["X-Request-ID"] == "proxy-42"
