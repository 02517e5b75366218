"""Tests for GET /health: 200, settings fields, correlation ID in response."""

from httpx import AsyncClient


async def test_health_returns_200(async_client: AsyncClient):
    r = await async_client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert "environment" in data
    assert "version" in data
    assert data["storage_backend"] in ("memory", "redis")


async def test_health_correlation_id_auto_generated(async_client: AsyncClient):
    """GET /health returns a correlation_id when not provided."""
    r = await async_client.get("/health")
    assert r.status_code == 200
    assert len(r.json()["correlation_id"]) > 0
