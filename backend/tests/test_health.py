"""
Tests for operational endpoints and request middleware.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_without_redis(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["scheduling_mode"] == "exclusive"
    assert data["cache"] == {"status": "disabled"}


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: AsyncClient):
    response = await client.get("/", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
    assert response.headers["X-Response-Time"].endswith("ms")


@pytest.mark.asyncio
async def test_request_id_is_generated(client: AsyncClient):
    response = await client.get("/")
    assert len(response.headers["X-Request-ID"]) == 8


@pytest.mark.asyncio
async def test_metrics_exposed(client: AsyncClient, auth_headers, test_court, tomorrow):
    await client.post(
        "/api/v1/bookings/",
        json={
            "court_id": test_court.id,
            "booking_date": tomorrow.isoformat(),
            "start_time": "09:00:00",
            "end_time": "10:00:00",
        },
        headers=auth_headers,
    )
    response = await client.get("/metrics")
    assert response.status_code == 200
    assert 'booking_attempts_total{outcome="created"}' in response.text
    assert "http_request_duration_seconds" in response.text
