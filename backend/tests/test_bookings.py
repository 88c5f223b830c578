"""
Tests for booking endpoints.
"""

from datetime import date, timedelta

import pytest
from httpx import AsyncClient


def booking_payload(court, day, start="10:00:00", end="11:00:00", **extra) -> dict:
    return {
        "court_id": court.id,
        "booking_date": day.isoformat(),
        "start_time": start,
        "end_time": end,
        **extra,
    }


@pytest.mark.asyncio
async def test_create_booking(client: AsyncClient, auth_headers, test_user, test_court, tomorrow):
    """New bookings start PENDING and belong to the token's user."""
    response = await client.post(
        "/api/v1/bookings/",
        json=booking_payload(test_court, tomorrow, "14:00:00", "16:00:00", notes="singles"),
        headers=auth_headers,
    )
    assert response.status_code == 201
    data = response.json()
    assert data["court_id"] == test_court.id
    assert data["user_id"] == test_user.id
    assert data["status"] == "PENDING"
    assert data["total_price"] == "100.00"
    assert data["notes"] == "singles"


@pytest.mark.asyncio
async def test_create_booking_unauthenticated(client: AsyncClient, test_court, tomorrow):
    response = await client.post("/api/v1/bookings/", json=booking_payload(test_court, tomorrow))
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_overlapping_booking_returns_400(client: AsyncClient, auth_headers, test_court, tomorrow):
    first = await client.post(
        "/api/v1/bookings/", json=booking_payload(test_court, tomorrow), headers=auth_headers
    )
    assert first.status_code == 201

    second = await client.post(
        "/api/v1/bookings/",
        json=booking_payload(test_court, tomorrow, "10:30:00", "11:30:00"),
        headers=auth_headers,
    )
    assert second.status_code == 400
    assert "already booked" in second.json()["detail"]


@pytest.mark.asyncio
async def test_invalid_times_return_400(client: AsyncClient, auth_headers, test_court, tomorrow):
    yesterday = date.today() - timedelta(days=1)
    cases = [
        booking_payload(test_court, yesterday),
        booking_payload(test_court, tomorrow, "12:00:00", "10:00:00"),
        booking_payload(test_court, tomorrow, "05:00:00", "07:00:00"),
        booking_payload(test_court, tomorrow, "10:00:00", "10:30:00"),
    ]
    for payload in cases:
        response = await client.post("/api/v1/bookings/", json=payload, headers=auth_headers)
        assert response.status_code == 400, payload


@pytest.mark.asyncio
async def test_unknown_court_returns_404(client: AsyncClient, auth_headers, test_court, tomorrow):
    payload = booking_payload(test_court, tomorrow)
    payload["court_id"] = 9999
    response = await client.post("/api/v1/bookings/", json=payload, headers=auth_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_available_times(client: AsyncClient, auth_headers, test_court, tomorrow):
    await client.post(
        "/api/v1/bookings/",
        json=booking_payload(test_court, tomorrow, "10:00:00", "12:00:00"),
        headers=auth_headers,
    )

    response = await client.get(
        "/api/v1/bookings/available-times",
        params={"court_id": test_court.id, "date": tomorrow.isoformat()},
    )
    assert response.status_code == 200
    slots = response.json()
    assert len(slots) == 16
    assert slots[0]["start_time"] == "06:00:00"
    taken = [s["start_time"] for s in slots if not s["available"]]
    assert taken == ["10:00:00", "11:00:00"]


@pytest.mark.asyncio
async def test_check_interval(client: AsyncClient, auth_headers, test_court, tomorrow):
    await client.post(
        "/api/v1/bookings/", json=booking_payload(test_court, tomorrow), headers=auth_headers
    )
    params = {
        "court_id": test_court.id,
        "booking_date": tomorrow.isoformat(),
        "start_time": "10:30:00",
        "end_time": "11:30:00",
    }
    busy = await client.get("/api/v1/bookings/check", params=params)
    assert busy.json() == {"court_id": test_court.id, "available": False}

    params.update(start_time="11:00:00", end_time="12:00:00")
    free = await client.get("/api/v1/bookings/check", params=params)
    assert free.json()["available"] is True


@pytest.mark.asyncio
async def test_update_booking_same_range(client: AsyncClient, auth_headers, test_court, tomorrow):
    created = await client.post(
        "/api/v1/bookings/", json=booking_payload(test_court, tomorrow), headers=auth_headers
    )
    booking_id = created.json()["id"]

    response = await client.put(
        f"/api/v1/bookings/{booking_id}",
        json={
            "booking_date": tomorrow.isoformat(),
            "start_time": "10:00:00",
            "end_time": "11:00:00",
            "notes": "bring balls",
        },
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["notes"] == "bring balls"


@pytest.mark.asyncio
async def test_cancel_booking(client: AsyncClient, auth_headers, test_court, tomorrow):
    created = await client.post(
        "/api/v1/bookings/", json=booking_payload(test_court, tomorrow), headers=auth_headers
    )
    booking_id = created.json()["id"]

    response = await client.patch(f"/api/v1/bookings/{booking_id}/cancel", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "CANCELED"
    assert response.json()["total_price"] == created.json()["total_price"]

    # The hour is free again
    rebook = await client.post(
        "/api/v1/bookings/", json=booking_payload(test_court, tomorrow), headers=auth_headers
    )
    assert rebook.status_code == 201


@pytest.mark.asyncio
async def test_confirm_requires_admin(
    client: AsyncClient, auth_headers, admin_headers, test_court, tomorrow
):
    created = await client.post(
        "/api/v1/bookings/", json=booking_payload(test_court, tomorrow), headers=auth_headers
    )
    booking_id = created.json()["id"]

    forbidden = await client.patch(f"/api/v1/bookings/{booking_id}/confirm", headers=auth_headers)
    assert forbidden.status_code == 403

    response = await client.patch(f"/api/v1/bookings/{booking_id}/confirm", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "CONFIRMED"


@pytest.mark.asyncio
async def test_set_status(client: AsyncClient, auth_headers, admin_headers, test_court, tomorrow):
    created = await client.post(
        "/api/v1/bookings/", json=booking_payload(test_court, tomorrow), headers=auth_headers
    )
    booking_id = created.json()["id"]

    response = await client.patch(
        f"/api/v1/bookings/{booking_id}/status",
        json={"status": "COMPLETED"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["status"] == "COMPLETED"

    count = await client.get("/api/v1/bookings/count/status/COMPLETED")
    assert count.json() == {"status": "COMPLETED", "count": 1}


@pytest.mark.asyncio
async def test_delete_booking(client: AsyncClient, auth_headers, admin_headers, test_court, tomorrow):
    created = await client.post(
        "/api/v1/bookings/", json=booking_payload(test_court, tomorrow), headers=auth_headers
    )
    booking_id = created.json()["id"]

    response = await client.delete(f"/api/v1/bookings/{booking_id}", headers=admin_headers)
    assert response.status_code == 204

    missing = await client.get(f"/api/v1/bookings/{booking_id}")
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_list_endpoints(client: AsyncClient, auth_headers, test_user, test_court, tomorrow):
    await client.post(
        "/api/v1/bookings/", json=booking_payload(test_court, tomorrow), headers=auth_headers
    )

    for path in [
        "/api/v1/bookings/",
        f"/api/v1/bookings/user/{test_user.id}",
        f"/api/v1/bookings/user/{test_user.id}/future",
        f"/api/v1/bookings/court/{test_court.id}",
        f"/api/v1/bookings/date/{tomorrow.isoformat()}",
        "/api/v1/bookings/status/PENDING",
    ]:
        response = await client.get(path)
        assert response.status_code == 200, path
        assert len(response.json()) == 1, path

    today = await client.get("/api/v1/bookings/today")
    assert today.json() == []


@pytest.mark.asyncio
async def test_times_with_utc_offset_are_rejected(client: AsyncClient, auth_headers, test_court, tomorrow):
    """Times are local wall-clock values; an offset is a validation error."""
    created = await client.post(
        "/api/v1/bookings/", json=booking_payload(test_court, tomorrow), headers=auth_headers
    )
    booking_id = created.json()["id"]

    response = await client.post(
        "/api/v1/bookings/",
        json=booking_payload(test_court, tomorrow, "14:00:00Z", "15:00:00Z"),
        headers=auth_headers,
    )
    assert response.status_code == 422

    moved = await client.put(
        f"/api/v1/bookings/{booking_id}",
        json={"booking_date": tomorrow.isoformat(), "start_time": "12:00:00+02:00", "end_time": "13:00:00"},
        headers=auth_headers,
    )
    assert moved.status_code == 422

    check = await client.get(
        "/api/v1/bookings/check",
        params={
            "court_id": test_court.id,
            "booking_date": tomorrow.isoformat(),
            "start_time": "14:00:00Z",
            "end_time": "15:00:00Z",
        },
    )
    assert check.status_code == 422


@pytest.mark.asyncio
async def test_check_reports_invalid_times_as_unavailable(client: AsyncClient, test_court, tomorrow):
    yesterday = date.today() - timedelta(days=1)
    for booking_date, start, end in [
        (tomorrow, "12:00:00", "10:00:00"),
        (tomorrow, "05:00:00", "07:00:00"),
        (tomorrow, "10:00:00", "10:30:00"),
        (yesterday, "10:00:00", "11:00:00"),
    ]:
        response = await client.get(
            "/api/v1/bookings/check",
            params={
                "court_id": test_court.id,
                "booking_date": booking_date.isoformat(),
                "start_time": start,
                "end_time": end,
            },
        )
        assert response.status_code == 200
        assert response.json()["available"] is False, (start, end)
