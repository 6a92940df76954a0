"""
Tests for booking endpoints.
"""

import pytest
from datetime import datetime, timezone, timedelta
from httpx import AsyncClient
from sqlalchemy import func, select

from music_booking.models import Booking


def parse_timestamp(value: str) -> datetime:
    """SQLite hands datetimes back without an offset; treat those as UTC."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@pytest.mark.asyncio
async def test_create_booking(client: AsyncClient, auth_headers, test_event):
    response = await client.post(
        "/api/bookings",
        json={"eventId": test_event.id, "userId": 42},
        headers=auth_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["isSuccess"] is True
    assert body["content"] is None
    assert body["responseDescription"].startswith("/api/bookings/")


@pytest.mark.asyncio
async def test_create_booking_unauthenticated(client: AsyncClient, test_event):
    response = await client.post("/api/bookings", json={"eventId": test_event.id, "userId": 42})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_book_nonexistent_event(client: AsyncClient, auth_headers, db_session):
    """Booking a missing event returns 400 and stores nothing."""
    response = await client.post(
        "/api/bookings",
        json={"eventId": 99999, "userId": 42},
        headers=auth_headers,
    )
    assert response.status_code == 400
    body = response.json()
    assert body["isSuccess"] is False
    assert body["responseDescription"] == "Event not found."

    count = (await db_session.execute(select(func.count()).select_from(Booking))).scalar()
    assert count == 0


@pytest.mark.asyncio
async def test_booking_ignores_client_date_and_status(client: AsyncClient, auth_headers, test_event):
    """Status is always Pending and the date is the server's clock."""
    before = datetime.now(timezone.utc) - timedelta(seconds=5)
    await client.post(
        "/api/bookings",
        json={
            "eventId": test_event.id,
            "userId": 7,
            "bookingDate": "2000-01-01T00:00:00+00:00",
            "status": "Confirmed",
        },
        headers=auth_headers,
    )
    after = datetime.now(timezone.utc) + timedelta(seconds=5)

    response = await client.get("/api/bookings/7", headers=auth_headers)
    booking = response.json()["content"][0]
    assert booking["status"] == "Pending"
    assert before <= parse_timestamp(booking["bookingDate"]) <= after


@pytest.mark.asyncio
async def test_repeat_bookings_are_all_accepted(client: AsyncClient, auth_headers, test_event):
    """No capacity or duplicate checks exist."""
    for _ in range(3):
        response = await client.post(
            "/api/bookings",
            json={"eventId": test_event.id, "userId": 42},
            headers=auth_headers,
        )
        assert response.status_code == 200

    response = await client.get("/api/bookings/42", headers=auth_headers)
    assert len(response.json()["content"]) == 3


@pytest.mark.asyncio
async def test_list_user_bookings_empty(client: AsyncClient, auth_headers):
    response = await client.get("/api/bookings/12345", headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["isSuccess"] is True
    assert body["content"] == []


@pytest.mark.asyncio
async def test_list_user_bookings_only_their_own(client: AsyncClient, auth_headers, test_event):
    await client.post("/api/bookings", json={"eventId": test_event.id, "userId": 1}, headers=auth_headers)
    await client.post("/api/bookings", json={"eventId": test_event.id, "userId": 2}, headers=auth_headers)

    response = await client.get("/api/bookings/1", headers=auth_headers)
    bookings = response.json()["content"]
    assert len(bookings) == 1
    assert bookings[0]["userId"] == 1


@pytest.mark.asyncio
async def test_booking_scenario(client: AsyncClient, auth_headers, test_event):
    missing = await client.post(
        "/api/bookings",
        json={"eventId": test_event.id + 1000, "userId": 42},
        headers=auth_headers,
    )
    assert missing.status_code == 400
    assert missing.json()["responseDescription"] == "Event not found."

    created = await client.post(
        "/api/bookings",
        json={"eventId": test_event.id, "userId": 42},
        headers=auth_headers,
    )
    assert created.status_code == 200

    response = await client.get("/api/bookings/42", headers=auth_headers)
    bookings = response.json()["content"]
    assert len(bookings) == 1
    assert bookings[0]["eventId"] == test_event.id
    assert bookings[0]["event"]["title"] == "Test Concert"
