"""Tests for the reservation HTTP endpoints"""

import pytest
from httpx import AsyncClient
from types import SimpleNamespace
from uuid import uuid4


def hotel_payload(hotel, room, start="2024-10-15", end="2024-10-17", guests=2):
    return {
        "business_id": str(hotel.id),
        "room_id": str(room.id),
        "start_date": start,
        "end_date": end,
        "guests": guests,
        "total_amount": {"amount": 300.0, "currency": "USD"},
        "special_request": "Sea view if possible",
    }


@pytest.mark.asyncio
async def test_create_hotel_reservation(authenticated_client: AsyncClient, test_hotel, test_rooms, test_user_id):
    """Test booking a room"""
    response = await authenticated_client.post(
        "/reservations/hotel",
        json=hotel_payload(test_hotel, test_rooms[0]),
    )

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "PENDING"
    assert data["type"] == "HOTEL"
    assert data["user_id"] == str(test_user_id)
    assert data["resource_id"] == str(test_rooms[0].id)
    assert data["start_date"] == "2024-10-15T00:00:00"
    assert data["end_date"] == "2024-10-17T00:00:00"
    assert data["guests"] == 2
    assert data["total_amount"] == {"amount": "300.00", "currency": "USD"}
    assert data["special_request"] == "Sea view if possible"


@pytest.mark.asyncio
async def test_create_restaurant_reservation(authenticated_client: AsyncClient, test_restaurant, test_tables):
    """Test booking a table"""
    response = await authenticated_client.post(
        "/reservations/restaurant",
        json={
            "business_id": str(test_restaurant.id),
            "table_id": str(test_tables[0].id),
            "start_date": "2024-10-15T21:00:00+02:00",
            "end_date": "2024-10-15T23:00:00+02:00",
            "guests": 2,
            "total_amount": {"amount": 45.5, "currency": "EUR"},
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert data["type"] == "RESTAURANT"
    assert data["start_date"] == "2024-10-15T19:00:00"
    assert data["total_amount"] == {"amount": "45.50", "currency": "EUR"}


@pytest.mark.asyncio
async def test_booking_errors_map_to_http(authenticated_client: AsyncClient, test_hotel, test_rooms):
    """Test error responses for rejected bookings"""
    response = await authenticated_client.post(
        "/reservations/hotel",
        json=hotel_payload(test_hotel, test_rooms[1], guests=3),
    )
    assert response.status_code == 400
    assert response.json()["error"] == "capacity_exceeded"

    response = await authenticated_client.post(
        "/reservations/hotel",
        json=hotel_payload(test_hotel, test_rooms[0], start="2024-10-17", end="2024-10-15"),
    )
    assert response.status_code == 400
    assert response.json()["error"] == "invalid_interval"

    response = await authenticated_client.post(
        "/reservations/hotel",
        json=hotel_payload(test_hotel, SimpleNamespace(id=uuid4())),
    )
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"

    first = await authenticated_client.post("/reservations/hotel", json=hotel_payload(test_hotel, test_rooms[0]))
    assert first.status_code == 201

    response = await authenticated_client.post(
        "/reservations/hotel",
        json=hotel_payload(test_hotel, test_rooms[0], start="2024-10-16", end="2024-10-18"),
    )
    assert response.status_code == 409
    assert response.json()["error"] == "slot_unavailable"


@pytest.mark.asyncio
async def test_request_validation(authenticated_client: AsyncClient, test_hotel, test_rooms):
    """Guests below one never reach the booking core"""
    response = await authenticated_client.post(
        "/reservations/hotel",
        json=hotel_payload(test_hotel, test_rooms[0], guests=0),
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_requires_authentication(client: AsyncClient, test_hotel, test_rooms):
    """Test that requests without a valid token are rejected"""
    response = await client.post("/reservations/hotel", json=hotel_payload(test_hotel, test_rooms[0]))
    assert response.status_code == 401

    response = await client.get("/reservations", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_confirm_and_cancel(authenticated_client: AsyncClient, test_hotel, test_rooms):
    """Test status transitions over HTTP"""
    created = await authenticated_client.post("/reservations/hotel", json=hotel_payload(test_hotel, test_rooms[0]))
    reservation_id = created.json()["id"]

    response = await authenticated_client.put(f"/reservations/{reservation_id}/confirm")
    assert response.status_code == 200
    assert response.json()["status"] == "CONFIRMED"

    # Confirming twice is a no-op
    response = await authenticated_client.put(f"/reservations/{reservation_id}/confirm")
    assert response.status_code == 200
    assert response.json()["status"] == "CONFIRMED"

    response = await authenticated_client.put(f"/reservations/{reservation_id}/cancel")
    assert response.status_code == 200
    assert response.json()["status"] == "CANCELLED"

    response = await authenticated_client.put(f"/reservations/{reservation_id}/cancel")
    assert response.status_code == 409
    assert response.json()["error"] == "invalid_transition"


@pytest.mark.asyncio
async def test_complete_elapsed_reservation(authenticated_client: AsyncClient, test_hotel, test_rooms):
    created = await authenticated_client.post("/reservations/hotel", json=hotel_payload(test_hotel, test_rooms[0]))
    reservation_id = created.json()["id"]

    response = await authenticated_client.put(f"/reservations/{reservation_id}/complete")
    assert response.status_code == 409

    await authenticated_client.put(f"/reservations/{reservation_id}/confirm")
    response = await authenticated_client.put(f"/reservations/{reservation_id}/complete")
    assert response.status_code == 200
    assert response.json()["status"] == "COMPLETED"


@pytest.mark.asyncio
async def test_get_reservation_owner_only(
    authenticated_client: AsyncClient, test_hotel, test_rooms, other_user_headers
):
    """Test that users can't read or change other users' reservations"""
    created = await authenticated_client.post("/reservations/hotel", json=hotel_payload(test_hotel, test_rooms[0]))
    reservation_id = created.json()["id"]

    response = await authenticated_client.get(f"/reservations/{reservation_id}")
    assert response.status_code == 200
    assert response.json()["id"] == reservation_id

    response = await authenticated_client.get(f"/reservations/{reservation_id}", headers=other_user_headers)
    assert response.status_code == 403

    response = await authenticated_client.put(
        f"/reservations/{reservation_id}/cancel", headers=other_user_headers
    )
    assert response.status_code == 403

    response = await authenticated_client.get(f"/reservations/{uuid4()}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_user_reservations(
    authenticated_client: AsyncClient, test_hotel, test_rooms, test_restaurant, test_tables, other_user_headers
):
    """Test listing the requester's reservations with filters"""
    await authenticated_client.post("/reservations/hotel", json=hotel_payload(test_hotel, test_rooms[0]))
    second = await authenticated_client.post(
        "/reservations/restaurant",
        json={
            "business_id": str(test_restaurant.id),
            "table_id": str(test_tables[1].id),
            "start_date": "2024-10-15T19:00:00",
            "end_date": "2024-10-15T21:00:00",
            "guests": 4,
            "total_amount": {"amount": 120, "currency": "USD"},
        },
    )
    await authenticated_client.put(f"/reservations/{second.json()['id']}/confirm")

    response = await authenticated_client.get("/reservations")
    assert response.status_code == 200
    assert response.json()["total"] == 2

    response = await authenticated_client.get("/reservations", params={"type": "RESTAURANT"})
    assert [r["id"] for r in response.json()["items"]] == [second.json()["id"]]

    response = await authenticated_client.get("/reservations", params={"status": "PENDING"})
    assert [r["type"] for r in response.json()["items"]] == ["HOTEL"]

    response = await authenticated_client.get("/reservations", headers=other_user_headers)
    assert response.json()["total"] == 0


@pytest.mark.asyncio
async def test_business_reservations_and_availability(
    authenticated_client: AsyncClient, test_hotel, test_rooms, owner_headers
):
    """Test business-scoped listing and the availability query"""
    await authenticated_client.post("/reservations/hotel", json=hotel_payload(test_hotel, test_rooms[0]))

    response = await authenticated_client.get(f"/businesses/{test_hotel.id}/reservations", headers=owner_headers)
    assert response.status_code == 200
    assert response.json()["total"] == 1

    response = await authenticated_client.get(f"/businesses/{uuid4()}/reservations", headers=owner_headers)
    assert response.status_code == 404

    response = await authenticated_client.get(
        f"/businesses/{test_hotel.id}/availability",
        params={"start_date": "2024-10-16T00:00:00", "end_date": "2024-10-18T00:00:00"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["available"] is True
    assert [r["number"] for r in data["resources"]] == ["102"]

    response = await authenticated_client.get(
        f"/businesses/{test_hotel.id}/availability",
        params={"start_date": "2024-10-18T00:00:00", "end_date": "2024-10-16T00:00:00"},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_business_reservations_owner_only(
    authenticated_client: AsyncClient, test_hotel, test_rooms, other_user_headers
):
    """Guests can't list who else booked at a business"""
    await authenticated_client.post("/reservations/hotel", json=hotel_payload(test_hotel, test_rooms[0]))

    response = await authenticated_client.get(f"/businesses/{test_hotel.id}/reservations")
    assert response.status_code == 403

    response = await authenticated_client.get(
        f"/businesses/{test_hotel.id}/reservations", headers=other_user_headers
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_ready(client: AsyncClient):
    response = await client.get("/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready", "checks": {"database": "ok"}}
