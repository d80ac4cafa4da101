"""
Tests for flight seat endpoints.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_list_flights(client: AsyncClient, test_flight, sold_out_flight):
    response = await client.get("/api/v1/flights/")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert data["cached"] is False
    assert [f["flight_number"] for f in data["flights"]] == ["SK101", "SK202"]


@pytest.mark.asyncio
async def test_list_flights_available_only(client: AsyncClient, test_flight, sold_out_flight):
    response = await client.get("/api/v1/flights/", params={"available_only": True, "page_size": 5})

    data = response.json()
    assert data["total"] == 1
    assert data["page_size"] == 5
    assert data["flights"][0]["id"] == test_flight.id


@pytest.mark.asyncio
async def test_flight_seats_audit(client: AsyncClient, last_seat_flight):
    """A flight seeded with seats already gone reports the mismatch."""
    response = await client.get(f"/api/v1/flights/{last_seat_flight.id}/seats")

    assert response.status_code == 200
    data = response.json()
    assert data["total_seats"] == 10
    assert data["available_seats"] == 1
    assert data["confirmed_reservations"] == 0
    assert data["consistent"] is False


@pytest.mark.asyncio
async def test_flight_seats_unknown_flight(client: AsyncClient):
    response = await client.get("/api/v1/flights/99999/seats")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_health_and_metrics(client: AsyncClient, test_flight):
    await client.post(
        "/api/v1/reservations/",
        json={"flight_id": test_flight.id, "passenger_name": "Choi Yuna", "passenger_email": "yuna@example.com"},
    )

    health = await client.get("/health")
    assert health.json()["status"] == "healthy"
    assert health.json()["cache"] == {"status": "disabled"}

    metrics = await client.get("/metrics")
    assert metrics.status_code == 200
    assert "reservation_booking_attempts_total" in metrics.text
    assert "X-Request-ID" in metrics.headers
