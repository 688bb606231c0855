"""
Tests for Samuh Lagan (group wedding) registrations.
"""

import pytest
from httpx import AsyncClient

from factories import person, samuh_lagan_payload


@pytest.mark.asyncio
async def test_submit_requires_login(client: AsyncClient, open_forms):
    response = await client.post("/api/bookings/samuh-lagan/submit", json=samuh_lagan_payload())
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_submit_while_form_closed(client: AsyncClient, auth_headers):
    """No form window configured means the form is closed."""
    response = await client.post(
        "/api/bookings/samuh-lagan/submit", json=samuh_lagan_payload(), headers=auth_headers
    )
    assert response.status_code == 400
    assert "samuhLagan" in response.json()["detail"]


@pytest.mark.asyncio
async def test_submit_registration(client: AsyncClient, auth_headers, open_forms, test_user):
    response = await client.post(
        "/api/bookings/samuh-lagan/submit", json=samuh_lagan_payload(), headers=auth_headers
    )
    assert response.status_code == 201
    booking = response.json()["booking"]
    assert booking["kind"] == "samuh_lagan"
    assert booking["status"] == "Pending"
    assert booking["payment_status"] == "pending"
    assert booking["user_id"] == test_user.id
    assert booking["bride"]["name"] == "Priya"
    assert booking["groom"]["father_name"] == "Amit Sr"


@pytest.mark.asyncio
async def test_submit_invalid_contact_number(client: AsyncClient, auth_headers, open_forms):
    payload = samuh_lagan_payload()
    payload["groom"]["contactNumber"] = "123"
    response = await client.post("/api/bookings/samuh-lagan/submit", json=payload, headers=auth_headers)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_confirm_marks_paid(client: AsyncClient, admin_headers, samuh_lagan_booking):
    booking_id = samuh_lagan_booking.id
    await client.put(f"/api/bookings/samuh-lagan/approve/{booking_id}", headers=admin_headers)
    response = await client.put(f"/api/bookings/samuh-lagan/confirm/{booking_id}", headers=admin_headers)
    assert response.status_code == 200
    booking = response.json()["booking"]
    assert booking["status"] == "Confirmed"
    assert booking["payment_status"] == "paid"
    assert booking["payment_confirmed"] is True


@pytest.mark.asyncio
async def test_confirm_before_approval(client: AsyncClient, admin_headers, samuh_lagan_booking):
    response = await client.put(
        f"/api/bookings/samuh-lagan/confirm/{samuh_lagan_booking.id}", headers=admin_headers
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_list_registrations(client: AsyncClient, admin_headers, samuh_lagan_booking, general_booking):
    response = await client.get("/api/bookings/samuh-lagan", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["bookings"][0]["id"] == samuh_lagan_booking.id


@pytest.mark.asyncio
async def test_delete_only_when_rejected(client: AsyncClient, admin_headers, samuh_lagan_booking):
    booking_id = samuh_lagan_booking.id
    response = await client.delete(f"/api/bookings/samuh-lagan/{booking_id}", headers=admin_headers)
    assert response.status_code == 400

    await client.put(
        f"/api/bookings/samuh-lagan/reject/{booking_id}",
        json={"reason": "Documents incomplete"},
        headers=admin_headers,
    )
    response = await client.delete(f"/api/bookings/samuh-lagan/{booking_id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["booking_id"] == booking_id


@pytest.mark.asyncio
async def test_samuh_lagan_date_does_not_block_calendar(client: AsyncClient, samuh_lagan_booking):
    response = await client.get("/api/bookings/booked-dates")
    assert response.json() == []


@pytest.mark.asyncio
async def test_replacing_bride_updates_contact_details(client: AsyncClient, admin_headers, samuh_lagan_booking):
    bride = person("Meera", "meera@example.com")
    bride["contactNumber"] = "9000011111"
    response = await client.put(
        f"/api/bookings/samuh-lagan/update/{samuh_lagan_booking.id}",
        json={"bride": bride},
        headers=admin_headers,
    )
    assert response.status_code == 200
    booking = response.json()["booking"]
    assert booking["bride"]["name"] == "Meera"
    assert booking["email"] == "meera@example.com"
    assert booking["phone"] == "9000011111"
