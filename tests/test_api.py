"""HTTP surface: status codes and error bodies."""
from brewtable.models.booking import Booking

API = "/api/v1"


def _booking_json(location, **overrides):
    data = {
        "location_id": location.id,
        "booking_date": "2025-06-01",
        "start_time": "07:00",
        "end_time": "07:30",
        "customer_name": "Ada Lovelace",
        "customer_email": "ada@example.com",
    }
    data.update(overrides)
    return data


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_list_and_get_locations(client, location):
    response = client.get(f"{API}/locations/")
    assert response.status_code == 200
    body = response.json()
    assert [loc["name"] for loc in body] == ["Test Cafe"]
    assert body[0]["hours_open"] == "07:00"
    assert body[0]["hours_close"] == "08:00"

    assert client.get(f"{API}/locations/{location.id}").json()["id"] == location.id
    missing = client.get(f"{API}/locations/9999")
    assert missing.status_code == 404
    assert missing.json()["error"] == "unknown_location"


def test_bad_query_parameter_uses_error_shape(client, location):
    response = client.get(f"{API}/slots/", params={"location_id": location.id, "date": "June 1st"})
    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "validation_error"
    assert body["field"] == "date"
    assert "detail" not in body


def test_slots_endpoint(client, location):
    response = client.get(f"{API}/slots/", params={"location_id": location.id, "date": "2025-06-01"})
    assert response.status_code == 200
    assert response.json() == [
        {"start": "07:00", "end": "07:30", "available": True},
        {"start": "07:30", "end": "08:00", "available": True},
    ]


def test_slots_for_unknown_location_is_empty(client, location):
    response = client.get(f"{API}/slots/", params={"location_id": 9999, "date": "2025-06-01"})
    assert response.status_code == 200
    assert response.json() == []


def test_create_and_fetch_booking(client, location):
    response = client.post(f"{API}/bookings/", json=_booking_json(location, payment_id="sq_1"))
    assert response.status_code == 201
    booking = response.json()
    assert booking["status"] == "confirmed"
    assert booking["party_size"] == 6
    assert booking["start_time"] == "07:00"
    assert booking["end_time"] == "07:30"

    fetched = client.get(f"{API}/bookings/{booking['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["created_at"] == booking["created_at"]

    slots = client.get(f"{API}/slots/", params={"location_id": location.id, "date": "2025-06-01"}).json()
    assert [s["available"] for s in slots] == [False, True]


def test_invalid_email_is_422_and_not_stored(client, db, location):
    response = client.post(f"{API}/bookings/", json=_booking_json(location, customer_email="not-an-email"))
    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "validation_error"
    assert body["field"] == "customer_email"
    assert db.query(Booking).count() == 0


def test_inverted_times_are_422_with_field(client, location):
    response = client.post(
        f"{API}/bookings/", json=_booking_json(location, start_time="07:30", end_time="07:00")
    )
    assert response.status_code == 422
    assert response.json() == {
        "error": "validation_error",
        "message": "start_time must be before end_time",
        "field": "end_time",
    }


def test_unknown_location_is_404(client, location):
    response = client.post(f"{API}/bookings/", json=_booking_json(location, location_id=9999))
    assert response.status_code == 404
    assert response.json()["error"] == "unknown_location"


def test_double_booking_is_409(client, location):
    assert client.post(f"{API}/bookings/", json=_booking_json(location)).status_code == 201
    response = client.post(f"{API}/bookings/", json=_booking_json(location, customer_email="bob@example.com"))
    assert response.status_code == 409
    assert response.json()["error"] == "slot_conflict"


def test_missing_booking_is_404(client, location):
    for response in (client.get(f"{API}/bookings/4242"), client.patch(f"{API}/bookings/4242/cancel")):
        assert response.status_code == 404
        assert response.json() == {
            "error": "not_found",
            "message": "Booking 4242 does not exist",
            "field": "booking_id",
        }


def test_cancel_booking_twice(client, location):
    booking_id = client.post(f"{API}/bookings/", json=_booking_json(location)).json()["id"]
    for _ in range(2):
        response = client.patch(f"{API}/bookings/{booking_id}/cancel")
        assert response.status_code == 200
        assert response.json() == {"id": booking_id, "cancelled": True}
    assert client.get(f"{API}/bookings/{booking_id}").json()["status"] == "cancelled"


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


def test_manager_login(client, manager):
    response = client.post(
        f"{API}/admin/auth/login", json={"email": "manager@example.com", "password": "espresso"}
    )
    assert response.status_code == 200
    token = response.json()["access_token"]

    me = client.get(f"{API}/admin/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["email"] == "manager@example.com"


def test_manager_login_wrong_password(client, manager):
    response = client.post(
        f"{API}/admin/auth/login", json={"email": "manager@example.com", "password": "decaf"}
    )
    assert response.status_code == 401


def test_blocking_requires_a_manager(client, location):
    response = client.post(
        f"{API}/admin/blocked-times/",
        json={"location_id": location.id, "date": "2025-06-01", "start_time": "07:15", "end_time": "07:45"},
    )
    assert response.status_code == 401


def test_block_time_and_list(client, location, auth_headers):
    response = client.post(
        f"{API}/admin/blocked-times/",
        json={
            "location_id": location.id,
            "date": "2025-06-01",
            "start_time": "07:15",
            "end_time": "07:45",
            "reason": "other",
            "custom_reason": "Latte art class",
        },
        headers=auth_headers,
    )
    assert response.status_code == 201
    window = response.json()
    assert window["reason"] == "Latte art class"
    assert window["start_time"] == "07:15"
    assert window["created_by"] is not None

    listed = client.get(
        f"{API}/admin/blocked-times/",
        params={"location_id": location.id, "date": "2025-06-01"},
        headers=auth_headers,
    )
    assert [w["id"] for w in listed.json()] == [window["id"]]

    slots = client.get(f"{API}/slots/", params={"location_id": location.id, "date": "2025-06-01"}).json()
    assert [s["available"] for s in slots] == [False, False]


def test_block_with_unknown_reason_is_422(client, location, auth_headers):
    response = client.post(
        f"{API}/admin/blocked-times/",
        json={
            "location_id": location.id,
            "date": "2025-06-01",
            "start_time": "07:00",
            "end_time": "07:30",
            "reason": "holiday",
        },
        headers=auth_headers,
    )
    assert response.status_code == 422


def test_restricted_manager_cannot_block_other_locations(client, db, manager, location, auth_headers):
    manager.location_ids = "999"
    db.commit()
    response = client.post(
        f"{API}/admin/blocked-times/",
        json={"location_id": location.id, "date": "2025-06-01", "start_time": "07:00", "end_time": "07:30"},
        headers=auth_headers,
    )
    assert response.status_code == 403


def test_admin_day_view_and_upcoming(client, location, auth_headers):
    client.post(f"{API}/bookings/", json=_booking_json(location))
    client.post(f"{API}/bookings/", json=_booking_json(location, start_time="07:30", end_time="08:00"))

    day = client.get(
        f"{API}/admin/bookings/",
        params={"location_id": location.id, "date": "2025-06-01"},
        headers=auth_headers,
    )
    assert day.status_code == 200
    assert [b["start_time"] for b in day.json()] == ["07:00", "07:30"]

    upcoming = client.get(
        f"{API}/admin/bookings/upcoming",
        params={"location_id": location.id, "minutes_ahead": 10},
        headers=auth_headers,
    )
    assert upcoming.status_code == 200
    assert upcoming.json() == []


def test_store_failure_is_503(client, location, monkeypatch):
    from sqlalchemy.exc import OperationalError

    from brewtable.api.v1.public import locations as locations_api

    def _broken(db):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr(locations_api, "list_locations", _broken)
    response = client.get(f"{API}/locations/")
    assert response.status_code == 503
    assert response.json()["error"] == "store_failure"
