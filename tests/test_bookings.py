import pytest

BOOKING = {
    "name": "Jane Doe",
    "email": "jane@example.com",
    "phone": "+250788000000",
    "service": "Decoration",
    "event_type": "Wedding",
    "event_date": "2025-08-16",
    "event_time": "14:00",
    "location": "Kigali",
    "guests": 150,
    "duration": "5 hours",
    "notes": "Outdoor venue",
}


def make_booking(client, **overrides):
    resp = client.post("/api/bookings", json={**BOOKING, **overrides})
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_create_then_get_returns_every_field(client):
    created = make_booking(client)
    assert isinstance(created["id"], int)
    assert created["created_at"]

    resp = client.get(f"/api/bookings/{created['id']}")
    assert resp.status_code == 200
    fetched = resp.json()
    assert fetched == created
    for field, value in BOOKING.items():
        assert fetched[field] == value


def test_create_accepts_booking_form_field_names(client):
    payload = {k: v for k, v in BOOKING.items() if k not in ("event_type", "event_date", "event_time")}
    payload.update({"eventType": "Birthday", "date": "2025-09-01", "time": "18:30"})

    resp = client.post("/api/bookings", json=payload)
    assert resp.status_code == 201
    data = resp.json()
    assert data["event_type"] == "Birthday"
    assert data["event_date"] == "2025-09-01"
    assert data["event_time"] == "18:30"


def test_numeric_duration_and_missing_notes(client):
    payload = dict(BOOKING, duration=5)
    del payload["notes"]

    resp = client.post("/api/bookings", json=payload)
    assert resp.status_code == 201
    created = resp.json()
    assert created["duration"] == 5
    assert created["notes"] is None


def test_missing_contact_field_is_rejected_by_the_store(client):
    payload = dict(BOOKING)
    del payload["name"]

    resp = client.post("/api/bookings", json=payload)
    assert resp.status_code == 500
    assert resp.json() == {"message": "Booking creation failed. Please try again."}


def test_list_is_most_recent_first(client):
    ids = [make_booking(client, name=f"Guest {i}")["id"] for i in range(3)]

    resp = client.get("/api/bookings")
    assert resp.status_code == 200
    rows = resp.json()
    assert [row["id"] for row in rows] == list(reversed(ids))
    created = [row["created_at"] for row in rows]
    assert created == sorted(created, reverse=True)


def test_list_empty(client):
    resp = client.get("/api/bookings")
    assert resp.status_code == 200
    assert resp.json() == []


def test_get_unknown_booking(client):
    resp = client.get("/api/bookings/999")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Booking not found"}


def test_update_changes_only_supplied_fields(client):
    created = make_booking(client)

    resp = client.put(f"/api/bookings/{created['id']}", json={"guests": 200, "notes": "Moved indoors"})
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["guests"] == 200
    assert updated["notes"] == "Moved indoors"
    for field in ("name", "email", "phone", "service", "event_type", "event_date", "location", "duration"):
        assert updated[field] == created[field]
    assert updated["created_at"] == created["created_at"]
    assert client.get(f"/api/bookings/{created['id']}").json() == updated


def test_update_can_clear_an_optional_field(client):
    created = make_booking(client)

    resp = client.put(f"/api/bookings/{created['id']}", json={"notes": None})
    assert resp.status_code == 200
    assert resp.json()["notes"] is None


def test_update_with_empty_body_keeps_row(client):
    created = make_booking(client)

    resp = client.put(f"/api/bookings/{created['id']}", json={})
    assert resp.status_code == 200
    assert resp.json() == created


@pytest.mark.parametrize("body", [{"guests": 10}, {}])
def test_update_unknown_booking(client, body):
    resp = client.put("/api/bookings/999", json=body)
    assert resp.status_code == 404
    assert resp.json() == {"message": "Booking not found"}


def test_delete_then_get_is_not_found(client):
    created = make_booking(client)

    resp = client.delete(f"/api/bookings/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Booking deleted successfully"}

    assert client.get(f"/api/bookings/{created['id']}").status_code == 404
    assert client.delete(f"/api/bookings/{created['id']}").status_code == 404


def test_store_failure_hides_details(client, caplog):
    client.app.state.db.close()

    resp = client.get("/api/bookings")
    assert resp.status_code == 500
    assert resp.json() == {"message": "Failed to fetch bookings."}
    assert "database is not open" in caplog.text
