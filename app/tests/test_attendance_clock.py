"""
Tests for clock IN/OUT recording: server-side geofence, photo evidence, own history
"""
import base64
import os

from fastapi import status

from app.models.attendance import AttendanceEvent
from app.models.audit_log import AuditLog


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
PNG_DATA_URL = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode("ascii")


def get_auth_token(client, employee_id, pin):
    """Helper to get auth token"""
    response = client.post("/api/v1/auth/login", json={"employee_id": employee_id, "pin": pin})
    return response.json()["access_token"]


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


def _clock(client, token, **body):
    return client.post("/api/v1/attendance/clock", json=body, headers=auth_headers(token))


def test_clock_in_inside_geofence(client, db, test_employee):
    token = get_auth_token(client, "EMP001", "1234")
    response = _clock(client, token, type="IN", latitude=51.5075, longitude=-0.1279)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["employee_id"] == "EMP001"
    assert data["kind"] == "IN"
    assert data["gps_status"] == "OK"
    assert data["latitude"] == 51.5075
    assert data["photo_path"] is None

    stored = db.query(AttendanceEvent).filter(AttendanceEvent.id == data["id"]).first()
    assert stored is not None
    assert stored.gps_status.value == "OK"


def test_clock_out_far_away_is_out_of_range(client, db, test_employee):
    token = get_auth_token(client, "EMP001", "1234")
    response = _clock(client, token, type="OUT", latitude=48.8566, longitude=2.3522)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["gps_status"] == "OUT_OF_RANGE"


def test_clock_without_location_is_searching(client, db, test_employee):
    token = get_auth_token(client, "EMP001", "1234")
    response = _clock(client, token, type="IN")
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["gps_status"] == "SEARCHING"
    assert data["latitude"] is None
    assert data["longitude"] is None


def test_clock_with_invalid_coordinates_is_out_of_range(client, db, test_employee):
    token = get_auth_token(client, "EMP001", "1234")
    response = _clock(client, token, type="IN", latitude=123.0, longitude=-0.1278)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["gps_status"] == "OUT_OF_RANGE"


def test_client_supplied_gps_status_is_ignored(client, db, test_employee):
    token = get_auth_token(client, "EMP001", "1234")
    response = _clock(client, token, type="IN", latitude=48.8566, longitude=2.3522, gpsStatus="OK")
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["gps_status"] == "OUT_OF_RANGE"


def test_clock_rejects_unknown_type(client, db, test_employee):
    token = get_auth_token(client, "EMP001", "1234")
    response = _clock(client, token, type="BREAK")
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_clock_with_photo_stores_file(client, db, test_employee, uploads_dir):
    token = get_auth_token(client, "EMP001", "1234")
    response = _clock(client, token, type="IN", latitude=51.5074, longitude=-0.1278, photo=PNG_DATA_URL)
    assert response.status_code == status.HTTP_201_CREATED
    photo_path = response.json()["photo_path"]
    assert photo_path.startswith("/uploads/EMP001_")
    assert photo_path.endswith(".png")

    stored_file = uploads_dir / os.path.basename(photo_path)
    assert stored_file.read_bytes() == PNG_BYTES


def test_clock_with_malformed_photo_rejected(client, db, test_employee):
    token = get_auth_token(client, "EMP001", "1234")
    response = _clock(client, token, type="IN", photo="data:image/png;base64,***not-base64***")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert db.query(AttendanceEvent).count() == 0


def test_clock_with_oversized_photo_rejected(client, db, test_employee):
    token = get_auth_token(client, "EMP001", "1234")
    big = base64.b64encode(b"\x00" * 2048).decode("ascii")
    response = _clock(client, token, type="IN", photo=big)
    assert response.status_code == status.HTTP_413_REQUEST_ENTITY_TOO_LARGE


def test_every_clock_appends_a_new_event(client, db, test_employee):
    token = get_auth_token(client, "EMP001", "1234")
    for kind in ("IN", "IN", "OUT", "OUT"):
        assert _clock(client, token, type=kind).status_code == status.HTTP_201_CREATED
    assert db.query(AttendanceEvent).count() == 4


def test_clock_writes_audit_entry(client, db, test_employee):
    token = get_auth_token(client, "EMP001", "1234")
    event_id = _clock(client, token, type="IN", latitude=51.5074, longitude=-0.1278).json()["id"]
    entry = db.query(AuditLog).filter(AuditLog.action == "ATTENDANCE_CLOCK").first()
    assert entry.entity_id == event_id
    assert entry.meta_json["gps_status"] == "OK"


def test_my_events_only_returns_own_newest_first(client, db, test_employee, second_employee):
    token1 = get_auth_token(client, "EMP001", "1234")
    token2 = get_auth_token(client, "EMP002", "4321")
    _clock(client, token1, type="IN")
    _clock(client, token2, type="IN")
    _clock(client, token1, type="OUT")

    response = client.get("/api/v1/attendance/my", headers=auth_headers(token1))
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total"] == 2
    assert [item["kind"] for item in data["items"]] == ["OUT", "IN"]
    assert all(item["employee_id"] == "EMP001" for item in data["items"])


def test_my_events_rejects_inverted_range(client, db, test_employee):
    token = get_auth_token(client, "EMP001", "1234")
    response = client.get(
        "/api/v1/attendance/my?from=2026-03-05&to=2026-03-01",
        headers=auth_headers(token),
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_geofence_endpoint(client, db, test_employee):
    token = get_auth_token(client, "EMP001", "1234")
    response = client.get("/api/v1/attendance/geofence", headers=auth_headers(token))
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "office_latitude": 51.5074,
        "office_longitude": -0.1278,
        "radius_meters": 200.0,
    }


def test_geofence_check_preview(client, db, test_employee):
    token = get_auth_token(client, "EMP001", "1234")
    inside = client.post(
        "/api/v1/attendance/geofence/check",
        json={"latitude": 51.5074, "longitude": -0.1278},
        headers=auth_headers(token),
    ).json()
    assert inside == {"status": "OK", "distance_meters": 0.0}

    searching = client.post(
        "/api/v1/attendance/geofence/check", json={}, headers=auth_headers(token)
    ).json()
    assert searching == {"status": "SEARCHING", "distance_meters": None}

    assert db.query(AttendanceEvent).count() == 0
