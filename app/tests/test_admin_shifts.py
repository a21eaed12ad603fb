"""
Tests for admin endpoints: raw event log and reconstructed shifts
"""
from datetime import datetime, timezone

import pytest
from fastapi import status

from app.models.attendance import AttendanceEvent, EventKind
from app.services.geofence import GpsStatus


def get_auth_token(client, employee_id, pin):
    """Helper to get auth token"""
    response = client.post("/api/v1/auth/login", json={"employee_id": employee_id, "pin": pin})
    return response.json()["access_token"]


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


def add_event(db, employee_id, kind, ts, gps_status=GpsStatus.OK):
    event = AttendanceEvent(
        employee_id=employee_id,
        timestamp=ts,
        kind=kind,
        latitude=51.5074,
        longitude=-0.1278,
        gps_status=gps_status,
    )
    db.add(event)
    db.commit()
    return event


def utc(day, hour, minute=0):
    return datetime(2026, 3, day, hour, minute, tzinfo=timezone.utc)


@pytest.fixture
def admin_token(client, admin_employee):
    return get_auth_token(client, "ADMIN01", "9999")


def test_shifts_require_admin(client, db, test_employee):
    token = get_auth_token(client, "EMP001", "1234")
    response = client.get("/api/v1/admin/shifts", headers=auth_headers(token))
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_logs_require_admin(client, db, test_employee):
    token = get_auth_token(client, "EMP001", "1234")
    response = client.get("/api/v1/admin/logs", headers=auth_headers(token))
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_shifts_empty(client, db, admin_token):
    response = client.get("/api/v1/admin/shifts", headers=auth_headers(admin_token))
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "items": [],
        "total": 0,
        "overtime_count": 0,
        "overtime_threshold_hours": 8.0,
    }


def test_shifts_pair_events_and_flag_overtime(client, db, test_employee, second_employee, admin_token):
    # Inserted out of chronological order on purpose
    add_event(db, "EMP002", EventKind.OUT, utc(2, 18, 30), GpsStatus.OUT_OF_RANGE)
    add_event(db, "EMP001", EventKind.IN, utc(2, 9))
    add_event(db, "EMP002", EventKind.IN, utc(2, 9))
    add_event(db, "EMP001", EventKind.OUT, utc(2, 17))

    response = client.get("/api/v1/admin/shifts", headers=auth_headers(admin_token))
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total"] == 2
    assert data["overtime_count"] == 1

    by_emp = {item["employee_id"]: item for item in data["items"]}
    assert by_emp["EMP001"]["duration_hours"] == 8.0
    assert by_emp["EMP001"]["is_overtime"] is False
    assert by_emp["EMP001"]["employee_name"] == "John Doe"
    assert by_emp["EMP002"]["duration_hours"] == 9.5
    assert by_emp["EMP002"]["is_overtime"] is True
    assert by_emp["EMP002"]["out_gps_status"] == "OUT_OF_RANGE"


def test_shifts_most_recent_first(client, db, test_employee, admin_token):
    add_event(db, "EMP001", EventKind.IN, utc(2, 9))
    add_event(db, "EMP001", EventKind.OUT, utc(2, 17))
    add_event(db, "EMP001", EventKind.IN, utc(3, 8))
    add_event(db, "EMP001", EventKind.OUT, utc(3, 12))

    items = client.get("/api/v1/admin/shifts", headers=auth_headers(admin_token)).json()["items"]
    assert [item["duration_hours"] for item in items] == [4.0, 8.0]


def test_shifts_drop_superseded_in_and_orphan_out(client, db, test_employee, admin_token):
    add_event(db, "EMP001", EventKind.OUT, utc(2, 8))
    add_event(db, "EMP001", EventKind.IN, utc(2, 9))
    add_event(db, "EMP001", EventKind.IN, utc(2, 10))
    add_event(db, "EMP001", EventKind.OUT, utc(2, 17))

    data = client.get("/api/v1/admin/shifts", headers=auth_headers(admin_token)).json()
    assert data["total"] == 1
    assert data["items"][0]["duration_hours"] == 7.0


def test_shifts_filter_by_employee(client, db, test_employee, second_employee, admin_token):
    add_event(db, "EMP001", EventKind.IN, utc(2, 9))
    add_event(db, "EMP001", EventKind.OUT, utc(2, 17))
    add_event(db, "EMP002", EventKind.IN, utc(2, 9))
    add_event(db, "EMP002", EventKind.OUT, utc(2, 12))

    data = client.get(
        "/api/v1/admin/shifts?employee_id=EMP002", headers=auth_headers(admin_token)
    ).json()
    assert data["total"] == 1
    assert data["items"][0]["employee_id"] == "EMP002"


def test_shifts_filter_by_date_range(client, db, test_employee, admin_token):
    add_event(db, "EMP001", EventKind.IN, utc(2, 9))
    add_event(db, "EMP001", EventKind.OUT, utc(2, 17))
    add_event(db, "EMP001", EventKind.IN, utc(4, 9))
    add_event(db, "EMP001", EventKind.OUT, utc(4, 11))

    data = client.get(
        "/api/v1/admin/shifts?from=2026-03-04&to=2026-03-04", headers=auth_headers(admin_token)
    ).json()
    assert data["total"] == 1
    assert data["items"][0]["duration_hours"] == 2.0


def test_logs_newest_first_with_names(client, db, test_employee, admin_token):
    add_event(db, "EMP001", EventKind.IN, utc(2, 9))
    add_event(db, "EMP001", EventKind.OUT, utc(2, 17), GpsStatus.SEARCHING)

    response = client.get("/api/v1/admin/logs", headers=auth_headers(admin_token))
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total"] == 2
    assert [item["kind"] for item in data["items"]] == ["OUT", "IN"]
    assert data["items"][0]["gps_status"] == "SEARCHING"
    assert data["items"][0]["employee_name"] == "John Doe"


def test_logs_limit(client, db, test_employee, admin_token):
    for hour in range(9, 13):
        add_event(db, "EMP001", EventKind.IN, utc(2, hour))
    data = client.get("/api/v1/admin/logs?limit=2", headers=auth_headers(admin_token)).json()
    assert data["total"] == 2
