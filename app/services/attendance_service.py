"""
Attendance service - recording clock IN/OUT events and listing them
"""
import logging
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from app.models.attendance import AttendanceEvent, EventKind
from app.models.employee import Employee
from app.services.audit_service import log_audit
from app.services.event_store import EventStore
from app.services.geofence import GeoPoint, GeofenceConfig, evaluate
from app.services.photo_store import PhotoStore
from app.utils.datetime_utils import UTC, now_utc, display_tz

_log = logging.getLogger(__name__)


def record_clock_event(
    db: Session,
    store: EventStore,
    employee: Employee,
    kind: EventKind,
    latitude: Optional[float],
    longitude: Optional[float],
    photo: Optional[str],
    geofence: GeofenceConfig,
    photo_store: PhotoStore,
    now: Optional[datetime] = None,
) -> AttendanceEvent:
    """
    Record one clock event with GPS and photo evidence

    Args:
        db: Database session (audit trail)
        store: Append-only event store
        employee: Employee clocking in/out
        kind: IN or OUT
        latitude, longitude: Reported coordinate; either missing means no fix
        photo: Base64 photo (data URL accepted) or None
        geofence: Office zone used to derive gps_status
        photo_store: Where photo evidence is written
        now: Override for the server timestamp (tests)

    Returns:
        Persisted AttendanceEvent

    The gps_status is evaluated here, once, and stored as a label. The timestamp
    is always server UTC time, never a client-supplied value.
    """
    point = GeoPoint.from_optional(latitude, longitude)
    gps_status = evaluate(point, geofence)
    photo_path = photo_store.save(employee.id, photo)

    event = store.insert_event(
        employee_id=employee.id,
        timestamp=now or now_utc(),
        kind=kind,
        latitude=point.latitude if point else None,
        longitude=point.longitude if point else None,
        gps_status=gps_status,
        photo_path=photo_path,
    )
    _log.info(
        "clock event recorded: employee_id=%s kind=%s gps_status=%s photo=%s",
        employee.id, kind.value, gps_status.value, bool(photo_path),
    )

    log_audit(
        db=db,
        actor_id=employee.id,
        action="ATTENDANCE_CLOCK",
        entity_type="attendance_events",
        entity_id=event.id,
        meta={
            "kind": kind,
            "gps_status": gps_status,
            "latitude": event.latitude,
            "longitude": event.longitude,
        },
    )
    return event


def date_range_bounds(
    from_date: Optional[date],
    to_date: Optional[date],
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """
    Convert an inclusive local-date range into [since, until) UTC instants.

    Raises:
        HTTPException: 400 if from_date is after to_date
    """
    if from_date and to_date and from_date > to_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="from_date must be less than or equal to to_date"
        )
    tz = display_tz()
    since = datetime.combine(from_date, time.min, tzinfo=tz).astimezone(UTC) if from_date else None
    until = (
        datetime.combine(to_date + timedelta(days=1), time.min, tzinfo=tz).astimezone(UTC)
        if to_date else None
    )
    return since, until


def list_events(
    store: EventStore,
    employee_id: Optional[str] = None,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    newest_first: bool = True,
    limit: Optional[int] = None,
) -> List[AttendanceEvent]:
    """List events in an inclusive local-date range, newest first by default"""
    since, until = date_range_bounds(from_date, to_date)
    return store.query_events(
        employee_id=employee_id,
        since=since,
        until=until,
        newest_first=newest_first,
        limit=limit,
    )
