"""
Attendance endpoints: clock IN/OUT with GPS and photo evidence, own history, geofence preview.
The server evaluates the geofence; a client-side GPS status is never trusted.
"""
import logging
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.deps import (
    get_db,
    get_current_user,
    get_event_store,
    get_geofence_config,
    get_photo_store,
)
from app.models.employee import Employee
from app.schemas.attendance import (
    ClockRequest,
    EventDto,
    EventListResponse,
    GeofenceCheckRequest,
    GeofenceCheckResponse,
    GeofenceOut,
)
from app.services.attendance_service import record_clock_event, list_events
from app.services.event_store import EventStore
from app.services.geofence import GeoPoint, GeofenceConfig, GpsStatus, evaluate, haversine_distance
from app.services.photo_store import PhotoStore

router = APIRouter()
_log = logging.getLogger(__name__)


@router.get("/geofence", response_model=GeofenceOut)
async def geofence_endpoint(
    geofence: GeofenceConfig = Depends(get_geofence_config),
    current_user: Employee = Depends(get_current_user),
):
    """Configured office coordinate and allowed radius."""
    return GeofenceOut(
        office_latitude=geofence.office.latitude,
        office_longitude=geofence.office.longitude,
        radius_meters=geofence.radius_meters,
    )


@router.post("/geofence/check", response_model=GeofenceCheckResponse)
async def geofence_check_endpoint(
    body: GeofenceCheckRequest,
    geofence: GeofenceConfig = Depends(get_geofence_config),
    current_user: Employee = Depends(get_current_user),
):
    """Preview the GPS status for a coordinate without recording anything."""
    point = GeoPoint.from_optional(body.latitude, body.longitude)
    gps_status = evaluate(point, geofence)
    distance = None
    if point is not None and gps_status != GpsStatus.SEARCHING and point.is_valid():
        distance = round(haversine_distance(point, geofence.office), 1)
    return GeofenceCheckResponse(status=gps_status, distance_meters=distance)


@router.post("/clock", response_model=EventDto, status_code=201)
async def clock_endpoint(
    body: ClockRequest,
    db: Session = Depends(get_db),
    store: EventStore = Depends(get_event_store),
    geofence: GeofenceConfig = Depends(get_geofence_config),
    photo_store: PhotoStore = Depends(get_photo_store),
    current_user: Employee = Depends(get_current_user),
):
    """
    Clock IN or OUT for the current user.
    Every submission appends one event; pairing into shifts happens at report time.
    """
    _log.debug(
        "clock: employee_id=%s type=%s has_fix=%s has_photo=%s",
        current_user.id, body.type.value,
        body.latitude is not None and body.longitude is not None, bool(body.photo),
    )
    event = record_clock_event(
        db=db,
        store=store,
        employee=current_user,
        kind=body.type,
        latitude=body.latitude,
        longitude=body.longitude,
        photo=body.photo,
        geofence=geofence,
        photo_store=photo_store,
    )
    return EventDto.model_validate(event)


@router.get("/my", response_model=EventListResponse)
async def my_events_endpoint(
    from_date: Optional[date] = Query(None, alias="from", description="Start date (YYYY-MM-DD)"),
    to_date: Optional[date] = Query(None, alias="to", description="End date (YYYY-MM-DD)"),
    limit: Optional[int] = Query(None, ge=1, le=1000),
    store: EventStore = Depends(get_event_store),
    current_user: Employee = Depends(get_current_user),
):
    """List own clock events, newest first."""
    events = list_events(store, employee_id=current_user.id, from_date=from_date, to_date=to_date, limit=limit)
    return EventListResponse(
        items=[EventDto.model_validate(e) for e in events],
        total=len(events),
    )
