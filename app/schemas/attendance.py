"""
Attendance schemas: clock requests, raw event output, geofence preview and shift summaries.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_serializer

from app.models.attendance import EventKind
from app.services.geofence import GpsStatus
from app.utils.datetime_utils import iso_local


class ClockRequest(BaseModel):
    """
    Clock IN/OUT request. Coordinates are optional: a missing fix is recorded as SEARCHING.
    Out-of-range coordinates are accepted and recorded as OUT_OF_RANGE.
    """
    type: EventKind = Field(..., description="IN or OUT")
    latitude: Optional[float] = Field(None, description="GPS latitude in decimal degrees")
    longitude: Optional[float] = Field(None, description="GPS longitude in decimal degrees")
    photo: Optional[str] = Field(None, description="Base64 PNG, data URL prefix allowed")


class GeofenceCheckRequest(BaseModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class GeofenceCheckResponse(BaseModel):
    status: GpsStatus
    distance_meters: Optional[float] = None


class GeofenceOut(BaseModel):
    """Configured office zone"""
    office_latitude: float
    office_longitude: float
    radius_meters: float


class EventDto(BaseModel):
    """Attendance event output (immutable log entry). Datetimes in the display timezone."""
    id: int
    employee_id: str
    timestamp: datetime
    kind: EventKind
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    gps_status: GpsStatus
    photo_path: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("timestamp", when_used="always")
    def _ser_datetime(self, dt: Optional[datetime]) -> Optional[str]:
        return iso_local(dt)


class AdminEventDto(EventDto):
    """Event with employee name for the admin log view"""
    employee_name: Optional[str] = None


class EventListResponse(BaseModel):
    items: List[EventDto]
    total: int


class AdminEventListResponse(BaseModel):
    items: List[AdminEventDto]
    total: int


class ShiftDto(BaseModel):
    """Reconstructed shift. duration_hours rounded to 2 decimals for display."""
    employee_id: str
    employee_name: Optional[str] = None
    in_at: datetime
    out_at: datetime
    in_gps_status: GpsStatus
    out_gps_status: GpsStatus
    duration_hours: float
    is_overtime: bool

    @field_serializer("in_at", "out_at", when_used="always")
    def _ser_datetime(self, dt: Optional[datetime]) -> Optional[str]:
        return iso_local(dt)


class ShiftListResponse(BaseModel):
    items: List[ShiftDto]
    total: int
    overtime_count: int
    overtime_threshold_hours: float
