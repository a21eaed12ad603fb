"""
Report service - admin views and exports built from raw attendance events
"""
from typing import Dict, List, Iterable

from app.models.attendance import AttendanceEvent
from app.schemas.attendance import AdminEventDto, ShiftDto
from app.services.shift_service import Shift
from app.utils.datetime_utils import iso_8601_utc
from app.utils.enums import enum_to_str

ATTENDANCE_CSV_HEADERS = [
    "Timestamp",
    "Employee Name",
    "Action",
    "GPS Status",
    "Latitude",
    "Longitude",
]


def _employee_name(event: AttendanceEvent):
    return event.employee.name if event.employee else None


def to_admin_event(event: AttendanceEvent) -> AdminEventDto:
    dto = AdminEventDto.model_validate(event)
    dto.employee_name = _employee_name(event)
    return dto


def to_shift_dto(shift: Shift) -> ShiftDto:
    return ShiftDto(
        employee_id=shift.employee_id,
        employee_name=_employee_name(shift.in_event),
        in_at=shift.in_event.timestamp,
        out_at=shift.out_event.timestamp,
        in_gps_status=shift.in_event.gps_status,
        out_gps_status=shift.out_event.gps_status,
        duration_hours=round(shift.duration_hours, 2),
        is_overtime=shift.is_overtime,
    )


def get_attendance_csv_rows(events: Iterable[AttendanceEvent]) -> List[Dict]:
    """
    Flatten raw events into CSV rows (one row per event, not per shift)

    Returns:
        Dicts keyed by ATTENDANCE_CSV_HEADERS
    """
    return [
        {
            "Timestamp": iso_8601_utc(event.timestamp),
            "Employee Name": _employee_name(event),
            "Action": enum_to_str(event.kind),
            "GPS Status": enum_to_str(event.gps_status),
            "Latitude": event.latitude,
            "Longitude": event.longitude,
        }
        for event in events
    ]
