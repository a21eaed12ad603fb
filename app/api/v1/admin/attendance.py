"""
Admin attendance endpoints: raw event log and reconstructed shifts.
Shifts are rebuilt from the event snapshot on every request.
"""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query

from app.core.deps import get_event_store, get_overtime_threshold_hours, require_admin
from app.models.employee import Employee
from app.schemas.attendance import AdminEventListResponse, ShiftListResponse
from app.services.attendance_service import list_events
from app.services.event_store import EventStore
from app.services.report_service import to_admin_event, to_shift_dto
from app.services.shift_service import reconstruct

router = APIRouter()


@router.get("/logs", response_model=AdminEventListResponse)
async def admin_logs(
    employee_id: Optional[str] = Query(None),
    from_date: Optional[date] = Query(None, alias="from"),
    to_date: Optional[date] = Query(None, alias="to"),
    limit: Optional[int] = Query(None, ge=1, le=5000),
    store: EventStore = Depends(get_event_store),
    current_user: Employee = Depends(require_admin),
):
    """GET /api/v1/admin/logs?employee_id=&from=&to=&limit= - raw events, newest first."""
    events = list_events(store, employee_id=employee_id, from_date=from_date, to_date=to_date, limit=limit)
    items = [to_admin_event(e) for e in events]
    return AdminEventListResponse(items=items, total=len(items))


@router.get("/shifts", response_model=ShiftListResponse)
async def admin_shifts(
    employee_id: Optional[str] = Query(None),
    from_date: Optional[date] = Query(None, alias="from"),
    to_date: Optional[date] = Query(None, alias="to"),
    store: EventStore = Depends(get_event_store),
    overtime_threshold_hours: float = Depends(get_overtime_threshold_hours),
    current_user: Employee = Depends(require_admin),
):
    """GET /api/v1/admin/shifts?employee_id=&from=&to= - shifts, most recent first, with overtime flags."""
    events = list_events(store, employee_id=employee_id, from_date=from_date, to_date=to_date, newest_first=False)
    shifts = reconstruct(events, overtime_threshold_hours=overtime_threshold_hours)
    items = [to_shift_dto(s) for s in shifts]
    return ShiftListResponse(
        items=items,
        total=len(items),
        overtime_count=sum(1 for s in shifts if s.is_overtime),
        overtime_threshold_hours=overtime_threshold_hours,
    )
