"""
Reports and exports endpoints
"""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.deps import get_db, get_event_store, require_admin
from app.models.employee import Employee
from app.services.attendance_service import list_events
from app.services.audit_service import log_audit
from app.services.event_store import EventStore
from app.services.report_service import ATTENDANCE_CSV_HEADERS, get_attendance_csv_rows
from app.utils.csv_export import stream_csv

router = APIRouter()


@router.get("/attendance.csv")
async def export_attendance_csv(
    from_date: Optional[date] = Query(None, alias="from", description="Start date (YYYY-MM-DD)"),
    to_date: Optional[date] = Query(None, alias="to", description="End date (YYYY-MM-DD)"),
    employee_id: Optional[str] = Query(None, description="Filter by employee ID"),
    db: Session = Depends(get_db),
    store: EventStore = Depends(get_event_store),
    current_user: Employee = Depends(require_admin)
):
    """
    Export raw attendance events as CSV, newest first

    Columns: Timestamp, Employee Name, Action, GPS Status, Latitude, Longitude.
    One row per event; shifts are not part of the export.
    """
    events = list_events(store, employee_id=employee_id, from_date=from_date, to_date=to_date)
    rows = get_attendance_csv_rows(events)

    log_audit(
        db=db,
        actor_id=current_user.id,
        action="REPORT_EXPORT",
        entity_type="report",
        entity_id=None,
        meta={
            "report_type": "attendance",
            "from_date": from_date,
            "to_date": to_date,
            "employee_id": employee_id,
            "row_count": len(rows)
        }
    )

    return stream_csv(headers=ATTENDANCE_CSV_HEADERS, rows=rows, filename="attendance_report.csv")
