"""
Attendance event storage.

Append-only: events are inserted and queried, never updated or deleted.
Handlers receive an EventStore through the get_event_store dependency.
"""
from datetime import datetime
from typing import List, Optional, Protocol

from sqlalchemy.orm import Session, joinedload

from app.models.attendance import AttendanceEvent, EventKind
from app.services.geofence import GpsStatus


class EventStore(Protocol):
    def insert_event(
        self,
        *,
        employee_id: str,
        timestamp: datetime,
        kind: EventKind,
        latitude: Optional[float],
        longitude: Optional[float],
        gps_status: GpsStatus,
        photo_path: Optional[str],
    ) -> AttendanceEvent:
        ...

    def query_events(
        self,
        *,
        employee_id: Optional[str] = None,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
        newest_first: bool = True,
        limit: Optional[int] = None,
    ) -> List[AttendanceEvent]:
        ...


class SqlAlchemyEventStore:
    """EventStore backed by the attendance_events table."""

    def __init__(self, db: Session):
        self.db = db

    def insert_event(
        self,
        *,
        employee_id: str,
        timestamp: datetime,
        kind: EventKind,
        latitude: Optional[float],
        longitude: Optional[float],
        gps_status: GpsStatus,
        photo_path: Optional[str],
    ) -> AttendanceEvent:
        event = AttendanceEvent(
            employee_id=employee_id,
            timestamp=timestamp,
            kind=kind,
            latitude=latitude,
            longitude=longitude,
            gps_status=gps_status,
            photo_path=photo_path,
        )
        self.db.add(event)
        self.db.commit()
        self.db.refresh(event)
        return event

    def query_events(
        self,
        *,
        employee_id: Optional[str] = None,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
        newest_first: bool = True,
        limit: Optional[int] = None,
    ) -> List[AttendanceEvent]:
        query = self.db.query(AttendanceEvent).options(joinedload(AttendanceEvent.employee))
        if employee_id is not None:
            query = query.filter(AttendanceEvent.employee_id == employee_id)
        if since is not None:
            query = query.filter(AttendanceEvent.timestamp >= since)
        if until is not None:
            query = query.filter(AttendanceEvent.timestamp < until)

        if newest_first:
            query = query.order_by(AttendanceEvent.timestamp.desc(), AttendanceEvent.id.desc())
        else:
            query = query.order_by(AttendanceEvent.timestamp, AttendanceEvent.id)

        if limit is not None:
            query = query.limit(limit)
        return query.all()
