"""
Attendance event model (append-only clock IN/OUT log with GPS and photo evidence).
"""
from sqlalchemy import Column, Integer, DateTime, ForeignKey, String, Float, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from app.db.base import Base
from app.services.geofence import GpsStatus


class EventKind(str, enum.Enum):
    IN = "IN"
    OUT = "OUT"


class AttendanceEvent(Base):
    __tablename__ = "attendance_events"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(String, ForeignKey("employees.id"), nullable=False, index=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, index=True)  # Server UTC time at write
    kind = Column(SQLEnum(EventKind), nullable=False)
    latitude = Column(Float, nullable=True)  # NULL when location acquisition failed
    longitude = Column(Float, nullable=True)
    gps_status = Column(SQLEnum(GpsStatus), nullable=False)  # Evaluated at capture, never recomputed
    photo_path = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)

    employee = relationship("Employee", backref="attendance_events")
