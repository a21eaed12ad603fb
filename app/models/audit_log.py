"""
Audit log model
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON
from app.db.base import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    actor_id = Column(String, ForeignKey("employees.id"), nullable=False)
    action = Column(String, nullable=False)  # e.g., "AUTH_LOGIN_SUCCESS", "ATTENDANCE_CLOCK", "REPORT_EXPORT"
    entity_type = Column(String, nullable=False)  # e.g., "auth", "attendance_events", "report"
    entity_id = Column(Integer, nullable=True)  # ID of the affected entity
    meta_json = Column(JSON, nullable=True)  # Additional metadata as JSON
    # Note: server_default handled by migration (CURRENT_TIMESTAMP for SQLite, now() for PostgreSQL)
    created_at = Column(DateTime(timezone=True), nullable=False)
