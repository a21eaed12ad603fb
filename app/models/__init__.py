"""
Database models
"""
from app.models.employee import Employee
from app.models.audit_log import AuditLog
from app.models.attendance import AttendanceEvent, EventKind

__all__ = [
    "Employee",
    "AuditLog",
    "AttendanceEvent",
    "EventKind",
]
