"""
Dependencies and guards for FastAPI endpoints
"""
from typing import Generator
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from app.db.session import SessionLocal
from app.core.config import settings
from app.core.security import decode_token
from app.models.employee import Employee
from app.services.event_store import EventStore, SqlAlchemyEventStore
from app.services.geofence import GeofenceConfig
from app.services.photo_store import PhotoStore


security = HTTPBearer()


def get_db() -> Generator:
    """Dependency for getting database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_event_store(db: Session = Depends(get_db)) -> EventStore:
    """Attendance event storage bound to the request's session"""
    return SqlAlchemyEventStore(db)


def get_geofence_config() -> GeofenceConfig:
    """Process-wide geofence configuration"""
    return settings.geofence_config()


def get_overtime_threshold_hours() -> float:
    return settings.OVERTIME_THRESHOLD_HOURS


def get_photo_store() -> PhotoStore:
    return PhotoStore(settings.UPLOADS_DIR, max_bytes=settings.MAX_PHOTO_BYTES)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> Employee:
    """
    Get current authenticated user from JWT token
    """
    try:
        payload = decode_token(credentials.credentials)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    employee_id = payload.get("sub")
    if not employee_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if employee is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not employee.active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user"
        )

    return employee


def require_admin(current_user: Employee = Depends(get_current_user)) -> Employee:
    """
    Allow access to administrators only

    Usage:
        @router.get("/shifts")
        async def shifts(user: Employee = Depends(require_admin)):
            ...
    """
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Admin role required."
        )
    return current_user
