"""Admin API (administrators only)."""
from fastapi import APIRouter
from app.api.v1.admin import attendance as admin_attendance

admin_router = APIRouter(prefix="/admin", tags=["admin"])
admin_router.include_router(admin_attendance.router, tags=["admin-attendance"])
