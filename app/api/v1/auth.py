"""
Authentication endpoints
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.core.deps import get_db
from app.core.security import verify_pin, create_access_token
from app.models.employee import Employee
from app.schemas.auth import LoginRequest, TokenResponse, UserOut
from app.services.audit_service import log_audit

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate with employee ID and PIN and return a JWT token

    Rejects unknown IDs and wrong PINs with the same message, and inactive employees with 403.
    """
    employee = db.query(Employee).filter(Employee.id == login_data.employee_id).first()

    if not employee or not verify_pin(login_data.pin, employee.pin_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid ID or PIN"
        )

    if not employee.active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive"
        )

    access_token = create_access_token(data={
        "sub": employee.id,
        "is_admin": employee.is_admin,
    })

    # Audit failure must not block login
    try:
        log_audit(
            db=db,
            actor_id=employee.id,
            action="AUTH_LOGIN_SUCCESS",
            entity_type="auth",
            meta={"employee_id": employee.id, "is_admin": employee.is_admin}
        )
    except Exception as e:
        db.rollback()
        logger.warning("Failed to log audit for login: %s", e)

    return TokenResponse(
        access_token=access_token,
        user=UserOut(id=employee.id, name=employee.name, is_admin=employee.is_admin),
    )
