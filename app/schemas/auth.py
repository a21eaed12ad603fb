"""
Authentication schemas
"""
from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Login request schema"""
    employee_id: str = Field(..., min_length=1, description="Employee ID, e.g. EMP001")
    pin: str = Field(..., min_length=1, description="Numeric PIN")


class UserOut(BaseModel):
    id: str
    name: str
    is_admin: bool


class TokenResponse(BaseModel):
    """Token response schema"""
    access_token: str
    token_type: str = "bearer"
    user: UserOut
