"""
Employee model
"""
from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.sql import func
from app.db.base import Base


class Employee(Base):
    __tablename__ = "employees"

    id = Column(String, primary_key=True, index=True)  # Employee code, e.g. "EMP001"
    name = Column(String, nullable=False)
    pin_hash = Column(String, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
