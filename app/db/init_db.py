"""
Database initialization: seed the default employee and administrator
"""
import logging
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.constants import (
    SEED_ADMIN_ID,
    SEED_ADMIN_NAME,
    SEED_EMPLOYEE_ID,
    SEED_EMPLOYEE_NAME,
)
from app.core.security import hash_pin
from app.models.employee import Employee

logger = logging.getLogger(__name__)


def init_db(db: Session) -> bool:
    """
    Seed EMP001 and ADMIN01 when the employees table is empty

    Returns:
        True if seed rows were created
    """
    if db.query(Employee).first() is not None:
        logger.info("Employees already exist, skipping seed")
        return False

    db.add_all([
        Employee(
            id=SEED_EMPLOYEE_ID,
            name=SEED_EMPLOYEE_NAME,
            pin_hash=hash_pin(settings.SEED_EMPLOYEE_PIN),
            is_admin=False,
            active=True,
        ),
        Employee(
            id=SEED_ADMIN_ID,
            name=SEED_ADMIN_NAME,
            pin_hash=hash_pin(settings.SEED_ADMIN_PIN),
            is_admin=True,
            active=True,
        ),
    ])
    db.commit()
    logger.info("Seeded employees: %s, %s", SEED_EMPLOYEE_ID, SEED_ADMIN_ID)
    return True
