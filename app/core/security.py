"""
Security utilities: PIN hashing and JWT access tokens
"""
import logging
from datetime import timedelta
from typing import Dict, Optional

import argon2
import bcrypt
from jose import JWTError, jwt

from app.core.config import settings
from app.utils.datetime_utils import now_utc

logger = logging.getLogger(__name__)

_argon2_hasher = argon2.PasswordHasher()


def hash_pin(pin: str) -> str:
    """Hash a PIN with argon2."""
    return _argon2_hasher.hash(pin)


def verify_pin(plain_pin: str, pin_hash: str) -> bool:
    """
    Verify a PIN against its hash.

    Argon2 hashes are checked first; legacy bcrypt hashes ("$2b$...") are still accepted.
    """
    if pin_hash.startswith("$argon2"):
        try:
            return _argon2_hasher.verify(pin_hash, plain_pin)
        except argon2.exceptions.VerificationError:
            return False
        except argon2.exceptions.InvalidHashError:
            logger.warning("Stored argon2 PIN hash is malformed")
            return False

    if pin_hash.startswith("$2"):
        try:
            return bcrypt.checkpw(plain_pin.encode("utf-8"), pin_hash.encode("utf-8"))
        except ValueError:
            logger.warning("Stored bcrypt PIN hash is malformed")
            return False

    return False


def create_access_token(data: Dict, expires_minutes: Optional[int] = None) -> str:
    """Create a JWT access token"""
    to_encode = data.copy()

    if expires_minutes is None:
        expires_minutes = settings.JWT_EXPIRE_MINUTES

    expire = now_utc() + timedelta(minutes=expires_minutes)
    to_encode.update({"exp": expire})

    return jwt.encode(
        to_encode,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM
    )


def decode_token(token: str) -> Dict:
    """Decode and verify a JWT token"""
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError:
        raise ValueError("Invalid token")
