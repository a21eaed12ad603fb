"""
Photo evidence storage on the local filesystem
"""
import base64
import binascii
import logging
import os
import re
import uuid
from typing import Optional

from fastapi import HTTPException, status

from app.core.constants import UPLOADS_URL_PREFIX

_log = logging.getLogger(__name__)

_DATA_URL_PREFIX = re.compile(r"^data:image/[a-zA-Z0-9.+-]+;base64,")


class PhotoStore:
    """Writes decoded clock photos under a directory and returns their public path."""

    def __init__(self, directory: str, max_bytes: int):
        self.directory = directory
        self.max_bytes = max_bytes

    def save(self, employee_id: str, photo: Optional[str]) -> Optional[str]:
        """
        Decode a base64 image (optionally a data URL) and store it.

        Returns:
            "/uploads/<file>" reference, or None when no photo was supplied

        Raises:
            HTTPException: 400 for malformed base64, 413 when over max_bytes
        """
        if not photo:
            return None

        payload = _DATA_URL_PREFIX.sub("", photo.strip(), count=1)
        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Photo must be base64-encoded image data"
            )

        if not data:
            return None
        if len(data) > self.max_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"Photo exceeds {self.max_bytes} bytes"
            )

        os.makedirs(self.directory, exist_ok=True)
        safe_employee = re.sub(r"[^A-Za-z0-9_-]", "_", employee_id)
        file_name = f"{safe_employee}_{uuid.uuid4().hex}.png"
        with open(os.path.join(self.directory, file_name), "wb") as fh:
            fh.write(data)

        _log.debug("photo stored: employee_id=%s file=%s bytes=%s", employee_id, file_name, len(data))
        return f"{UPLOADS_URL_PREFIX}/{file_name}"
