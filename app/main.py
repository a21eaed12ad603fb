"""
GeoClock Attendance Backend - Main Application Entry Point
"""
import logging
import os
from urllib.parse import urlparse, urlunparse

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import OperationalError, ProgrammingError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.router import api_router
from app.core.config import settings
from app.core.constants import UPLOADS_URL_PREFIX
from app.core.errors import (
    http_exception_handler,
    validation_exception_handler,
    generic_exception_handler,
    operational_error_handler,
    is_missing_table_error,
)
from app.core.logging import setup_logging
from app.db.init_db import init_db
from app.db.session import SessionLocal

# Setup logging first
setup_logging()
logger = logging.getLogger(__name__)


def _mask_database_url(url: str) -> str:
    """Mask password in DATABASE_URL for safe logging; show full path for sqlite."""
    parsed = urlparse(url)
    if parsed.scheme.startswith("sqlite") or not parsed.password:
        return url
    netloc = f"{parsed.username}:****@{parsed.hostname or ''}"
    if parsed.port:
        netloc += f":{parsed.port}"
    return urlunparse(parsed._replace(netloc=netloc))


app = FastAPI(
    title="GeoClock Attendance Backend",
    description="Clock-in/out with GPS geofence and photo evidence; shift and overtime reports",
    version=settings.VERSION or "1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(OperationalError, operational_error_handler)
app.add_exception_handler(ProgrammingError, operational_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.include_router(api_router, prefix="/api/v1")

# Photo evidence
os.makedirs(settings.UPLOADS_DIR, exist_ok=True)
app.mount(UPLOADS_URL_PREFIX, StaticFiles(directory=settings.UPLOADS_DIR), name="uploads")


@app.on_event("startup")
def startup_log_config() -> None:
    """Log DATABASE_URL and geofence at startup."""
    logger.info("DATABASE_URL (app): %s", _mask_database_url(settings.DATABASE_URL))
    logger.info(
        "Geofence: office=(%s, %s) radius=%sm overtime_threshold=%sh",
        settings.OFFICE_LAT, settings.OFFICE_LNG,
        settings.GEOFENCE_RADIUS_METERS, settings.OVERTIME_THRESHOLD_HOURS,
    )


@app.on_event("startup")
def bootstrap_employees() -> None:
    """Seed the default employee and administrator into an empty database."""
    db = SessionLocal()
    try:
        init_db(db)
    except OperationalError as e:
        db.rollback()
        if is_missing_table_error(e):
            logger.warning("Database tables not ready yet, skipping employee seed")
        else:
            logger.error("Database error during employee seed: %s", e)
    finally:
        db.close()
