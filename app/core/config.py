"""
Configuration management for GeoClock Attendance Backend
"""
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import Optional, List

from app.services.geofence import GeoPoint, GeofenceConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    DATABASE_URL: str = Field(default="sqlite:///./attendance.db", description="SQLAlchemy database URL")
    JWT_SECRET_KEY: str = Field(default="dev-only-secret-change-me", description="JWT secret key for token signing")

    JWT_ALGORITHM: str = Field(default="HS256", description="JWT algorithm")
    JWT_EXPIRE_MINUTES: int = Field(default=120, description="JWT token expiration in minutes")

    APP_ENV: str = Field(default="local", description="Application environment: local, staging, prod")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level: DEBUG, INFO, WARNING, ERROR")

    # CORS settings
    ALLOWED_ORIGINS: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins. Use '*' for local only."
    )

    # Display timezone for API datetimes; storage is always UTC
    TZ: str = Field(default="Europe/London", description="Timezone for API responses (storage is UTC)")

    # Geofence
    OFFICE_LAT: float = Field(default=51.5074, description="Office latitude in decimal degrees")
    OFFICE_LNG: float = Field(default=-0.1278, description="Office longitude in decimal degrees")
    GEOFENCE_RADIUS_METERS: float = Field(default=200.0, description="Allowed distance from the office in meters")

    # Shift reconstruction
    OVERTIME_THRESHOLD_HOURS: float = Field(
        default=8.0,
        description="A shift strictly longer than this many hours is flagged as overtime",
    )

    # Photo evidence
    UPLOADS_DIR: str = Field(default="uploads", description="Directory where clock photos are written")
    MAX_PHOTO_BYTES: int = Field(default=5 * 1024 * 1024, description="Maximum decoded photo size in bytes")

    # Seed employees created when the employees table is empty
    SEED_EMPLOYEE_PIN: str = Field(default="1234", description="PIN for the seeded EMP001 employee")
    SEED_ADMIN_PIN: str = Field(default="9999", description="PIN for the seeded ADMIN01 administrator")

    # Version (can be git SHA or semver)
    VERSION: Optional[str] = Field(default=None, description="Application version (git SHA or semver)")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True

    @field_validator("APP_ENV")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        """Validate APP_ENV"""
        allowed = ["local", "staging", "prod"]
        if v not in allowed:
            raise ValueError(f"APP_ENV must be one of {allowed}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate LOG_LEVEL"""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of {allowed}")
        return v.upper()

    @field_validator("OFFICE_LAT")
    @classmethod
    def validate_office_lat(cls, v: float) -> float:
        if not (-90 <= v <= 90):
            raise ValueError("OFFICE_LAT must be between -90 and 90")
        return v

    @field_validator("OFFICE_LNG")
    @classmethod
    def validate_office_lng(cls, v: float) -> float:
        if not (-180 <= v <= 180):
            raise ValueError("OFFICE_LNG must be between -180 and 180")
        return v

    @field_validator("GEOFENCE_RADIUS_METERS", "OVERTIME_THRESHOLD_HOURS")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if not v > 0:
            raise ValueError("must be greater than 0")
        return v

    def validate_production(self) -> None:
        """
        Validate settings for production environment

        Raises:
            ValueError: If production settings are invalid
        """
        if self.APP_ENV == "prod":
            # JWT_SECRET_KEY must be at least 32 characters in production
            if len(self.JWT_SECRET_KEY) < 32:
                raise ValueError(
                    "JWT_SECRET_KEY must be at least 32 characters in production environment"
                )

            # ALLOWED_ORIGINS must not be wildcard in production
            if self.ALLOWED_ORIGINS == "*" or not self.ALLOWED_ORIGINS:
                raise ValueError(
                    "ALLOWED_ORIGINS must be explicitly set (not '*') in production environment"
                )

    def get_allowed_origins_list(self) -> List[str]:
        """
        Get list of allowed CORS origins

        Returns:
            List of allowed origins (or ['*'] for local)
        """
        if self.ALLOWED_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    def geofence_config(self) -> GeofenceConfig:
        """Office coordinate and radius as an immutable GeofenceConfig."""
        return GeofenceConfig(
            office=GeoPoint(latitude=self.OFFICE_LAT, longitude=self.OFFICE_LNG),
            radius_meters=self.GEOFENCE_RADIUS_METERS,
        )


# Create settings instance
settings = Settings()

# Validate production settings if in prod
if settings.APP_ENV == "prod":
    settings.validate_production()
