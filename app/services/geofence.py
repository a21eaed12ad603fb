"""
Geofence evaluation: classifies a reported GPS coordinate against the office zone.

Pure functions only. Nothing here raises for bad coordinates; a point that cannot
be located is OUT_OF_RANGE, and a missing point is SEARCHING.
"""
import enum
import math
from dataclasses import dataclass
from typing import Optional

EARTH_RADIUS_METERS = 6_371_000.0


class GpsStatus(str, enum.Enum):
    OK = "OK"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    SEARCHING = "SEARCHING"


@dataclass(frozen=True)
class GeoPoint:
    """A coordinate in decimal degrees."""
    latitude: float
    longitude: float

    @classmethod
    def from_optional(cls, latitude: Optional[float], longitude: Optional[float]) -> Optional["GeoPoint"]:
        """Build a point only when both coordinates were reported."""
        if latitude is None or longitude is None:
            return None
        return cls(latitude=float(latitude), longitude=float(longitude))

    def is_valid(self) -> bool:
        lat, lng = self.latitude, self.longitude
        if not (math.isfinite(lat) and math.isfinite(lng)):
            return False
        return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0


@dataclass(frozen=True)
class GeofenceConfig:
    """Office coordinate plus allowed radius. Built once at startup from settings."""
    office: GeoPoint
    radius_meters: float


def haversine_distance(a: GeoPoint, b: GeoPoint) -> float:
    """
    Great-circle distance in meters on a spherical earth.

    The haversine term is clamped to [0, 1] so floating-point overshoot near
    antipodal or identical points never reaches sqrt/atan2 out of domain.
    """
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    h = min(1.0, max(0.0, h))
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_METERS * c


def evaluate(point: Optional[GeoPoint], config: GeofenceConfig) -> GpsStatus:
    """
    Classify a reported point against the configured geofence.

    Args:
        point: Reported coordinate, or None when location was not acquired
        config: Office coordinate and radius

    Returns:
        SEARCHING for a missing point, OK when within radius (inclusive),
        OUT_OF_RANGE otherwise (including NaN or out-of-range coordinates)
    """
    if point is None:
        return GpsStatus.SEARCHING
    if not point.is_valid() or not config.office.is_valid():
        return GpsStatus.OUT_OF_RANGE

    distance = haversine_distance(point, config.office)
    return GpsStatus.OK if distance <= config.radius_meters else GpsStatus.OUT_OF_RANGE
