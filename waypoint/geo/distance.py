from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict

from ..errors import InvalidCoordinate

EARTH_RADIUS_KM = 6371.0
MINUTES_PER_KM = 1.5


class Coordinate(BaseModel):
    """Geographic coordinates in WGS84."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


def validate_coordinate(coord: Coordinate) -> Coordinate:
    """Raise ``InvalidCoordinate`` unless both components are finite and in range."""
    lat, lon = coord.latitude, coord.longitude
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise InvalidCoordinate(lat, lon)
    if not -90.0 <= lat <= 90.0 or not -180.0 <= lon <= 180.0:
        raise InvalidCoordinate(lat, lon)
    return coord


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance (Haversine) in kilometers, rounded to 0.1 km."""
    validate_coordinate(a)
    validate_coordinate(b)
    if a == b:
        return 0.0

    # Order the endpoints so the float arithmetic is identical both ways.
    p, q = sorted(((a.latitude, a.longitude), (b.latitude, b.longitude)))
    phi1 = math.radians(p[0])
    phi2 = math.radians(q[0])
    dphi = math.radians(q[0] - p[0])
    dlambda = math.radians(q[1] - p[1])

    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    h = min(1.0, max(0.0, h))
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return round(EARTH_RADIUS_KM * c, 1)


def within_radius(origin: Coordinate, point: Coordinate, radius_km: float) -> bool:
    return distance_km(origin, point) <= radius_km


def travel_minutes(distance: float, minutes_per_km: float = MINUTES_PER_KM) -> int:
    """Travel time heuristic without routing: fixed minutes per km, rounded half up.

    Deterministic and explainable, not routing-accurate.
    """
    if distance <= 0:
        return 0
    return int(math.floor(distance * minutes_per_km + 0.5))
