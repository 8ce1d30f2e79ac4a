"""
Geospatial helpers.

Responsibilities:
- Validate WGS84 coordinates.
- Haversine distance between two coordinates (km, one decimal).
- Radius membership and the fixed travel-time heuristic.
"""
from .distance import (
    EARTH_RADIUS_KM,
    MINUTES_PER_KM,
    Coordinate,
    distance_km,
    travel_minutes,
    validate_coordinate,
    within_radius,
)

__all__ = [
    "EARTH_RADIUS_KM",
    "MINUTES_PER_KM",
    "Coordinate",
    "distance_km",
    "travel_minutes",
    "validate_coordinate",
    "within_radius",
]
