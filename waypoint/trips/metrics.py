from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from pydantic import BaseModel, ConfigDict

from ..geo import Coordinate, distance_km, travel_minutes
from .config import DEFAULT_TRIP_CONFIG, TripConfig


class _Located(Protocol):
    coordinate: Coordinate


class TripMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_distance_km: float = 0.0
    estimated_duration_minutes: int = 0


def route_metrics(
    stops: Sequence[_Located],
    config: TripConfig = DEFAULT_TRIP_CONFIG,
) -> TripMetrics:
    """Sum straight-line legs between consecutive stops.

    Duration is a flat minutes-per-km estimate, not a routed ETA.
    """
    if len(stops) < 2:
        return TripMetrics()

    total = sum(distance_km(a.coordinate, b.coordinate) for a, b in zip(stops, stops[1:]))
    total = round(total, 1)
    return TripMetrics(
        total_distance_km=total,
        estimated_duration_minutes=travel_minutes(total, config.minutes_per_km),
    )
