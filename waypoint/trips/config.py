from __future__ import annotations

from dataclasses import dataclass

from ..geo import MINUTES_PER_KM


@dataclass(frozen=True)
class TripConfig:
    minutes_per_km: float = MINUTES_PER_KM
    default_dwell_minutes: int = 30


DEFAULT_TRIP_CONFIG = TripConfig()
