"""
Trip planning.

Responsibilities:
- Keep an ordered list of stops with contiguous sequence indices.
- Derive total distance and estimated duration from the current stops.
- Hand a validated snapshot to a persistence collaborator.
"""
from .metrics import TripMetrics, route_metrics
from .models import Trip, TripStop
from .planner import (
    add_stop,
    clear,
    ensure_persistable,
    metrics,
    remove_stop,
    reorder,
    snapshot,
    stop_from_poi,
    update_details,
)
from .store import InMemoryTripStore, TripStore

__all__ = [
    "InMemoryTripStore",
    "Trip",
    "TripMetrics",
    "TripStop",
    "TripStore",
    "add_stop",
    "clear",
    "ensure_persistable",
    "metrics",
    "remove_stop",
    "reorder",
    "route_metrics",
    "snapshot",
    "stop_from_poi",
    "update_details",
]
