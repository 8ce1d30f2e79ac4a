from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from ..errors import IndexOutOfRange, InvalidTripState
from ..models import PointOfInterest
from .config import DEFAULT_TRIP_CONFIG, TripConfig
from .metrics import TripMetrics
from .models import Trip, TripStop

logger = logging.getLogger(__name__)


def _with_stops(trip: Trip, stops: Iterable[TripStop]) -> Trip:
    numbered = tuple(
        stop if stop.sequence_index == i else stop.model_copy(update={"sequence_index": i})
        for i, stop in enumerate(stops)
    )
    return trip.model_copy(update={"stops": numbered})


def add_stop(trip: Trip, stop: TripStop) -> Trip:
    """Append ``stop``; its sequence index becomes the current stop count."""
    return _with_stops(trip, (*trip.stops, stop))


def remove_stop(trip: Trip, poi_id: str) -> Trip:
    """Drop the first stop for ``poi_id`` and renumber the rest. Unknown ids are a no-op."""
    for i, stop in enumerate(trip.stops):
        if stop.poi_id == poi_id:
            return _with_stops(trip, trip.stops[:i] + trip.stops[i + 1:])
    logger.debug("remove_stop: %r not in trip", poi_id)
    return trip


def reorder(trip: Trip, from_index: int, to_index: int) -> Trip:
    """Move the stop at ``from_index`` to ``to_index``, shifting the stops between."""
    size = len(trip.stops)
    for index in (from_index, to_index):
        if not 0 <= index < size:
            raise IndexOutOfRange(index, size)

    stops = list(trip.stops)
    moved = stops.pop(from_index)
    stops.insert(to_index, moved)
    return _with_stops(trip, stops)


def metrics(trip: Trip) -> TripMetrics:
    """Derived totals, identical to the values the trip itself exposes."""
    return TripMetrics(
        total_distance_km=trip.total_distance_km,
        estimated_duration_minutes=trip.estimated_duration_minutes,
    )


def clear(trip: Trip) -> Trip:
    """Empty name, description and stops; keeps the persisted id."""
    return Trip(id=trip.id)


def update_details(
    trip: Trip,
    name: str | None = None,
    description: str | None = None,
) -> Trip:
    update: dict[str, Any] = {}
    if name is not None:
        update["name"] = name
    if description is not None:
        update["description"] = description
    return trip.model_copy(update=update) if update else trip


def stop_from_poi(
    poi: PointOfInterest,
    dwell_minutes: int | None = None,
    notes: str | None = None,
    config: TripConfig = DEFAULT_TRIP_CONFIG,
) -> TripStop:
    return TripStop(
        poi_id=poi.id,
        name=poi.name,
        category=poi.category,
        coordinate=poi.coordinate,
        estimated_dwell_minutes=config.default_dwell_minutes if dwell_minutes is None else dwell_minutes,
        address=poi.address,
        notes=notes,
    )


def ensure_persistable(trip: Trip) -> Trip:
    if not trip.name.strip():
        raise InvalidTripState("Trip name must not be blank")
    if not trip.stops:
        raise InvalidTripState("Trip must have at least one stop")
    return trip


def snapshot(trip: Trip) -> dict[str, Any]:
    """JSON-ready form of ``trip`` including its derived metrics."""
    return trip.model_dump(mode="json")
