from __future__ import annotations

import uuid
from typing import Protocol

from .models import Trip
from .planner import ensure_persistable


class TripStore(Protocol):
    """Persistence collaborator for trips."""

    def save(self, trip: Trip, user_id: str) -> str: ...

    def list(self, user_id: str) -> list[Trip]: ...


class InMemoryTripStore:
    """Process-local ``TripStore``. Saving a trip that already has an id replaces it."""

    def __init__(self) -> None:
        self._trips: dict[str, dict[str, Trip]] = {}

    def save(self, trip: Trip, user_id: str) -> str:
        ensure_persistable(trip)
        trip_id = trip.id or uuid.uuid4().hex
        self._trips.setdefault(user_id, {})[trip_id] = trip.model_copy(update={"id": trip_id})
        return trip_id

    def list(self, user_id: str) -> list[Trip]:
        return list(self._trips.get(user_id, {}).values())

    def clear(self) -> None:
        self._trips.clear()
