from __future__ import annotations


class WaypointError(Exception):
    """Base class for every error raised by the engine."""


class InvalidCoordinate(WaypointError, ValueError):
    """Latitude or longitude outside the valid range."""

    def __init__(self, latitude: float, longitude: float) -> None:
        self.latitude = latitude
        self.longitude = longitude
        super().__init__(
            f"Invalid coordinate ({latitude}, {longitude}): latitude must be in "
            "[-90, 90] and longitude in [-180, 180]"
        )


class IndexOutOfRange(WaypointError, IndexError):
    """A stop index outside the current stop list."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"Stop index {index} out of range for {size} stop(s)")


class InvalidTripState(WaypointError):
    """A trip that cannot be handed to persistence in its current state."""
