from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from ..geo import Coordinate, validate_coordinate
from ..models import Category
from .metrics import route_metrics


class TripStop(BaseModel):
    model_config = ConfigDict(frozen=True)

    poi_id: str = Field(..., min_length=1)
    name: str
    category: Category
    coordinate: Coordinate
    estimated_dwell_minutes: int = Field(default=0, ge=0)
    sequence_index: int = Field(default=0, ge=0)
    address: str | None = None
    notes: str | None = None

    @field_validator("coordinate")
    @classmethod
    def _check_coordinate(cls, value: Coordinate) -> Coordinate:
        return validate_coordinate(value)


class Trip(BaseModel):
    """An ordered itinerary.

    ``id`` is assigned by persistence. Distance and duration are computed from
    ``stops`` on every read.
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    name: str = ""
    description: str | None = None
    stops: tuple[TripStop, ...] = ()

    @model_validator(mode="after")
    def _check_sequence(self) -> "Trip":
        for position, stop in enumerate(self.stops):
            if stop.sequence_index != position:
                raise ValueError(
                    f"stop {stop.poi_id!r} has sequence_index {stop.sequence_index}, "
                    f"expected {position}"
                )
        return self

    @computed_field
    @property
    def total_distance_km(self) -> float:
        return route_metrics(self.stops).total_distance_km

    @computed_field
    @property
    def estimated_duration_minutes(self) -> int:
        return route_metrics(self.stops).estimated_duration_minutes


class AddStopRequest(BaseModel):
    trip: Trip = Field(default_factory=Trip)
    poi_id: str = Field(..., min_length=1)
    dwell_minutes: int | None = Field(default=None, ge=0)
    notes: str | None = None


class RemoveStopRequest(BaseModel):
    trip: Trip
    poi_id: str


class ReorderRequest(BaseModel):
    trip: Trip
    from_index: int
    to_index: int


class TripDetailsRequest(BaseModel):
    trip: Trip
    name: str | None = None
    description: str | None = None


class SaveTripRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    trip: Trip


class SaveTripResponse(BaseModel):
    trip_id: str
    trip: Trip
