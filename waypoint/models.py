from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from .geo import Coordinate, validate_coordinate

WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

_SPAN_RE = re.compile(r"^(\d{1,2}):(\d{2})\s*-\s*(\d{1,2}):(\d{2})$")
_MINUTES_PER_DAY = 24 * 60


class Category(str, Enum):
    restaurant = "restaurant"
    fuel_station = "fuel_station"


class InteractionType(str, Enum):
    view = "view"
    favorite = "favorite"
    review = "review"
    share = "share"


def _parse_clock(hours: str, minutes: str) -> int:
    h, m = int(hours), int(minutes)
    if m > 59 or h > 24 or (h == 24 and m != 0):
        raise ValueError(f"Invalid time of day {hours}:{minutes}")
    return h * 60 + m


def parse_spans(value: str) -> list[tuple[int, int]]:
    """Parse ``"11:00-14:30, 17:00-22:00"`` into minute-of-day pairs.

    ``"closed"`` (any case) or an empty string yields no spans.
    """
    text = value.strip()
    if not text or text.lower() == "closed":
        return []
    spans: list[tuple[int, int]] = []
    for part in text.split(","):
        match = _SPAN_RE.match(part.strip())
        if not match:
            raise ValueError(f"Invalid opening span {part.strip()!r}")
        start = _parse_clock(match.group(1), match.group(2))
        end = _parse_clock(match.group(3), match.group(4))
        spans.append((start, end))
    return spans


class OpeningHours(BaseModel):
    """Weekly schedule: weekday name -> spans string (``"11:00-22:00"`` or ``"closed"``).

    A span whose close is not after its open runs past midnight into the
    following day. Days missing from the schedule are closed.
    """

    model_config = ConfigDict(frozen=True)

    schedule: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _wrap_plain_mapping(cls, data: Any) -> Any:
        if isinstance(data, dict) and "schedule" not in data:
            return {"schedule": data}
        return data

    @field_validator("schedule")
    @classmethod
    def _check_schedule(cls, value: dict[str, str]) -> dict[str, str]:
        normalized: dict[str, str] = {}
        for day, spans in value.items():
            key = day.strip().lower()
            if key not in WEEKDAYS:
                raise ValueError(f"Unknown weekday {day!r}")
            parse_spans(spans)
            normalized[key] = spans.strip()
        return normalized

    def spans_for(self, day: str) -> list[tuple[int, int]]:
        return parse_spans(self.schedule.get(day, ""))

    def is_open(self, now: datetime) -> bool:
        """Whether the schedule is open at ``now`` (interpreted as local wall-clock time)."""
        weekday = now.weekday()
        minute = now.hour * 60 + now.minute

        for start, end in self.spans_for(WEEKDAYS[weekday]):
            if start < end:
                if start <= minute < end:
                    return True
            elif minute >= start:
                return True

        # Overnight spans opened the previous day
        for start, end in self.spans_for(WEEKDAYS[(weekday - 1) % 7]):
            if end <= start and minute < end:
                return True
        return False


class PointOfInterest(BaseModel):
    """A restaurant or fuel station with its location and attributes."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    category: Category
    coordinate: Coordinate
    cuisine: str | None = None
    price_tier: int = Field(..., ge=1, le=4)
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    review_count: int = Field(default=0, ge=0)
    feature_tags: frozenset[str] = Field(default_factory=frozenset)
    dietary_tags: frozenset[str] = Field(default_factory=frozenset)
    opening_hours: OpeningHours | None = None
    address: str | None = None
    description: str | None = None
    brand: str | None = None

    @field_validator("coordinate")
    @classmethod
    def _check_coordinate(cls, value: Coordinate) -> Coordinate:
        return validate_coordinate(value)

    @model_validator(mode="after")
    def _cuisine_only_for_restaurants(self) -> "PointOfInterest":
        if self.cuisine is not None and self.category != Category.restaurant:
            raise ValueError("cuisine is only valid for restaurants")
        return self

    @field_serializer("feature_tags", "dietary_tags")
    def _sorted_tags(self, value: frozenset[str]) -> list[str]:
        return sorted(value)


class UserPreferenceProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    preferred_cuisines: frozenset[str] = Field(default_factory=frozenset)
    dietary_restrictions: frozenset[str] = Field(default_factory=frozenset)
    acceptable_price_tiers: frozenset[int] = Field(default_factory=frozenset)
    max_distance_km: float | None = Field(default=None, ge=0.0)

    @field_validator("acceptable_price_tiers")
    @classmethod
    def _check_tiers(cls, value: frozenset[int]) -> frozenset[int]:
        invalid = sorted(t for t in value if t not in (1, 2, 3, 4))
        if invalid:
            raise ValueError(f"Price tiers must be within 1..4, got {invalid}")
        return value


class InteractionRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str = Field(..., min_length=1)
    poi_id: str = Field(..., min_length=1)
    type: InteractionType
    timestamp: datetime
