from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..geo import Coordinate
from ..models import Category, PointOfInterest


class SortOption(str, Enum):
    relevance = "relevance"
    rating = "rating"
    reviews = "reviews"
    distance = "distance"
    price_low = "price_low"
    price_high = "price_high"


class FilterCriteria(BaseModel):
    """Independent, optional filter criteria.

    ``None`` means the criterion is unset and imposes no constraint. An empty
    set is an explicit constraint that nothing satisfies.
    """

    model_config = ConfigDict(frozen=True)

    cuisines: frozenset[str] | None = None
    price_range: tuple[int, int] | None = None
    price_tiers: frozenset[int] | None = None
    min_rating: float | None = Field(default=None, ge=0.0, le=5.0)
    max_distance_km: float | None = Field(default=None, ge=0.0)
    feature_tags: frozenset[str] | None = None
    dietary_tags: frozenset[str] | None = None
    open_now: bool | None = None
    query: str | None = None
    categories: frozenset[Category] | None = None

    @field_validator("price_range")
    @classmethod
    def _check_price_range(cls, value: tuple[int, int] | None) -> tuple[int, int] | None:
        if value is None:
            return value
        low, high = value
        if not (1 <= low <= 4 and 1 <= high <= 4):
            raise ValueError("price_range bounds must be within 1..4")
        if low > high:
            raise ValueError("price_range minimum must not exceed maximum")
        return value

    @field_validator("price_tiers")
    @classmethod
    def _check_price_tiers(cls, value: frozenset[int] | None) -> frozenset[int] | None:
        if value is not None and any(t not in (1, 2, 3, 4) for t in value):
            raise ValueError("price_tiers must be within 1..4")
        return value

    def active_fields(self) -> list[str]:
        """Names of the criteria that are set."""
        return [name for name in type(self).model_fields if getattr(self, name) is not None]


class SearchRequest(BaseModel):
    criteria: FilterCriteria = Field(default_factory=FilterCriteria)
    origin: Coordinate | None = None
    now: datetime | None = None
    sort_by: SortOption = SortOption.relevance
    limit: int | None = Field(default=None, ge=0)


class SearchResponse(BaseModel):
    results: list[PointOfInterest]
    total: int
