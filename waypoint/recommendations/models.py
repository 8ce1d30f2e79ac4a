from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..filters import FilterCriteria
from ..geo import Coordinate
from ..models import InteractionRecord, PointOfInterest, UserPreferenceProfile
from .config import DEFAULT_RECOMMENDATION_CONFIG


class Recommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    poi: PointOfInterest
    rationale: str


class RecommendationRequest(BaseModel):
    profile: UserPreferenceProfile | None = None
    interactions: list[InteractionRecord] = Field(default_factory=list)
    exclude_ids: list[str] = Field(default_factory=list)
    criteria: FilterCriteria | None = None
    origin: Coordinate | None = None
    now: datetime | None = None
    limit: int = Field(
        default=DEFAULT_RECOMMENDATION_CONFIG.default_limit,
        ge=0,
        le=DEFAULT_RECOMMENDATION_CONFIG.max_limit,
    )


class RecommendationResponse(BaseModel):
    recommendations: list[Recommendation]
    total_candidates: int
