from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RecommendationConfig:
    highly_rated_threshold: float = 4.5
    default_limit: int = 10
    max_limit: int = 50


DEFAULT_RECOMMENDATION_CONFIG = RecommendationConfig()
