from __future__ import annotations

import logging
from collections.abc import Collection, Iterable, Sequence
from datetime import datetime

from ..filters import FilterCriteria, apply
from ..geo import Coordinate
from ..models import InteractionRecord, InteractionType, PointOfInterest, UserPreferenceProfile
from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .models import Recommendation

logger = logging.getLogger(__name__)

REASON_PREFERRED_CUISINE = "You love {cuisine} cuisine"
REASON_HIGHLY_RATED = "Highly rated by travelers"
REASON_BUDGET = "Matches your budget preference"
REASON_DIETARY = "Has options for your dietary needs"
REASON_FALLBACK = "Popular in your area"


def _fold(values: Iterable[str]) -> set[str]:
    return {v.strip().casefold() for v in values}


def _ranking_key(poi: PointOfInterest) -> tuple[float, int, str]:
    return (-poi.rating, -poi.review_count, poi.id)


def _narrow_by_profile(
    pool: list[PointOfInterest],
    profile: UserPreferenceProfile,
) -> list[PointOfInterest]:
    """Keep POIs matching the preferred cuisines and price tiers.

    An empty preference set means "no preference" on that dimension. Falls
    back to the whole pool when the narrowing leaves nothing.
    """
    cuisines = _fold(profile.preferred_cuisines)
    tiers = profile.acceptable_price_tiers

    def matches(poi: PointOfInterest) -> bool:
        if cuisines and (poi.cuisine is None or poi.cuisine.strip().casefold() not in cuisines):
            return False
        return not tiers or poi.price_tier in tiers

    narrowed = [poi for poi in pool if matches(poi)]
    if not narrowed and pool:
        logger.info(
            "Preference narrowing matched none of %d candidates; using the full pool",
            len(pool),
        )
        return pool
    return narrowed


def explain(
    poi: PointOfInterest,
    profile: UserPreferenceProfile | None,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> str:
    """Pick the single rationale for ``poi``: first matching reason wins."""
    if profile is not None and poi.cuisine is not None:
        if poi.cuisine.strip().casefold() in _fold(profile.preferred_cuisines):
            return REASON_PREFERRED_CUISINE.format(cuisine=poi.cuisine)

    if poi.rating >= config.highly_rated_threshold:
        return REASON_HIGHLY_RATED

    if profile is not None:
        if poi.price_tier in profile.acceptable_price_tiers:
            return REASON_BUDGET
        if _fold(poi.dietary_tags) & _fold(profile.dietary_restrictions):
            return REASON_DIETARY

    return REASON_FALLBACK


def candidate_pool(
    pool: Sequence[PointOfInterest],
    interactions: Sequence[InteractionRecord] = (),
    exclude_ids: Collection[str] = frozenset(),
    criteria: FilterCriteria | None = None,
    origin: Coordinate | None = None,
    now: datetime | None = None,
) -> list[PointOfInterest]:
    """POIs eligible for ranking: ``criteria`` applied, excluded and favorited ids removed."""
    candidates = list(pool)
    if criteria is not None:
        candidates = apply(candidates, criteria, origin=origin, now=now)

    excluded = set(exclude_ids)
    excluded.update(i.poi_id for i in interactions if i.type == InteractionType.favorite)
    return [poi for poi in candidates if poi.id not in excluded]


def recommend(
    pool: Sequence[PointOfInterest],
    profile: UserPreferenceProfile | None = None,
    interactions: Sequence[InteractionRecord] = (),
    exclude_ids: Collection[str] = frozenset(),
    limit: int = DEFAULT_RECOMMENDATION_CONFIG.default_limit,
    criteria: FilterCriteria | None = None,
    origin: Coordinate | None = None,
    now: datetime | None = None,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> list[Recommendation]:
    """
    Rank ``pool`` for a traveler and explain each pick.

    Steps:
    - Optionally pre-filter with ``criteria`` (see ``filters.apply``).
    - Exclude ``exclude_ids`` and anything favorited in ``interactions``.
    - Narrow by the profile's cuisines/price tiers, unless that empties the pool.
    - Sort by rating desc, review count desc, id asc.
    - Attach one rationale per entry and truncate to ``limit``.

    ``profile=None`` is the anonymous path: no narrowing, and rationales only
    come from the rating threshold or the fallback.
    """
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    candidates = candidate_pool(pool, interactions, exclude_ids, criteria, origin=origin, now=now)

    if profile is not None:
        candidates = _narrow_by_profile(candidates, profile)

    ranked = sorted(candidates, key=_ranking_key)[:limit]
    logger.debug("Recommending %d of %d candidates", len(ranked), len(candidates))

    return [Recommendation(poi=poi, rationale=explain(poi, profile, config)) for poi in ranked]


def popular(
    pool: Sequence[PointOfInterest],
    limit: int = DEFAULT_RECOMMENDATION_CONFIG.default_limit,
) -> list[Recommendation]:
    """Top-rated list for callers without a profile or history."""
    return recommend(pool, profile=None, limit=limit)
