from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime
from functools import partial

from ..geo import Coordinate, distance_km, validate_coordinate
from ..models import Category, PointOfInterest
from .models import FilterCriteria

logger = logging.getLogger(__name__)

Predicate = Callable[[PointOfInterest], bool]


def _fold(values: frozenset[str]) -> set[str]:
    return {v.strip().casefold() for v in values}


def _match_cuisine(cuisines: set[str], poi: PointOfInterest) -> bool:
    if poi.cuisine is None and poi.category != Category.restaurant:
        return True
    return poi.cuisine is not None and poi.cuisine.strip().casefold() in cuisines


def _match_price_range(bounds: tuple[int, int], poi: PointOfInterest) -> bool:
    return bounds[0] <= poi.price_tier <= bounds[1]


def _match_price_tiers(tiers: frozenset[int], poi: PointOfInterest) -> bool:
    return poi.price_tier in tiers


def _match_min_rating(minimum: float, poi: PointOfInterest) -> bool:
    return poi.rating >= minimum


def _match_distance(origin: Coordinate, radius_km: float, poi: PointOfInterest) -> bool:
    return distance_km(origin, poi.coordinate) <= radius_km


def _match_any_tag(wanted: set[str], attr: str, poi: PointOfInterest) -> bool:
    return bool(wanted & _fold(getattr(poi, attr)))


def _match_open(now: datetime, poi: PointOfInterest) -> bool:
    return poi.opening_hours is not None and poi.opening_hours.is_open(now)


def _match_query(term: str, poi: PointOfInterest) -> bool:
    haystacks = (poi.name, poi.cuisine or "", poi.description or "")
    return any(term in h.casefold() for h in haystacks)


def _match_category(categories: frozenset[Category], poi: PointOfInterest) -> bool:
    return poi.category in categories


def build_predicates(
    criteria: FilterCriteria,
    origin: Coordinate | None = None,
    now: datetime | None = None,
) -> list[tuple[str, Predicate]]:
    """Return one named predicate per active criterion.

    Every predicate depends only on the candidate, so they can run in any order.
    """
    predicates: list[tuple[str, Predicate]] = []

    if criteria.cuisines is not None:
        predicates.append(("cuisines", partial(_match_cuisine, _fold(criteria.cuisines))))

    if criteria.price_range is not None:
        predicates.append(("price_range", partial(_match_price_range, criteria.price_range)))

    if criteria.price_tiers is not None:
        predicates.append(("price_tiers", partial(_match_price_tiers, criteria.price_tiers)))

    if criteria.min_rating is not None:
        predicates.append(("min_rating", partial(_match_min_rating, criteria.min_rating)))

    if criteria.max_distance_km is not None:
        if origin is None:
            logger.debug("max_distance_km=%s ignored: no origin supplied", criteria.max_distance_km)
        else:
            validate_coordinate(origin)
            predicates.append(
                ("max_distance_km", partial(_match_distance, origin, criteria.max_distance_km))
            )

    if criteria.feature_tags is not None:
        predicates.append(
            ("feature_tags", partial(_match_any_tag, _fold(criteria.feature_tags), "feature_tags"))
        )

    if criteria.dietary_tags is not None:
        predicates.append(
            ("dietary_tags", partial(_match_any_tag, _fold(criteria.dietary_tags), "dietary_tags"))
        )

    if criteria.open_now:
        if now is None:
            logger.debug("open_now ignored: no reference time supplied")
        else:
            predicates.append(("open_now", partial(_match_open, now)))

    if criteria.query is not None and criteria.query.strip():
        predicates.append(("query", partial(_match_query, criteria.query.strip().casefold())))

    if criteria.categories is not None:
        predicates.append(("categories", partial(_match_category, criteria.categories)))

    return predicates


def apply(
    candidates: Sequence[PointOfInterest],
    criteria: FilterCriteria,
    origin: Coordinate | None = None,
    now: datetime | None = None,
) -> list[PointOfInterest]:
    """Keep the candidates that satisfy every active criterion, in input order.

    ``origin`` anchors ``max_distance_km`` and ``now`` anchors ``open_now``;
    when either is missing its criterion is skipped rather than excluding
    candidates.
    """
    predicates = build_predicates(criteria, origin=origin, now=now)
    if not predicates:
        return list(candidates)

    survivors = [poi for poi in candidates if all(check(poi) for _, check in predicates)]
    logger.debug(
        "Filtered %d -> %d candidates using %s",
        len(candidates),
        len(survivors),
        [name for name, _ in predicates],
    )
    return survivors
