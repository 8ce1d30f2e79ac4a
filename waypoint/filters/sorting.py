from __future__ import annotations

from collections.abc import Sequence

from ..geo import Coordinate, distance_km
from ..models import PointOfInterest
from .models import SortOption


def sort_pois(
    pois: Sequence[PointOfInterest],
    sort_by: SortOption = SortOption.relevance,
    origin: Coordinate | None = None,
) -> list[PointOfInterest]:
    """Order POIs for discovery listings.

    Every option falls back to ``id`` so equal keys sort the same way each
    time. ``distance`` without an origin keeps the input order.
    """
    if sort_by == SortOption.distance:
        if origin is None:
            return list(pois)
        return sorted(pois, key=lambda p: (distance_km(origin, p.coordinate), p.id))
    if sort_by == SortOption.rating:
        return sorted(pois, key=lambda p: (-p.rating, p.id))
    if sort_by == SortOption.reviews:
        return sorted(pois, key=lambda p: (-p.review_count, p.id))
    if sort_by == SortOption.price_low:
        return sorted(pois, key=lambda p: (p.price_tier, p.id))
    if sort_by == SortOption.price_high:
        return sorted(pois, key=lambda p: (-p.price_tier, p.id))
    return sorted(pois, key=lambda p: (-(p.rating * p.review_count), p.id))
