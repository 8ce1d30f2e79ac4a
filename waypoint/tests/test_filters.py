from __future__ import annotations

import itertools
import logging
from datetime import datetime

import pytest
from pydantic import ValidationError

from waypoint.errors import InvalidCoordinate
from waypoint.filters import FilterCriteria, SortOption, apply, sort_pois
from waypoint.geo import Coordinate
from waypoint.models import Category, PointOfInterest

TIMES_SQUARE = Coordinate(latitude=40.7580, longitude=-73.9855)
# 2024-01-01 is a Monday
MONDAY_NOON = datetime(2024, 1, 1, 12, 0)


def _poi(id: str, **overrides) -> PointOfInterest:
    data = {
        "id": id,
        "name": id.title(),
        "category": "restaurant",
        "coordinate": {"latitude": 40.7589, "longitude": -73.9851},
        "price_tier": 2,
        "rating": 4.0,
        "review_count": 10,
    }
    data.update(overrides)
    return PointOfInterest(**data)


POOL = [
    _poi(
        "sakura",
        cuisine="Japanese",
        price_tier=3,
        rating=4.6,
        review_count=342,
        feature_tags={"Outdoor Seating", "Takeout Available"},
        dietary_tags={"Vegetarian"},
        opening_hours={"monday": "11:00-22:00"},
        description="Fresh sushi and traditional dishes",
    ),
    _poi(
        "olivias",
        cuisine="Mediterranean",
        coordinate={"latitude": 40.7505, "longitude": -73.9934},
        price_tier=2,
        rating=4.4,
        review_count=197,
        feature_tags={"Wine Bar"},
        dietary_tags={"Vegetarian", "Gluten-Free"},
        opening_hours={"monday": "Closed", "tuesday": "17:00-22:00"},
    ),
    _poi(
        "urban",
        cuisine="American",
        coordinate={"latitude": 40.7614, "longitude": -73.9776},
        price_tier=3,
        rating=4.8,
        review_count=423,
        feature_tags={"Brunch", "Live Music"},
        opening_hours={"monday": "11:30-21:30"},
    ),
    _poi("nocuisine", price_tier=1, rating=3.0, review_count=5),
    _poi(
        "metro",
        category="fuel_station",
        coordinate={"latitude": 40.7580, "longitude": -73.9855},
        price_tier=1,
        rating=0.0,
        review_count=0,
        feature_tags={"Car Wash", "ATM"},
        opening_hours={"monday": "00:00-24:00"},
    ),
    _poi(
        "faraway",
        category="fuel_station",
        coordinate={"latitude": 41.5, "longitude": -74.5},
        price_tier=1,
        rating=3.5,
        review_count=12,
    ),
]


def _ids(pois):
    return [p.id for p in pois]


SINGLE_CRITERIA = [
    FilterCriteria(cuisines={"Japanese", "American"}),
    FilterCriteria(price_range=(2, 3)),
    FilterCriteria(price_tiers={1, 3}),
    FilterCriteria(min_rating=4.5),
    FilterCriteria(max_distance_km=2.0),
    FilterCriteria(feature_tags={"Wine Bar", "ATM", "Brunch"}),
    FilterCriteria(dietary_tags={"Vegetarian"}),
    FilterCriteria(open_now=True),
    FilterCriteria(query="sushi"),
    FilterCriteria(categories={Category.restaurant}),
]


def _merge(a: FilterCriteria, b: FilterCriteria) -> FilterCriteria:
    return FilterCriteria(**{**a.model_dump(exclude_none=True), **b.model_dump(exclude_none=True)})


def test_no_criteria_returns_everything_in_order():
    assert _ids(apply(POOL, FilterCriteria())) == _ids(POOL)


@pytest.mark.parametrize(
    "a, b",
    list(itertools.combinations(SINGLE_CRITERIA, 2)),
)
def test_filters_commute(a, b):
    ab = apply(apply(POOL, a, TIMES_SQUARE, MONDAY_NOON), b, TIMES_SQUARE, MONDAY_NOON)
    ba = apply(apply(POOL, b, TIMES_SQUARE, MONDAY_NOON), a, TIMES_SQUARE, MONDAY_NOON)
    together = apply(POOL, _merge(a, b), TIMES_SQUARE, MONDAY_NOON)
    assert _ids(ab) == _ids(ba) == _ids(together)


class TestCuisine:
    def test_restaurants_must_match_fuel_stations_pass(self):
        result = apply(POOL, FilterCriteria(cuisines={"japanese"}))
        assert _ids(result) == ["sakura", "metro", "faraway"]

    def test_restaurant_without_cuisine_excluded(self):
        result = apply(POOL, FilterCriteria(cuisines={"American"}))
        assert "nocuisine" not in _ids(result)

    def test_empty_set_is_zero_match_for_restaurants(self):
        result = apply(POOL, FilterCriteria(cuisines=set()))
        assert all(p.category == Category.fuel_station for p in result)

    def test_unset_is_no_constraint(self):
        assert len(apply(POOL, FilterCriteria(cuisines=None))) == len(POOL)


class TestPrice:
    def test_inclusive_range(self):
        result = apply(POOL, FilterCriteria(price_range=(2, 2)))
        assert _ids(result) == ["olivias"]

    @pytest.mark.parametrize("bounds", [(3, 2), (0, 2), (1, 5)])
    def test_invalid_range_rejected(self, bounds):
        with pytest.raises(ValidationError):
            FilterCriteria(price_range=bounds)

    def test_tier_set(self):
        result = apply(POOL, FilterCriteria(price_tiers={3}))
        assert _ids(result) == ["sakura", "urban"]


def test_min_rating():
    assert _ids(apply(POOL, FilterCriteria(min_rating=4.5))) == ["sakura", "urban"]


class TestDistance:
    def test_radius_around_origin(self):
        result = apply(POOL, FilterCriteria(max_distance_km=1.0), origin=TIMES_SQUARE)
        assert "faraway" not in _ids(result)
        assert "sakura" in _ids(result)
        assert "metro" in _ids(result)

    def test_without_origin_is_noop(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="waypoint.filters.pipeline"):
            result = apply(POOL, FilterCriteria(max_distance_km=0.1))
        assert _ids(result) == _ids(POOL)
        assert "no origin" in caplog.text

    def test_invalid_origin_rejected(self):
        with pytest.raises(InvalidCoordinate):
            apply(POOL, FilterCriteria(max_distance_km=5), origin=Coordinate(latitude=95, longitude=0))


class TestTags:
    def test_feature_any_of(self):
        result = apply(POOL, FilterCriteria(feature_tags={"wine bar", "atm"}))
        assert _ids(result) == ["olivias", "metro"]

    def test_dietary_any_of(self):
        result = apply(POOL, FilterCriteria(dietary_tags={"Gluten-Free", "Vegan"}))
        assert _ids(result) == ["olivias"]

    def test_empty_tag_set_excludes_everything(self):
        assert apply(POOL, FilterCriteria(feature_tags=set())) == []


class TestOpenNow:
    def test_uses_injected_time(self):
        result = apply(POOL, FilterCriteria(open_now=True), now=MONDAY_NOON)
        assert _ids(result) == ["sakura", "urban", "metro"]

    def test_late_evening(self):
        result = apply(POOL, FilterCriteria(open_now=True), now=datetime(2024, 1, 1, 21, 45))
        assert _ids(result) == ["sakura", "metro"]

    def test_false_is_no_constraint(self):
        assert len(apply(POOL, FilterCriteria(open_now=False), now=MONDAY_NOON)) == len(POOL)

    def test_without_clock_is_noop(self):
        assert len(apply(POOL, FilterCriteria(open_now=True))) == len(POOL)


def test_query_matches_name_cuisine_or_description():
    assert _ids(apply(POOL, FilterCriteria(query="SUSHI"))) == ["sakura"]
    assert _ids(apply(POOL, FilterCriteria(query="medit"))) == ["olivias"]
    assert _ids(apply(POOL, FilterCriteria(query="urb"))) == ["urban"]


def test_categories():
    result = apply(POOL, FilterCriteria(categories={Category.fuel_station}))
    assert _ids(result) == ["metro", "faraway"]


def test_empty_candidates():
    assert apply([], FilterCriteria(min_rating=1.0, cuisines={"Thai"})) == []


def test_active_fields():
    criteria = FilterCriteria(min_rating=4.0, cuisines=set())
    assert criteria.active_fields() == ["cuisines", "min_rating"]


class TestSorting:
    def test_relevance(self):
        result = sort_pois(POOL[:3], SortOption.relevance)
        assert _ids(result) == ["urban", "sakura", "olivias"]

    def test_price_low_ties_break_on_id(self):
        result = sort_pois(POOL, SortOption.price_low)
        assert _ids(result)[:3] == ["faraway", "metro", "nocuisine"]

    def test_reviews(self):
        assert _ids(sort_pois(POOL, SortOption.reviews))[0] == "urban"

    def test_distance(self):
        result = sort_pois(POOL, SortOption.distance, origin=TIMES_SQUARE)
        assert _ids(result)[0] == "metro"
        assert _ids(result)[-1] == "faraway"

    def test_distance_without_origin_keeps_order(self):
        assert _ids(sort_pois(POOL, SortOption.distance)) == _ids(POOL)
