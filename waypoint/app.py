from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from .catalog.store import get_pois
from .errors import IndexOutOfRange, InvalidCoordinate, InvalidTripState
from .filters import apply, sort_pois
from .filters.models import SearchRequest, SearchResponse
from .models import Category, PointOfInterest
from .recommendations.engine import candidate_pool, recommend
from .recommendations.models import RecommendationRequest, RecommendationResponse
from .trips import InMemoryTripStore, Trip, TripMetrics, TripStore, planner
from .trips.models import (
    AddStopRequest,
    RemoveStopRequest,
    ReorderRequest,
    SaveTripRequest,
    SaveTripResponse,
    TripDetailsRequest,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Waypoint POI & Trip API", version="1.0.0")

_trip_store = InMemoryTripStore()


def get_catalog() -> list[PointOfInterest]:
    return get_pois()


def get_trip_store() -> TripStore:
    return _trip_store


def _find_poi(pois: list[PointOfInterest], poi_id: str) -> PointOfInterest:
    for poi in pois:
        if poi.id == poi_id:
            return poi
    raise HTTPException(status_code=404, detail=f"Unknown point of interest {poi_id}")


@app.exception_handler(InvalidCoordinate)
def _invalid_coordinate(request: Request, exc: InvalidCoordinate) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(IndexOutOfRange)
def _index_out_of_range(request: Request, exc: IndexOutOfRange) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(InvalidTripState)
def _invalid_trip_state(request: Request, exc: InvalidTripState) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# ── Discovery endpoints ──────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata(pois: list[PointOfInterest] = Depends(get_catalog)) -> dict:
    return {
        "categories": [c.value for c in Category],
        "cuisines": sorted({p.cuisine for p in pois if p.cuisine}),
        "feature_tags": sorted({t for p in pois for t in p.feature_tags}),
        "dietary_tags": sorted({t for p in pois for t in p.dietary_tags}),
    }


@app.get("/pois/{poi_id}", response_model=PointOfInterest)
def poi_detail(poi_id: str, pois: list[PointOfInterest] = Depends(get_catalog)) -> PointOfInterest:
    return _find_poi(pois, poi_id)


@app.post("/pois/search", response_model=SearchResponse)
def search(
    body: SearchRequest,
    pois: list[PointOfInterest] = Depends(get_catalog),
) -> SearchResponse:
    matched = apply(pois, body.criteria, origin=body.origin, now=body.now)
    ordered = sort_pois(matched, body.sort_by, origin=body.origin)
    if body.limit is not None:
        ordered = ordered[: body.limit]
    return SearchResponse(results=ordered, total=len(matched))


@app.post("/recommendations", response_model=RecommendationResponse)
def recommendations(
    body: RecommendationRequest,
    pois: list[PointOfInterest] = Depends(get_catalog),
) -> RecommendationResponse:
    candidates = candidate_pool(
        pois,
        interactions=body.interactions,
        exclude_ids=set(body.exclude_ids),
        criteria=body.criteria,
        origin=body.origin,
        now=body.now,
    )
    items = recommend(candidates, profile=body.profile, limit=body.limit)
    return RecommendationResponse(recommendations=items, total_candidates=len(candidates))


# ── Trip endpoints ───────────────────────────────────────────────────────


@app.post("/trips/stops", response_model=Trip)
def add_stop(body: AddStopRequest, pois: list[PointOfInterest] = Depends(get_catalog)) -> Trip:
    poi = _find_poi(pois, body.poi_id)
    stop = planner.stop_from_poi(poi, dwell_minutes=body.dwell_minutes, notes=body.notes)
    return planner.add_stop(body.trip, stop)


@app.post("/trips/stops/remove", response_model=Trip)
def remove_stop(body: RemoveStopRequest) -> Trip:
    return planner.remove_stop(body.trip, body.poi_id)


@app.post("/trips/stops/reorder", response_model=Trip)
def reorder_stops(body: ReorderRequest) -> Trip:
    return planner.reorder(body.trip, body.from_index, body.to_index)


@app.post("/trips/details", response_model=Trip)
def update_details(body: TripDetailsRequest) -> Trip:
    return planner.update_details(body.trip, name=body.name, description=body.description)


@app.post("/trips/clear", response_model=Trip)
def clear_trip(trip: Trip) -> Trip:
    return planner.clear(trip)


@app.post("/trips/metrics", response_model=TripMetrics)
def trip_metrics(trip: Trip) -> TripMetrics:
    return planner.metrics(trip)


@app.post("/trips", response_model=SaveTripResponse)
def save_trip(
    body: SaveTripRequest,
    store: TripStore = Depends(get_trip_store),
) -> SaveTripResponse:
    planner.ensure_persistable(body.trip)
    trip_id = store.save(body.trip, body.user_id)
    logger.info("Saved trip %s for %s (%d stops)", trip_id, body.user_id, len(body.trip.stops))
    return SaveTripResponse(trip_id=trip_id, trip=body.trip.model_copy(update={"id": trip_id}))


@app.get("/trips/{user_id}", response_model=list[Trip])
def list_trips(user_id: str, store: TripStore = Depends(get_trip_store)) -> list[Trip]:
    return store.list(user_id)
