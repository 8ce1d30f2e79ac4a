from __future__ import annotations

import json
import logging
from typing import Any

import pandas as pd

from ..models import PointOfInterest
from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig

logger = logging.getLogger(__name__)

CATALOG_COLUMNS: list[str] = [
    "id",
    "name",
    "category",
    "latitude",
    "longitude",
    "cuisine",
    "price_tier",
    "rating",
    "review_count",
    "feature_tags",
    "dietary_tags",
    "opening_hours",
    "address",
    "description",
    "brand",
]

_pois: list[PointOfInterest] | None = None


def _optional(value: Any) -> Any | None:
    return value if pd.notna(value) and value != "" else None


def _split_tags(value: Any, separator: str) -> frozenset[str]:
    if not _optional(value):
        return frozenset()
    return frozenset(t.strip() for t in str(value).split(separator) if t.strip())


def row_to_poi(row: pd.Series, config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> PointOfInterest:
    """Validate one catalogue row. Raises ``pydantic.ValidationError`` on bad data."""
    hours = _optional(row.get("opening_hours"))
    return PointOfInterest(
        id=str(row["id"]),
        name=row["name"],
        category=row["category"],
        coordinate={"latitude": float(row["latitude"]), "longitude": float(row["longitude"])},
        cuisine=_optional(row.get("cuisine")),
        price_tier=int(row["price_tier"]),
        rating=float(row["rating"]) if _optional(row.get("rating")) is not None else 0.0,
        review_count=int(row["review_count"]) if _optional(row.get("review_count")) is not None else 0,
        feature_tags=_split_tags(row.get("feature_tags"), config.tag_separator),
        dietary_tags=_split_tags(row.get("dietary_tags"), config.tag_separator),
        opening_hours=json.loads(hours) if hours else None,
        address=_optional(row.get("address")),
        description=_optional(row.get("description")),
        brand=_optional(row.get("brand")),
    )


def load_catalog(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> list[PointOfInterest]:
    df = pd.read_csv(config.data_path, dtype={"id": str}, keep_default_na=True)
    missing = [c for c in ("id", "name", "category", "latitude", "longitude", "price_tier") if c not in df.columns]
    if missing:
        raise ValueError(f"Catalogue {config.data_path} is missing columns: {missing}")

    pois = [row_to_poi(row, config) for _, row in df.iterrows()]
    logger.info("Loaded %d points of interest from %s", len(pois), config.data_path)
    return pois


def get_pois() -> list[PointOfInterest]:
    """Return the in-memory catalogue, loading it on first call."""
    global _pois
    if _pois is None:
        _pois = load_catalog()
    return _pois


