from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_BUNDLED_CSV = Path(__file__).resolve().parent.parent / "data" / "pois.csv"


@dataclass(frozen=True)
class CatalogConfig:
    data_path: Path = field(
        default_factory=lambda: Path(os.getenv("WAYPOINT_POI_DATA", str(_BUNDLED_CSV)))
    )
    tag_separator: str = "|"


DEFAULT_CATALOG_CONFIG = CatalogConfig()
