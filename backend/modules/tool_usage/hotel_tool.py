"""
modules/tool_usage/hotel_tool.py
---------------------------------
Provides hotel candidates for a destination.

Stub mode  (USE_STUB_CATALOG=true)  — bundled records from catalog_data.HOTELS.
Live mode  (USE_STUB_CATALOG=false) — GET {CATALOG_BASE_URL}/hotels?destination=...
                                      (retried with backoff; falls back to the
                                      bundled records if the catalog stays down)

Destination match is case-insensitive and exact; an unknown destination
returns [] rather than raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import config
from modules.errors import CatalogUnavailableError
from modules.tool_usage import catalog_data
from modules.tool_usage.catalog_client import fetch_catalog
from modules.tool_usage.distance_tool import Coordinates

logger = logging.getLogger(__name__)


@dataclass
class HotelRecord:
    """One lodging candidate. Prices are whole currency units per night."""
    id: str = ""
    name: str = ""
    location: str = ""
    price_per_night: int = 0
    rating: float = 0.0            # 0–5
    review_score: float = 0.0      # 0–10
    review_count: int = 0
    amenities: list[str] = field(default_factory=list)
    lat: Optional[float] = None
    lon: Optional[float] = None

    @property
    def coordinates(self) -> Optional[Coordinates]:
        if self.lat is None or self.lon is None:
            return None
        return Coordinates(self.lat, self.lon)


class HotelTool:
    """Read-only hotel lookups. fetch() never mutates the catalog."""

    def __init__(self, use_stub: bool | None = None) -> None:
        self.use_stub = config.USE_STUB_CATALOG if use_stub is None else use_stub

    def fetch(self, destination: str) -> list[HotelRecord]:
        if not destination or not destination.strip():
            return []

        if self.use_stub:
            rows = catalog_data.lookup(catalog_data.HOTELS, destination)
        else:
            try:
                rows = fetch_catalog("hotels", destination)
            except CatalogUnavailableError as exc:
                logger.warning("Remote hotel catalog unavailable, using bundled data: %s", exc)
                rows = catalog_data.lookup(catalog_data.HOTELS, destination)

        records = [self._parse_hotel(row) for row in rows]
        logger.debug("HotelTool: %d hotel(s) for '%s'", len(records), destination)
        return records

    @staticmethod
    def _parse_hotel(row: dict) -> HotelRecord:
        """Map one catalog row onto a HotelRecord; missing coordinates stay None."""
        return HotelRecord(
            id=str(row.get("id", "")),
            name=row.get("name", ""),
            location=row.get("location", ""),
            price_per_night=int(row.get("price_per_night", 0)),
            rating=float(row.get("rating", 0.0)),
            review_score=float(row.get("review_score", 0.0)),
            review_count=int(row.get("review_count", 0)),
            amenities=list(row.get("amenities", [])),
            lat=row.get("lat"),
            lon=row.get("lon"),
        )
