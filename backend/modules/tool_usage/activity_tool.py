"""
modules/tool_usage/activity_tool.py
------------------------------------
Provides activity candidates (sights, restaurants, classes, shows) for a destination.

Stub mode  (USE_STUB_CATALOG=true)  — bundled records from catalog_data.ACTIVITIES.
Live mode  (USE_STUB_CATALOG=false) — GET {CATALOG_BASE_URL}/activities?destination=...

Activity types : sightseeing | restaurant | activity | transport | entertainment
                 | shopping | wellness
Time slots     : morning | afternoon | evening | flexible
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

ACTIVITY_TYPES: tuple[str, ...] = (
    "sightseeing", "restaurant", "activity", "transport",
    "entertainment", "shopping", "wellness",
)
TIME_SLOTS: tuple[str, ...] = ("morning", "afternoon", "evening", "flexible")


@dataclass
class ActivityRecord:
    id: str = ""
    name: str = ""
    type: str = "activity"
    cost: int = 0                  # whole currency units per traveller group
    time_slot: str = "flexible"
    tags: list[str] = field(default_factory=list)
    rating: float = 0.0
    duration_minutes: int = 60
    lat: Optional[float] = None
    lon: Optional[float] = None

    @property
    def coordinates(self) -> Optional[Coordinates]:
        if self.lat is None or self.lon is None:
            return None
        return Coordinates(self.lat, self.lon)

    def fits_slot(self, slot: str) -> bool:
        return self.time_slot == slot or self.time_slot == "flexible"


class ActivityTool:
    """Read-only activity lookups."""

    def __init__(self, use_stub: bool | None = None) -> None:
        self.use_stub = config.USE_STUB_CATALOG if use_stub is None else use_stub

    def fetch(self, destination: str) -> list[ActivityRecord]:
        if not destination or not destination.strip():
            return []

        if self.use_stub:
            rows = catalog_data.lookup(catalog_data.ACTIVITIES, destination)
        else:
            try:
                rows = fetch_catalog("activities", destination)
            except CatalogUnavailableError as exc:
                logger.warning("Remote activity catalog unavailable, using bundled data: %s", exc)
                rows = catalog_data.lookup(catalog_data.ACTIVITIES, destination)

        records = [self._parse_activity(row) for row in rows]
        logger.debug("ActivityTool: %d activit(ies) for '%s'", len(records), destination)
        return records

    @staticmethod
    def _parse_activity(row: dict) -> ActivityRecord:
        # Unknown types/slots are normalised rather than rejected
        a_type = str(row.get("type", "activity")).lower()
        slot = str(row.get("time_slot", "flexible")).lower()
        return ActivityRecord(
            id=str(row.get("id", "")),
            name=row.get("name", ""),
            type=a_type if a_type in ACTIVITY_TYPES else "activity",
            cost=int(row.get("cost", 0)),
            time_slot=slot if slot in TIME_SLOTS else "flexible",
            tags=[str(t) for t in row.get("tags", [])],
            rating=float(row.get("rating", 0.0)),
            duration_minutes=int(row.get("duration_minutes", 60)),
            lat=row.get("lat"),
            lon=row.get("lon"),
        )
