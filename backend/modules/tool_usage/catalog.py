"""
modules/tool_usage/catalog.py
------------------------------
Catalog accessors used by the planning module.

    activities_for(destination)                → list[ActivityRecord]
    hotels_for(destination)                    → list[HotelRecord]
    filter_by_tags(activities, tags)           → subset
    filter_by_proximity(candidates, origin, km) → subset

Pure reads. Unknown destinations yield [] and callers treat that as
"no candidates", never as a fault.
"""

from __future__ import annotations

from typing import Iterable, Optional, TypeVar

from modules.tool_usage import catalog_data
from modules.tool_usage.activity_tool import ActivityRecord, ActivityTool
from modules.tool_usage.distance_tool import Coordinates, distance_km
from modules.tool_usage.hotel_tool import HotelRecord, HotelTool

T = TypeVar("T", HotelRecord, ActivityRecord)


def activities_for(destination: str, tool: Optional[ActivityTool] = None) -> list[ActivityRecord]:
    return (tool or ActivityTool()).fetch(destination)


def hotels_for(destination: str, tool: Optional[HotelTool] = None) -> list[HotelRecord]:
    return (tool or HotelTool()).fetch(destination)


def tag_matches(activity: ActivityRecord, tag: str) -> bool:
    """Substring, case-insensitive match against the activity's tags or its type."""
    needle = tag.strip().lower()
    if not needle:
        return False
    if needle in activity.type.lower():
        return True
    return any(needle in t.lower() for t in activity.tags)


def preference_score(activity: ActivityRecord, tags: Iterable[str]) -> int:
    """Number of requested tags the activity matches."""
    return sum(1 for tag in tags if tag_matches(activity, tag))


def filter_by_tags(activities: list[ActivityRecord], tags: Iterable[str]) -> list[ActivityRecord]:
    """Keep activities matching any requested tag. No tags keeps everything."""
    wanted = [t for t in tags if t and t.strip()]
    if not wanted:
        return list(activities)
    return [a for a in activities if any(tag_matches(a, t) for t in wanted)]


def filter_by_proximity(candidates: list[T], origin: Coordinates, max_km: float) -> list[T]:
    """Keep candidates within max_km of origin; candidates without coordinates are kept."""
    kept: list[T] = []
    for c in candidates:
        coords = c.coordinates
        if coords is None or distance_km(origin, coords) <= max_km:
            kept.append(c)
    return kept


def bundled_destinations() -> list[str]:
    """Destinations the bundled catalog has hotels for."""
    return [name for name, rows in catalog_data.HOTELS.items() if rows]
