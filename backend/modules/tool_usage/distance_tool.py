"""
modules/tool_usage/distance_tool.py
-------------------------------------
Great-circle distance between two coordinates using the Haversine formula.
No external HTTP calls are made.

Used as a filter predicate by the catalog (proximity filter) and the hotel
selector (distance from the city centre).
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional

# ---------------------------------------------------------------------------
# Pure maths
# ---------------------------------------------------------------------------

_EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lon: float


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points (Haversine formula) in km."""
    r = _EARTH_RADIUS_KM
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lam = math.radians(lon2 - lon1)
    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lam / 2) ** 2
    )
    return 2 * r * math.asin(math.sqrt(a))


def distance_km(a: Coordinates, b: Coordinates) -> float:
    """Distance in km between two Coordinates."""
    if a == b:
        return 0.0
    return haversine_km(a.lat, a.lon, b.lat, b.lon)


# ---------------------------------------------------------------------------
# City centres
# ---------------------------------------------------------------------------

# Destination → reference point used for hotel proximity.
_CITY_CENTERS: dict[str, Coordinates] = {
    "italy":          Coordinates(41.9028, 12.4964),    # Rome
    "france":         Coordinates(48.8566, 2.3522),     # Paris
    "japan":          Coordinates(35.6762, 139.6503),   # Tokyo
    "spain":          Coordinates(40.4168, -3.7038),    # Madrid
    "germany":        Coordinates(52.5200, 13.4050),    # Berlin
    "united kingdom": Coordinates(51.5074, -0.1278),    # London
    "greece":         Coordinates(37.9755, 23.7348),    # Athens
    "portugal":       Coordinates(38.7223, -9.1393),    # Lisbon
    "netherlands":    Coordinates(52.3676, 4.9041),     # Amsterdam
    "turkey":         Coordinates(41.0082, 28.9784),    # Istanbul
    "thailand":       Coordinates(13.7563, 100.5018),   # Bangkok
}


def city_center(destination: str) -> Optional[Coordinates]:
    """Reference coordinates for a destination, or None when unknown."""
    return _CITY_CENTERS.get(destination.strip().lower())
