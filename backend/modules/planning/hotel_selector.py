"""
modules/planning/hotel_selector.py
-----------------------------------
Chooses the single hotel used for the whole trip.

Strict pass:
    price  <= per_night * (1 + HOTEL_PRICE_FLEXIBILITY)     (15 % flexibility)
    rating >= min_rating                                     (default 3.0)
    within max_radius_km of the destination's city centre    (default 5 km,
                                                              only if the centre is known)
    sort by (rating desc, review_score desc, review_count desc)

Fallback ladder, applied in order until a candidate is found:
    1. radius_widened           : max_radius_km + HOTEL_RADIUS_STEP_KM
                                  (skipped when the city centre is unknown)
    2. min_rating_lowered       : min_rating = HOTEL_RELAXED_MIN_RATING (2.5)
    3. activity_budget_shifted  : min_rating = HOTEL_FLOOR_MIN_RATING (2.0) and
                                  HOTEL_ACTIVITY_TRANSFER_PCT of the activity
                                  budget moves into accommodation; per_night is
                                  recomputed from the new accommodation share

Every applied step is reported in HotelSelection.relaxations, so a hotel above
the original price cap is never returned silently.
Exhausting the ladder raises NoHotelAvailableError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import config
from modules.errors import NoHotelAvailableError
from modules.planning.budget_planner import BudgetPlanner
from modules.tool_usage.catalog import filter_by_proximity, hotels_for
from modules.tool_usage.distance_tool import city_center
from modules.tool_usage.hotel_tool import HotelRecord, HotelTool
from schemas.itinerary import BudgetAllocation

logger = logging.getLogger(__name__)

RADIUS_WIDENED = "radius_widened"
MIN_RATING_LOWERED = "min_rating_lowered"
ACTIVITY_BUDGET_SHIFTED = "activity_budget_shifted"


@dataclass
class HotelSelection:
    hotel: HotelRecord
    allocation: BudgetAllocation          # effective allocation (after any shift)
    price_cap: float                      # cap the winning pass used
    min_rating: float
    max_radius_km: float
    relaxations: list[str] = field(default_factory=list)

    @property
    def per_night(self) -> int:
        return self.allocation.per_night


def _rank_key(h: HotelRecord) -> tuple:
    return (-h.rating, -h.review_score, -h.review_count, h.id)


class HotelSelector:
    def __init__(self, hotel_tool: Optional[HotelTool] = None) -> None:
        self.hotel_tool = hotel_tool

    def select(
        self,
        destination: str,
        allocation: BudgetAllocation,
        min_rating: float | None = None,
        max_radius_km: float | None = None,
    ) -> HotelSelection:
        """Pick the best-ranked hotel for allocation.per_night, relaxing constraints as needed."""
        min_rating = config.HOTEL_MIN_RATING if min_rating is None else min_rating
        max_radius_km = config.HOTEL_MAX_RADIUS_KM if max_radius_km is None else max_radius_km

        candidates = hotels_for(destination, self.hotel_tool)
        if not candidates:
            logger.warning("No hotels in catalog for '%s'", destination)
            raise NoHotelAvailableError(destination, allocation.per_night)

        relaxations: list[str] = []
        wide = max_radius_km + config.HOTEL_RADIUS_STEP_KM
        shifted = BudgetPlanner.shift_to_accommodation(allocation, config.HOTEL_ACTIVITY_TRANSFER_PCT)

        # (label, radius, min rating, allocation): strict pass first, then the ladder
        passes = [
            (None,                    max_radius_km, min_rating, allocation),
            (RADIUS_WIDENED,          wide, min_rating, allocation),
            (MIN_RATING_LOWERED,      wide, min(min_rating, config.HOTEL_RELAXED_MIN_RATING), allocation),
            (ACTIVITY_BUDGET_SHIFTED, wide, min(min_rating, config.HOTEL_FLOOR_MIN_RATING), shifted),
        ]
        if city_center(destination) is None:
            # no radius filter applies, so there is no radius to widen
            passes = [p for p in passes if p[0] != RADIUS_WIDENED]

        for label, radius, rating, current in passes:
            if label is not None:
                relaxations.append(label)
                logger.info("No hotel in '%s' yet, relaxing: %s", destination, label)
            cap = current.per_night * (1.0 + config.HOTEL_PRICE_FLEXIBILITY)
            found = self._filter(destination, candidates, cap, rating, radius)
            if found:
                best = sorted(found, key=_rank_key)[0]
                logger.info(
                    "Selected hotel %s (%s) at %d/night for '%s' (cap %.2f, relaxations=%s)",
                    best.name, best.id, best.price_per_night, destination, cap, relaxations or "none",
                )
                return HotelSelection(
                    hotel=best,
                    allocation=current,
                    price_cap=cap,
                    min_rating=rating,
                    max_radius_km=radius,
                    relaxations=list(relaxations),
                )

        raise NoHotelAvailableError(destination, allocation.per_night)

    @staticmethod
    def _filter(
        destination: str,
        candidates: list[HotelRecord],
        price_cap: float,
        min_rating: float,
        max_radius_km: float,
    ) -> list[HotelRecord]:
        kept = [h for h in candidates if h.price_per_night <= price_cap and h.rating >= min_rating]
        center = city_center(destination)
        if center is not None:
            kept = filter_by_proximity(kept, center, max_radius_km)
        return kept


def select_hotel(
    destination: str,
    allocation: BudgetAllocation,
    min_rating: float | None = None,
    max_radius_km: float | None = None,
    hotel_tool: Optional[HotelTool] = None,
) -> HotelSelection:
    return HotelSelector(hotel_tool).select(destination, allocation, min_rating, max_radius_km)
