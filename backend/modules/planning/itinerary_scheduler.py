"""
modules/planning/itinerary_scheduler.py
-----------------------------------------
Builds the day-by-day itinerary around one locked hotel.

Day roles (by day_index):
  1              → arrival    : hotel check-in (afternoon, cost 0) + evening dining
  duration_days  → departure  : morning activity + hotel checkout (afternoon, cost 0)
  otherwise      → middle     : morning sightseeing, afternoon activity, evening dining

Single-day trip: arrival rules own the morning (check-in), departure rules own
the rest (afternoon activity, checkout last); the arrival dinner keeps its
evening slot before checkout.

Budget counters:
  remaining_activity_budget and remaining_food_budget start from the allocation,
  less any lodging cost above the accommodation share (food first), and only
  ever decrease. A candidate is assigned only if its cost fits the
  counter for its category (restaurants draw on food, everything else on
  activities). A slot with no affordable unused candidate is omitted.

Ranking for every slot:
  (preference matches desc, rating desc, cost asc, id)

No activity id is used twice across the itinerary.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

import config
from modules.tool_usage.activity_tool import ActivityRecord, ActivityTool
from modules.tool_usage.catalog import activities_for, filter_by_proximity, preference_score
from modules.tool_usage.distance_tool import city_center
from modules.tool_usage.hotel_tool import HotelRecord
from schemas.itinerary import BudgetAllocation, Itinerary, ItineraryDay, ScheduledItem

logger = logging.getLogger(__name__)

ROLE_ARRIVAL = "arrival"
ROLE_MIDDLE = "middle"
ROLE_DEPARTURE = "departure"

_FOOD_TYPES = frozenset({"restaurant"})
_NOT_AN_OUTING = frozenset({"restaurant", "transport"})


# ── Helpers ───────────────────────────────────────────────────────────────────

def day_role(day_index: int, duration_days: int) -> str:
    if day_index == 1:
        return ROLE_ARRIVAL
    if day_index == duration_days:
        return ROLE_DEPARTURE
    return ROLE_MIDDLE


def _hotel_item(hotel: HotelRecord, slot: str, check_in: bool) -> ScheduledItem:
    return ScheduledItem(
        name=f"{'Check in at' if check_in else 'Check out of'} {hotel.name}",
        time_slot=slot,
        activity_type="hotel",
        cost=0,
        activity_id=None,
        notes=hotel.location,
    )


def _to_item(activity: ActivityRecord, slot: str) -> ScheduledItem:
    return ScheduledItem(
        name=activity.name,
        time_slot=slot,
        activity_type=activity.type,
        cost=activity.cost,
        activity_id=activity.id,
        notes=", ".join(activity.tags),
    )


class _Budget:
    """
    Running activity / food counters for one generation.

    Hotel nights are charged at the hotel's real price. Whatever that costs
    beyond the accommodation share (and any unallocated remainder) is taken
    from food first, then activities.
    """

    def __init__(self, allocation: BudgetAllocation, lodging_cost: int) -> None:
        self.activities = allocation.activities
        self.food = allocation.food
        self.trimmed = 0
        overshoot = lodging_cost - allocation.accommodation - allocation.unallocated
        if overshoot > 0:
            from_food = min(overshoot, self.food)
            from_activities = min(overshoot - from_food, self.activities)
            self.food -= from_food
            self.activities -= from_activities
            self.trimmed = from_food + from_activities

    def fits(self, activity: ActivityRecord) -> bool:
        if activity.type in _FOOD_TYPES:
            return activity.cost <= self.food
        return activity.cost <= self.activities

    def spend(self, activity: ActivityRecord) -> None:
        if activity.type in _FOOD_TYPES:
            self.food -= activity.cost
        else:
            self.activities -= activity.cost


# ── Scheduler ─────────────────────────────────────────────────────────────────

class ItineraryScheduler:
    """
    Usage
    -----
        scheduler = ItineraryScheduler()
        itinerary = scheduler.build("Italy", 7, hotel, allocation, ["history", "food"])
    """

    def __init__(self, activity_tool: Optional[ActivityTool] = None) -> None:
        self.activity_tool = activity_tool

    def build(
        self,
        destination: str,
        duration_days: int,
        hotel: HotelRecord,
        allocation: BudgetAllocation,
        preferences: Iterable[str] = (),
        relaxations: Iterable[str] = (),
    ) -> Itinerary:
        if duration_days < 1:
            raise ValueError(f"duration_days must be >= 1, got {duration_days}")

        prefs = [p for p in preferences if p]
        pool = self._candidate_pool(destination, hotel)
        lodging_cost = hotel.price_per_night * duration_days
        budget = _Budget(allocation, lodging_cost)
        if budget.trimmed:
            logger.info(
                "Hotel costs %d over the accommodation share; activity/food budgets reduced to %d/%d",
                budget.trimmed, budget.activities, budget.food,
            )
        used: set[str] = set()

        def take(predicate: Callable[[ActivityRecord], bool], slot: str) -> Optional[ScheduledItem]:
            ranked = sorted(
                (a for a in pool if a.id not in used and predicate(a) and budget.fits(a)),
                key=lambda a: (-preference_score(a, prefs), -a.rating, a.cost, a.id),
            )
            if not ranked:
                return None
            chosen = ranked[0]
            used.add(chosen.id)
            budget.spend(chosen)
            return _to_item(chosen, slot)

        days: list[ItineraryDay] = []
        for day_index in range(1, duration_days + 1):
            if duration_days == 1:
                items = self._single_day(hotel, take)
                role = ROLE_ARRIVAL
            else:
                role = day_role(day_index, duration_days)
                if role == ROLE_ARRIVAL:
                    items = self._arrival_day(hotel, take)
                elif role == ROLE_DEPARTURE:
                    items = self._departure_day(hotel, take)
                else:
                    items = self._middle_day(take)
            days.append(ItineraryDay(day_index=day_index, role=role, items=items))

        item_cost = sum(d.day_cost for d in days)
        total_cost = lodging_cost + item_cost
        remaining = allocation.total_budget - total_cost

        itinerary = Itinerary(
            destination=destination,
            hotel=hotel,
            days=days,
            allocation=allocation,
            total_cost=total_cost,
            remaining_budget=remaining,
            relaxations=list(relaxations),
            generated_at=datetime.now(timezone.utc).isoformat(),
        )

        logger.info(
            "Scheduled %d day(s) in '%s': %d item(s), total_cost=%d remaining=%d",
            duration_days, destination, len(used), total_cost, remaining,
        )
        if itinerary.over_budget:
            logger.warning(
                "Itinerary for '%s' is over budget by %d (relaxations=%s)",
                destination, -remaining, itinerary.relaxations or "none",
            )
        return itinerary

    # ── Candidate pool ────────────────────────────────────────────────────────

    def _candidate_pool(self, destination: str, hotel: HotelRecord) -> list[ActivityRecord]:
        candidates = activities_for(destination, self.activity_tool)
        origin = hotel.coordinates or city_center(destination)
        if origin is not None:
            candidates = filter_by_proximity(candidates, origin, config.ACTIVITY_RADIUS_KM)
        logger.debug("%d activity candidate(s) near the hotel in '%s'", len(candidates), destination)
        return candidates

    # ── Day templates ─────────────────────────────────────────────────────────

    @staticmethod
    def _dinner(take) -> Optional[ScheduledItem]:
        return take(lambda a: a.type == "restaurant", "evening")

    @staticmethod
    def _departure_outing(take, slot: str) -> Optional[ScheduledItem]:
        # Prefer sightseeing; fall back to any other morning outing
        item = take(lambda a: a.type == "sightseeing" and a.fits_slot("morning"), slot)
        if item is None:
            item = take(lambda a: a.type not in _NOT_AN_OUTING and a.fits_slot("morning"), slot)
        return item

    def _arrival_day(self, hotel: HotelRecord, take) -> list[ScheduledItem]:
        items = [_hotel_item(hotel, "afternoon", check_in=True)]
        dinner = self._dinner(take)
        if dinner:
            items.append(dinner)
        return items

    def _departure_day(self, hotel: HotelRecord, take) -> list[ScheduledItem]:
        items: list[ScheduledItem] = []
        outing = self._departure_outing(take, "morning")
        if outing:
            items.append(outing)
        items.append(_hotel_item(hotel, "afternoon", check_in=False))
        return items

    def _middle_day(self, take) -> list[ScheduledItem]:
        items: list[ScheduledItem] = []
        morning = take(lambda a: a.type == "sightseeing" and a.fits_slot("morning"), "morning")
        if morning:
            items.append(morning)
        afternoon = take(lambda a: a.type not in _NOT_AN_OUTING and a.fits_slot("afternoon"), "afternoon")
        if afternoon:
            items.append(afternoon)
        dinner = self._dinner(take)
        if dinner:
            items.append(dinner)
        return items

    def _single_day(self, hotel: HotelRecord, take) -> list[ScheduledItem]:
        items = [_hotel_item(hotel, "morning", check_in=True)]
        outing = self._departure_outing(take, "afternoon")
        if outing:
            items.append(outing)
        dinner = self._dinner(take)
        if dinner:
            items.append(dinner)
        items.append(_hotel_item(hotel, "evening", check_in=False))
        return items
