"""
schemas/itinerary.py
--------------------
Dataclass definitions for the planning outputs.

BudgetAllocation is immutable and derived once per generation.
Itinerary is created fresh on each generation and never mutated afterwards;
a later generation replaces it wholesale.
"""

from __future__ import annotations
from dataclasses import asdict, dataclass, field
from typing import Optional

from modules.tool_usage.hotel_tool import HotelRecord


@dataclass(frozen=True)
class BudgetAllocation:
    """
    Split of the total trip budget (whole currency units).

      accommodation — lodging for the whole trip
      activities    — sights, classes, tours
      food          — dining
      per_night     — accommodation / duration_days, rounded half-up

    accommodation + activities + food <= total_budget always holds.
    """
    total_budget: int
    duration_days: int
    accommodation: int
    activities: int
    food: int
    per_night: int

    @property
    def allocated(self) -> int:
        return self.accommodation + self.activities + self.food

    @property
    def unallocated(self) -> int:
        return self.total_budget - self.allocated


@dataclass
class ScheduledItem:
    """
    One entry in a day. activity_id is None for hotel check-in / checkout.
    """
    name: str = ""
    time_slot: str = ""                 # morning | afternoon | evening
    activity_type: str = ""             # catalog type, or "hotel"
    cost: int = 0
    activity_id: Optional[str] = None
    notes: str = ""


@dataclass
class ItineraryDay:
    day_index: int = 0                  # 1..duration_days
    role: str = "middle"                # arrival | middle | departure
    items: list[ScheduledItem] = field(default_factory=list)

    @property
    def day_cost(self) -> int:
        return sum(item.cost for item in self.items)


@dataclass
class Itinerary:
    """
    Top-level output of the planning module.

    total_cost       = hotel.price_per_night * duration_days + sum of item costs
    remaining_budget = allocation.total_budget - total_cost

    A hotel priced above per_night shrinks the food and activity counters by
    the difference, so remaining_budget only goes negative when the nights
    alone cost more than the food, activity and accommodation shares together.
    over_budget is set when remaining_budget < 0; callers must surface it.
    """
    destination: str = ""
    hotel: Optional[HotelRecord] = None
    days: list[ItineraryDay] = field(default_factory=list)
    allocation: Optional[BudgetAllocation] = None
    total_cost: int = 0
    remaining_budget: int = 0
    relaxations: list[str] = field(default_factory=list)
    generated_at: str = ""              # ISO-8601 timestamp

    @property
    def over_budget(self) -> bool:
        return self.remaining_budget < 0

    def activity_ids(self) -> list[str]:
        return [
            item.activity_id
            for day in self.days
            for item in day.items
            if item.activity_id is not None
        ]

    def to_dict(self) -> dict:
        """Plain-data form, including the derived over_budget flag."""
        data = asdict(self)
        data["over_budget"] = self.over_budget
        for day, raw in zip(self.days, data["days"]):
            raw["day_cost"] = day.day_cost
        return data
