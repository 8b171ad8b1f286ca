"""
test_itinerary_scheduler.py
----------------------------
Day roles, slot filling, budget counters and de-duplication.

The stub catalog below is for a destination with no known city centre and a
hotel without coordinates, so no proximity filtering applies.

Run:
    cd backend
    pytest test_itinerary_scheduler.py -v
"""

from __future__ import annotations

import pytest

from modules.planning.budget_planner import BudgetPlanner
from modules.planning.itinerary_scheduler import (
    ROLE_ARRIVAL,
    ROLE_DEPARTURE,
    ROLE_MIDDLE,
    ItineraryScheduler,
    day_role,
)
from modules.tool_usage.activity_tool import ActivityRecord, ActivityTool
from modules.tool_usage.hotel_tool import HotelRecord
from schemas.itinerary import BudgetAllocation


class _StubActivities(ActivityTool):
    def __init__(self, activities: list[ActivityRecord]) -> None:
        super().__init__(use_stub=True)
        self._activities = activities

    def fetch(self, destination: str) -> list[ActivityRecord]:
        return list(self._activities)


def _a(id_, type_, cost, slot, rating, tags=(), lat=None, lon=None) -> ActivityRecord:
    return ActivityRecord(id=id_, name=id_.upper(), type=type_, cost=cost, time_slot=slot,
                          rating=rating, tags=list(tags), lat=lat, lon=lon)


ACTIVITIES = [
    _a("s1", "sightseeing", 10, "morning",   4.9, ["history"]),
    _a("s2", "sightseeing", 20, "morning",   4.5, ["art"]),
    _a("s3", "sightseeing",  0, "flexible",  4.0, ["free"]),
    _a("a1", "activity",    30, "afternoon", 4.8, ["cooking"]),
    _a("a2", "activity",    25, "afternoon", 4.2, ["nature"]),
    _a("r1", "restaurant",  15, "evening",   4.7, ["food"]),
    _a("r2", "restaurant",  12, "evening",   4.3, ["food"]),
    _a("t1", "transport",    5, "flexible",  5.0, ["transfer"]),
]

HOTEL = HotelRecord(id="h1", name="Harbour Hotel", location="Old Town", price_per_night=100, rating=4.0)


def _allocation(activities: int = 300, food: int = 150, days: int = 4) -> BudgetAllocation:
    return BudgetAllocation(total_budget=1000, duration_days=days, accommodation=550,
                            activities=activities, food=food, per_night=round(550 / days))


def _build(days: int = 4, allocation: BudgetAllocation | None = None, preferences=(), activities=ACTIVITIES,
           hotel: HotelRecord = HOTEL):
    scheduler = ItineraryScheduler(_StubActivities(activities))
    return scheduler.build("Atlantis", days, hotel, allocation or _allocation(days=days), preferences)


def _slots(day) -> list[tuple[str, str | None]]:
    return [(item.time_slot, item.activity_id) for item in day.items]


# ── Roles and structure ───────────────────────────────────────────────────────

def test_day_role():
    assert day_role(1, 5) == ROLE_ARRIVAL
    assert day_role(3, 5) == ROLE_MIDDLE
    assert day_role(5, 5) == ROLE_DEPARTURE


def test_one_day_per_duration_day_with_roles():
    itinerary = _build(days=4)
    assert [d.day_index for d in itinerary.days] == [1, 2, 3, 4]
    assert [d.role for d in itinerary.days] == [ROLE_ARRIVAL, ROLE_MIDDLE, ROLE_MIDDLE, ROLE_DEPARTURE]


def test_reference_schedule():
    days = _build(days=4).days
    assert _slots(days[0]) == [("afternoon", None), ("evening", "r1")]
    assert days[0].items[0].name == "Check in at Harbour Hotel"
    assert _slots(days[1]) == [("morning", "s1"), ("afternoon", "a1"), ("evening", "r2")]
    assert _slots(days[2]) == [("morning", "s2"), ("afternoon", "a2")]
    assert _slots(days[3]) == [("morning", "s3"), ("afternoon", None)]
    assert days[3].items[-1].name == "Check out of Harbour Hotel"


def test_hotel_items_cost_nothing():
    itinerary = _build(days=3)
    hotel_items = [i for d in itinerary.days for i in d.items if i.activity_type == "hotel"]
    assert len(hotel_items) == 2
    assert all(i.cost == 0 and i.activity_id is None for i in hotel_items)


def test_no_activity_is_scheduled_twice():
    itinerary = _build(days=10)
    ids = itinerary.activity_ids()
    assert len(ids) == len(set(ids))
    assert "t1" not in ids                 # transport never fills an outing slot


def test_empty_catalog_still_yields_hotel_days():
    itinerary = _build(days=3, activities=[])
    assert [len(d.items) for d in itinerary.days] == [1, 0, 1]
    assert itinerary.total_cost == 300


def test_zero_duration_is_rejected():
    with pytest.raises(ValueError):
        _build(days=0)


# ── Ranking ───────────────────────────────────────────────────────────────────

def test_preferences_outrank_rating():
    days = _build(days=4, preferences=["art"]).days
    assert days[1].items[0].activity_id == "s2"


# ── Budget ────────────────────────────────────────────────────────────────────

def test_budget_counters_are_never_exceeded():
    itinerary = _build(days=4, allocation=_allocation(activities=25, food=15))
    items = [i for d in itinerary.days for i in d.items if i.activity_id]
    food = sum(i.cost for i in items if i.activity_type == "restaurant")
    other = sum(i.cost for i in items if i.activity_type != "restaurant")
    assert food <= 15
    assert other <= 25
    assert {i.activity_id for i in items} == {"r1", "s1", "s3"}


def test_totals():
    itinerary = _build(days=4)
    item_cost = sum(d.day_cost for d in itinerary.days)
    assert itinerary.total_cost == 4 * HOTEL.price_per_night + item_cost
    assert itinerary.remaining_budget == 1000 - itinerary.total_cost
    assert not itinerary.over_budget


def test_hotel_inside_the_price_flexibility_keeps_the_plan_in_budget():
    allocation = BudgetPlanner().allocate(2000, 7)          # per_night 157, cap 180.55
    at_cap = HotelRecord(id="h-cap", name="At Cap", price_per_night=180, rating=4.5)
    plenty = (
        [_a(f"m{i}", "sightseeing", 100, "morning", 4.5) for i in range(7)]
        + [_a(f"p{i}", "activity", 100, "afternoon", 4.5) for i in range(7)]
        + [_a(f"r{i}", "restaurant", 50, "evening", 4.5) for i in range(7)]
    )
    itinerary = ItineraryScheduler(_StubActivities(plenty)).build("Atlantis", 7, at_cap, allocation)

    assert at_cap.price_per_night <= allocation.per_night * 1.15
    assert itinerary.relaxations == []
    assert not itinerary.over_budget
    # 7 nights at 180 is 160 over the 1100 accommodation share; food absorbs it
    spent = [i for d in itinerary.days for i in d.items if i.activity_id]
    assert sum(i.cost for i in spent if i.activity_type == "restaurant") == 100
    assert sum(i.cost for i in spent if i.activity_type != "restaurant") == 600
    assert itinerary.total_cost == 1960
    assert itinerary.remaining_budget == 40


def test_over_budget_is_flagged():
    pricey = HotelRecord(id="h2", name="Grand", price_per_night=400, rating=5.0)
    itinerary = _build(days=4, hotel=pricey)
    assert itinerary.remaining_budget < 0
    assert itinerary.over_budget
    assert itinerary.to_dict()["over_budget"] is True


# ── Single-day trip ───────────────────────────────────────────────────────────

def test_single_day_trip():
    itinerary = _build(days=1)
    assert len(itinerary.days) == 1
    day = itinerary.days[0]
    assert day.role == ROLE_ARRIVAL
    assert _slots(day) == [("morning", None), ("afternoon", "s1"), ("evening", "r1"), ("evening", None)]
    assert day.items[0].name.startswith("Check in")
    assert day.items[-1].name.startswith("Check out")


# ── Proximity ─────────────────────────────────────────────────────────────────

def test_activities_far_from_the_hotel_are_skipped():
    hotel = HotelRecord(id="h3", name="Central", price_per_night=100, rating=4.0, lat=41.9009, lon=12.4942)
    near = _a("near", "sightseeing", 5, "morning", 4.0, lat=41.8902, lon=12.4922)
    far = _a("far", "sightseeing", 5, "morning", 5.0, lat=43.7679, lon=11.2554)
    itinerary = _build(days=3, activities=[near, far], hotel=hotel)
    assert itinerary.activity_ids() == ["near"]
