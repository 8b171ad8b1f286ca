"""
test_hotel_selector.py
-----------------------
Hotel choice under the nightly cap, and each step of the fallback ladder.

Run:
    cd backend
    pytest test_hotel_selector.py -v
"""

from __future__ import annotations

import pytest

from modules.errors import NoHotelAvailableError
from modules.planning.budget_planner import BudgetPlanner
from modules.planning.hotel_selector import (
    ACTIVITY_BUDGET_SHIFTED,
    MIN_RATING_LOWERED,
    RADIUS_WIDENED,
    HotelSelector,
    select_hotel,
)
from modules.tool_usage.hotel_tool import HotelRecord, HotelTool

# Rome centre is the reference point for "Italy"
_ROME_LAT, _ROME_LON = 41.9028, 12.4964


class _StubHotels(HotelTool):
    def __init__(self, hotels: list[HotelRecord]) -> None:
        super().__init__(use_stub=True)
        self._hotels = hotels

    def fetch(self, destination: str) -> list[HotelRecord]:
        return list(self._hotels)


def _hotel(id_: str, price: int, rating: float = 4.0, km_north: float = 0.0, **kw) -> HotelRecord:
    # ~111 km per degree of latitude
    return HotelRecord(
        id=id_, name=id_.title(), location="Rome", price_per_night=price, rating=rating,
        lat=_ROME_LAT + km_north / 111.0, lon=_ROME_LON, **kw,
    )


@pytest.fixture
def allocation():
    # per_night 157 → cap 180.55; shifted per_night 166 → cap 190.9
    return BudgetPlanner().allocate(2000, 7)


# ── Strict pass ───────────────────────────────────────────────────────────────

def test_bundled_italy_catalog_picks_artemide(allocation):
    selection = select_hotel("Italy", allocation)
    assert selection.hotel.name == "Hotel Artemide"
    assert selection.hotel.price_per_night <= allocation.per_night * 1.15
    assert selection.relaxations == []
    assert selection.allocation == allocation


def test_price_cap_includes_fifteen_percent_flexibility(allocation):
    tool = _StubHotels([_hotel("at-cap", 180), _hotel("over-cap", 181, rating=4.9)])
    selection = HotelSelector(tool).select("Italy", allocation)
    assert selection.hotel.id == "at-cap"
    assert selection.price_cap == pytest.approx(180.55)


def test_ranking_prefers_rating_then_review_score(allocation):
    tool = _StubHotels([
        _hotel("good", 150, rating=4.2, review_score=9.5),
        _hotel("better", 170, rating=4.5, review_score=8.0),
        _hotel("better-reviewed", 175, rating=4.5, review_score=8.8),
    ])
    assert HotelSelector(tool).select("Italy", allocation).hotel.id == "better-reviewed"


def test_far_hotels_are_excluded_in_strict_pass(allocation):
    tool = _StubHotels([_hotel("central", 170, rating=3.5), _hotel("outskirts", 150, rating=4.9, km_north=20)])
    assert HotelSelector(tool).select("Italy", allocation).hotel.id == "central"


# ── Fallback ladder ───────────────────────────────────────────────────────────

def test_radius_widened(allocation):
    tool = _StubHotels([_hotel("six-km-out", 150, km_north=6.0)])
    selection = HotelSelector(tool).select("Italy", allocation)
    assert selection.hotel.id == "six-km-out"
    assert selection.relaxations == [RADIUS_WIDENED]
    assert selection.max_radius_km == 8.0


def test_min_rating_lowered(allocation):
    tool = _StubHotels([_hotel("modest", 120, rating=2.7)])
    selection = HotelSelector(tool).select("Italy", allocation)
    assert selection.hotel.id == "modest"
    assert selection.relaxations == [RADIUS_WIDENED, MIN_RATING_LOWERED]
    assert selection.min_rating == 2.5


def test_activity_budget_shifted_raises_the_cap(allocation):
    tool = _StubHotels([_hotel("pricier", 185)])
    selection = HotelSelector(tool).select("Italy", allocation)
    assert selection.hotel.id == "pricier"
    assert selection.relaxations == [RADIUS_WIDENED, MIN_RATING_LOWERED, ACTIVITY_BUDGET_SHIFTED]
    assert selection.per_night == 166
    assert selection.allocation.activities == 540
    assert selection.allocation.accommodation == 1160
    assert selection.price_cap == pytest.approx(190.9)


def test_floor_rating_only_after_budget_shift(allocation):
    tool = _StubHotels([_hotel("basic", 90, rating=2.1)])
    selection = HotelSelector(tool).select("Italy", allocation)
    assert selection.relaxations[-1] == ACTIVITY_BUDGET_SHIFTED
    assert selection.min_rating == 2.0


def test_exhausted_ladder_raises(allocation):
    tool = _StubHotels([_hotel("palace", 900, rating=5.0)])
    with pytest.raises(NoHotelAvailableError) as info:
        HotelSelector(tool).select("Italy", allocation)
    assert info.value.destination == "Italy"
    assert info.value.per_night == 157


def test_unknown_destination_raises(allocation):
    with pytest.raises(NoHotelAvailableError):
        select_hotel("Atlantis", allocation)


def test_destination_without_centre_skips_proximity(allocation):
    far = HotelRecord(id="anywhere", name="Anywhere Inn", price_per_night=100, rating=4.0, lat=0.0, lon=0.0)
    selection = HotelSelector(_StubHotels([far])).select("Atlantis", allocation)
    assert selection.hotel.id == "anywhere"
    assert selection.relaxations == []


def test_no_radius_step_without_a_city_centre(allocation):
    modest = HotelRecord(id="modest", name="Modest Inn", price_per_night=100, rating=2.7)
    selection = HotelSelector(_StubHotels([modest])).select("Atlantis", allocation)
    assert selection.hotel.id == "modest"
    assert selection.relaxations == [MIN_RATING_LOWERED]
    assert RADIUS_WIDENED not in selection.relaxations
