"""
modules/planning/budget_planner.py
------------------------------------
Deterministic budget split for one itinerary generation.

    accommodation = round(total * 0.55)
    activities    = round(total * 0.30)
    food          = round(total * 0.15)
    per_night     = round(accommodation / duration_days)

Rounding is half-up on exact decimals (2000 → 1100 / 600 / 300, per night 157
for 7 days). Half-up rounding of three shares can overshoot the total by one or
two units; the overshoot is taken back from food, then activities, so the
allocation never exceeds the total. Accommodation and per_night are never trimmed.

Shares come from config (BUDGET_SHARE_*) unless a BudgetPolicy is passed in.

Entry points
------------
  BudgetPlanner.allocate()                — split a total budget.
  BudgetPlanner.shift_to_accommodation()  — hotel fallback: move part of the
                                            activity budget into lodging.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal

import config
from modules.errors import InvalidBudgetError
from schemas.itinerary import BudgetAllocation

logger = logging.getLogger(__name__)


def round_half_up(value: float | Decimal) -> int:
    """Round to the nearest integer, halves away from zero."""
    d = value if isinstance(value, Decimal) else Decimal(str(value))
    return int(d.quantize(Decimal(1), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class BudgetPolicy:
    accommodation: float = field(default_factory=lambda: config.BUDGET_SHARE_ACCOMMODATION)
    activities: float    = field(default_factory=lambda: config.BUDGET_SHARE_ACTIVITIES)
    food: float          = field(default_factory=lambda: config.BUDGET_SHARE_FOOD)

    def __post_init__(self) -> None:
        shares = (self.accommodation, self.activities, self.food)
        if any(s < 0 for s in shares):
            raise ValueError(f"Budget shares must be >= 0, got {shares}")
        if Decimal(str(self.accommodation)) + Decimal(str(self.activities)) + Decimal(str(self.food)) > 1:
            raise ValueError(f"Budget shares sum above 1.0: {shares}")


class BudgetPlanner:
    """
    Usage
    -----
        allocation = BudgetPlanner().allocate(2000, 7)
        # BudgetAllocation(accommodation=1100, activities=600, food=300, per_night=157, ...)
    """

    def __init__(self, policy: BudgetPolicy | None = None) -> None:
        self.policy = policy or BudgetPolicy()

    def allocate(self, total_budget: float, duration_days: int) -> BudgetAllocation:
        """Split total_budget; raises InvalidBudgetError unless both inputs are > 0."""
        if total_budget is None or duration_days is None or total_budget <= 0 or duration_days <= 0:
            raise InvalidBudgetError(total_budget, duration_days)

        total = Decimal(str(total_budget))
        accommodation = round_half_up(total * Decimal(str(self.policy.accommodation)))
        activities    = round_half_up(total * Decimal(str(self.policy.activities)))
        food          = round_half_up(total * Decimal(str(self.policy.food)))

        # ── Never over-allocate ──────────────────────────────────────────────
        excess = accommodation + activities + food - total
        if excess > 0:
            take = min(food, int(excess.to_integral_value(rounding=ROUND_CEILING)))
            food -= take
            excess -= take
        if excess > 0:
            take = min(activities, int(excess.to_integral_value(rounding=ROUND_CEILING)))
            activities -= take

        per_night = round_half_up(Decimal(accommodation) / Decimal(duration_days))

        allocation = BudgetAllocation(
            total_budget=round_half_up(total),
            duration_days=int(duration_days),
            accommodation=accommodation,
            activities=activities,
            food=food,
            per_night=per_night,
        )
        logger.info(
            "Budget %s over %d day(s): accommodation=%d (%d/night) activities=%d food=%d",
            total_budget, duration_days, accommodation, per_night, activities, food,
        )
        if per_night < 30:
            logger.info("Low nightly budget (%d): expect guesthouse-level lodging", per_night)
        if activities < 50:
            logger.info("Low activity budget (%d): free and low-cost activities only", activities)
        return allocation

    @staticmethod
    def shift_to_accommodation(allocation: BudgetAllocation, fraction: float) -> BudgetAllocation:
        """
        Move `fraction` of the activity budget into accommodation and recompute per_night.
        The total allocated amount is unchanged.
        """
        moved = min(allocation.activities, round_half_up(Decimal(allocation.activities) * Decimal(str(fraction))))
        accommodation = allocation.accommodation + moved
        return replace(
            allocation,
            accommodation=accommodation,
            activities=allocation.activities - moved,
            per_night=round_half_up(Decimal(accommodation) / Decimal(allocation.duration_days)),
        )
