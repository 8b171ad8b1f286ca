"""
modules/planning/trip_planner.py
---------------------------------
One generation pass: allocate → select hotel → schedule days.

Reads TripRequirements and never mutates them. Raises InvalidBudgetError,
NoHotelAvailableError or IncompleteRequirementsError; the dialogue turns
those into user-facing replies.
"""

from __future__ import annotations

import logging
from typing import Optional

from modules.errors import IncompleteRequirementsError
from modules.planning.budget_planner import BudgetPlanner
from modules.planning.hotel_selector import HotelSelector
from modules.planning.itinerary_scheduler import ItineraryScheduler
from modules.tool_usage.activity_tool import ActivityTool
from modules.tool_usage.catalog import hotels_for
from modules.tool_usage.hotel_tool import HotelTool
from schemas.itinerary import Itinerary
from schemas.requirements import TripRequirements

logger = logging.getLogger(__name__)


class TripPlanner:
    def __init__(
        self,
        budget_planner: Optional[BudgetPlanner] = None,
        hotel_tool: Optional[HotelTool] = None,
        activity_tool: Optional[ActivityTool] = None,
    ) -> None:
        self.budget_planner = budget_planner or BudgetPlanner()
        self.hotel_selector = HotelSelector(hotel_tool)
        self.scheduler = ItineraryScheduler(activity_tool)

    def supports(self, destination: str) -> bool:
        """True when the catalog has at least one hotel for destination."""
        return bool(hotels_for(destination, self.hotel_selector.hotel_tool))

    def generate(self, requirements: TripRequirements) -> Itinerary:
        missing = [
            name for name, value in (
                ("destination", requirements.destination),
                ("budget", requirements.budget),
                ("duration", requirements.duration_days),
            )
            if value is None
        ]
        if missing:
            raise IncompleteRequirementsError(missing)

        allocation = self.budget_planner.allocate(requirements.budget, requirements.duration_days)
        selection = self.hotel_selector.select(requirements.destination, allocation)
        itinerary = self.scheduler.build(
            destination=requirements.destination,
            duration_days=requirements.duration_days,
            hotel=selection.hotel,
            allocation=selection.allocation,
            preferences=requirements.preferences,
            relaxations=selection.relaxations,
        )
        logger.info(
            "Generated %d-day itinerary for '%s' at %s (total %d of %d)",
            requirements.duration_days, requirements.destination,
            selection.hotel.name, itinerary.total_cost, allocation.total_budget,
        )
        return itinerary
