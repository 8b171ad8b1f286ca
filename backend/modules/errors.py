"""
modules/errors.py
-----------------
Error taxonomy for the planner.

Every error is recoverable at the conversation level:
  ExtractionNoMatch           — a message did not answer the outstanding question; re-ask.
  InvalidBudgetError          — total budget or duration not positive; user can correct.
  NoHotelAvailableError       — hotel search exhausted every fallback step.
  IncompleteRequirementsError — generation requested before all requirements are known.
  StaleStateError             — a turn raced a conversation reset; discard and resend.
  CatalogUnavailableError     — remote catalog still failing after retries.

Messages carry an ERROR_<CODE>: prefix so log lines can be grepped by code.
"""

from __future__ import annotations


class PlannerError(RuntimeError):
    """Base class for every planner error."""


class ExtractionNoMatch(PlannerError):
    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"ERROR_NO_MATCH: nothing in the message answers '{field_name}'")


class InvalidBudgetError(PlannerError):
    def __init__(self, total_budget: float, duration_days: int) -> None:
        self.total_budget = total_budget
        self.duration_days = duration_days
        super().__init__(
            f"ERROR_INVALID_BUDGET: total_budget={total_budget} and "
            f"duration_days={duration_days} must both be > 0"
        )


class NoHotelAvailableError(PlannerError):
    def __init__(self, destination: str, per_night: int) -> None:
        self.destination = destination
        self.per_night = per_night
        super().__init__(
            f"ERROR_NO_HOTEL: no hotel in '{destination}' fits a nightly budget "
            f"of {per_night} even after relaxing radius, rating and budget split"
        )


class IncompleteRequirementsError(PlannerError):
    def __init__(self, missing_fields: list[str]) -> None:
        self.missing_fields = list(missing_fields)
        super().__init__(
            "ERROR_INCOMPLETE_REQUIREMENTS: missing " + ", ".join(self.missing_fields)
        )


class StaleStateError(PlannerError):
    def __init__(self, conversation_id: str) -> None:
        self.conversation_id = conversation_id
        super().__init__(
            f"ERROR_STALE_STATE: conversation '{conversation_id}' was reset while "
            f"a turn was in flight; the turn was discarded"
        )


class CatalogUnavailableError(PlannerError):
    def __init__(self, url: str, attempts: int) -> None:
        self.url = url
        self.attempts = attempts
        super().__init__(f"ERROR_CATALOG_UNAVAILABLE: {url} failed after {attempts} attempt(s)")
