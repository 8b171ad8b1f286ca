"""
modules/input/prompts.py
-------------------------
Every user-facing string the dialogue emits.

Questions are plain constants so that a re-ask can be compared verbatim
with the original question.
"""

from __future__ import annotations

from typing import Iterable, Optional

from modules.errors import InvalidBudgetError, NoHotelAvailableError, PlannerError
from schemas.itinerary import Itinerary
from schemas.requirements import RequirementUpdate, TripRequirements

# ── Core questions (asked in this order) ─────────────────────────────────────

CORE_QUESTIONS: dict[str, str] = {
    "destination":   "Where would you like to go? (e.g., Italy, Japan, France, Spain)",
    "budget":        "What's your total budget for this trip? (Please include currency, e.g., £3000, $4000, €3500)",
    "duration":      "How long would you like your trip to be? (e.g., 7 days, 2 weeks, 10 days)",
    "travelers":     "How many people will be traveling? (e.g., 2 adults, 4 people, just me)",
    "departure":     "Where will you be flying from? (e.g., London, New York, Paris)",
    "accommodation": "What type of accommodation do you prefer? (luxury/5-star, mid-range/4-star, budget/3-star, boutique hotels)",
    "travel_style":  "What's your travel style? (adventure, relaxation, cultural, romantic, family-friendly, business)",
}

FIELD_LABELS: dict[str, str] = {
    "destination":   "destination",
    "budget":        "budget",
    "duration":      "duration",
    "travelers":     "travelers",
    "departure":     "departure location",
    "accommodation": "accommodation",
    "travel_style":  "travel style",
    "activities":    "activity preferences",
    "currency":      "budget currency",
}

WELCOME = (
    "Hi! I'm your travel planning assistant. Tell me about the trip you have in mind "
    "and I'll build a day-by-day itinerary that fits your budget."
)

GENERATED_HINT = (
    "Your itinerary is ready. Tell me what you'd like to change (budget, duration, "
    "travelers, accommodation...) or say \"create my itinerary\" to build it again."
)

# ── Preference questions ──────────────────────────────────────────────────────

_DESTINATION_QUESTIONS: dict[str, list[str]] = {
    "Italy": [
        "Which regions of Italy appeal to you most? (Rome/Vatican, Tuscany, Venice, Amalfi Coast, etc.)",
        "Are you interested in art museums, ancient ruins, or Renaissance architecture?",
        "Would you like wine tastings or cooking classes?",
        "Do you want to see famous landmarks or explore charming small towns?",
    ],
    "Japan": [
        "Are you interested in traditional culture (temples, gardens) or modern Japan (Tokyo, technology)?",
        "Would you like to experience a ryokan (traditional inn) or modern hotels?",
        "Any interest in specific experiences? (sushi making, tea ceremony, cherry blossoms, hot springs)",
        "Do you want to visit multiple cities or focus on one area?",
    ],
    "France": [
        "Are you most interested in Paris, the countryside, or both?",
        "Would you like wine regions, historic castles, or coastal areas?",
        "Any interest in art museums, fashion, or culinary experiences?",
        "Do you prefer bustling cities or charming villages?",
    ],
    "Thailand": [
        "Are you looking for beaches, cultural sites, or bustling cities?",
        "Would you like island hopping or staying on the mainland?",
        "Any interest in wellness activities like spas or yoga retreats?",
        "Do you want street food tours or fine dining experiences?",
    ],
    "Spain": [
        "Which regions interest you? (Madrid, Barcelona, Andalusia, Basque Country)",
        "Are you interested in art (Prado, Guggenheim), architecture (Gaudi), or flamenco culture?",
        "Would you like beach time or prefer inland cultural experiences?",
        "Any interest in food tours or cooking classes?",
    ],
    "Greece": [
        "Are you drawn to Athens and the ancient sites, the islands, or both?",
        "Would you like island hopping (Santorini, Mykonos, Crete) or a single base?",
        "Any interest in Greek cooking, wine tasting or seafood tavernas?",
        "Do you prefer beaches and relaxation or hiking and exploring?",
    ],
}


def preference_questions(destination: str) -> list[str]:
    base = [
        f"What kind of activities interest you most in {destination}?",
        "Are you more interested in popular tourist attractions or hidden local gems?",
        "What type of cuisine experiences are you looking for?",
        "Do you prefer a fast-paced itinerary or a more relaxed pace?",
        "Any specific interests? (history, art, nature, adventure sports, wellness, shopping, nightlife)",
    ]
    return base + _DESTINATION_QUESTIONS.get(destination, [])


# ── Formatting helpers ────────────────────────────────────────────────────────

def money(amount: Optional[int], currency: str) -> str:
    if amount is None:
        return "not set"
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency}{abs(amount):,}"


def _travelers(count: int) -> str:
    return f"{count} {'traveler' if count == 1 else 'travelers'}"


def _join(items: Iterable[str]) -> str:
    return ", ".join(items)


def acknowledge(update: RequirementUpdate, requirements: TripRequirements, currency_known: bool = True) -> str:
    """One-line echo of what this message filled in."""
    details: list[str] = []
    if update.destination:
        details.append(f"{update.destination} - excellent choice!")
    if update.budget is not None:
        if update.currency is None and not currency_known:
            details.append(f"Budget: {update.budget:,}")
        else:
            details.append(f"Budget: {money(update.budget, requirements.currency)}")
    elif update.currency is not None:
        details.append(f"Currency: {update.currency}")
    if update.duration_days is not None:
        details.append(f"{update.duration_days} day(s)")
    if update.travelers is not None:
        details.append(_travelers(update.travelers))
    if update.departure:
        details.append(f"Departing from: {update.departure}")
    if update.accommodation:
        details.append(f"Accommodation: {update.accommodation}")
    if update.travel_style:
        details.append(f"Style: {update.travel_style}")
    if not details:
        return ""
    return f"Got it! {_join(details)}."


def with_ack(ack: str, text: str) -> str:
    return f"{ack}\n\n{text}" if ack else text


# ── Dialogue replies ──────────────────────────────────────────────────────────

def preference_intro(destination: str, first_question: str, ack: str = "") -> str:
    body = (
        f"{destination} is a fantastic choice! To create the perfect itinerary for you, "
        f"I'd love to learn more about your preferences.\n\n"
        f"{first_question}\n\n"
        f"Tell me what interests you most, and I'll ask a few more questions to personalise your trip."
    )
    return with_ack(ack, body)


def preference_followup(tags: list[str], next_question: str, skipped: bool = False) -> str:
    if tags:
        lead = f"Great insights! I see you're interested in {_join(tags)}."
    elif skipped:
        lead = "No problem, let's move on."
    else:
        lead = "Thanks, I've noted that."
    return f"{lead}\n\n{next_question}"


def currency_question(amount: int) -> str:
    return (f"Which currency is your budget of {amount:,} in? "
            f"(e.g., £ pounds, $ dollars, € euros)")


def unsupported_destination(destination: str, available: Iterable[str]) -> str:
    return (f"Sorry, I don't have hotels for {destination} yet, so I can't plan a trip there. "
            f"I can plan trips to {_join(available)}.")


def preferences_done(destination: str, preferences: list[str]) -> str:
    if preferences:
        return (f"Perfect! I have a good understanding of your interests in {destination}: "
                f"{_join(preferences)}.")
    return f"Perfect! I'll keep your {destination} plan flexible."


def missing_fields(missing: list[str], question: Optional[str]) -> str:
    labels = _join(FIELD_LABELS.get(name, name) for name in missing)
    text = f"I can't create your itinerary yet. I still need: {labels}."
    return f"{text}\n\n{question}" if question else text


def summary(requirements: TripRequirements) -> str:
    r = requirements
    lines = [
        "Here's what I have for your trip:",
        f"  Destination:   {r.destination}",
        f"  Budget:        {money(r.budget, r.currency)}",
        f"  Duration:      {r.duration_days} day(s)",
        f"  Travelers:     {r.travelers}",
        f"  Departing:     {r.departure}",
        f"  Accommodation: {r.accommodation}",
        f"  Travel style:  {r.travel_style}",
        f"  Preferences:   {_join(r.preferences) or 'none'}",
        "",
        "Shall I go ahead? Just say \"yes\" or \"create my itinerary\".",
    ]
    return "\n".join(lines)


def generation_failed(exc: PlannerError, requirements: TripRequirements) -> str:
    if isinstance(exc, NoHotelAvailableError):
        return (
            f"I couldn't find a hotel in {exc.destination} within "
            f"{money(exc.per_night, requirements.currency)} per night, even after relaxing the "
            f"search. Try a larger budget, fewer days, or a different destination."
        )
    if isinstance(exc, InvalidBudgetError):
        return (
            "That budget and duration don't work for an itinerary. Both need to be greater "
            "than zero - what budget and trip length should I use?"
        )
    return f"Something went wrong while planning: {exc}"


def render_itinerary(itinerary: Itinerary, requirements: TripRequirements) -> str:
    cur = requirements.currency
    alloc = itinerary.allocation
    hotel = itinerary.hotel
    lines = [f"Here's your {len(itinerary.days)}-day {itinerary.destination} itinerary!", ""]

    if hotel is not None:
        lines.append(
            f"Hotel: {hotel.name} ({hotel.location}), rating {hotel.rating}, "
            f"{money(hotel.price_per_night, cur)}/night"
        )
    if alloc is not None:
        lines.append(
            f"Budget split: accommodation {money(alloc.accommodation, cur)} "
            f"({money(alloc.per_night, cur)}/night), activities {money(alloc.activities, cur)}, "
            f"food {money(alloc.food, cur)}"
        )
    if itinerary.relaxations:
        lines.append(f"Hotel search relaxed: {_join(itinerary.relaxations)}")
    lines.append("")

    for day in itinerary.days:
        lines.append(f"Day {day.day_index} ({day.role}):")
        for item in day.items:
            cost = money(item.cost, cur) if item.cost else "free"
            lines.append(f"  - {item.time_slot:<9} {item.name} [{cost}]")
    lines.append("")

    lines.append(f"Total cost: {money(itinerary.total_cost, cur)}")
    lines.append(f"Remaining budget: {money(itinerary.remaining_budget, cur)}")
    if itinerary.over_budget:
        lines.append(
            "Warning: this plan is over your budget because the hotel search had to be relaxed. "
            "Consider raising the budget or shortening the trip."
        )
    return "\n".join(lines)
