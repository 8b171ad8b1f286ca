"""
test_extractors.py
-------------------
Keyword / regex extraction from single chat messages.

Run:
    cd backend
    pytest test_extractors.py -v
"""

from __future__ import annotations

import pytest

from modules.errors import ExtractionNoMatch
from modules.input.extractors import (
    bare_number,
    bare_place,
    extract_accommodation,
    extract_all,
    extract_budget,
    extract_currency,
    extract_departure,
    extract_destination,
    extract_duration,
    extract_preferences,
    extract_travel_style,
    extract_travelers,
    is_confirmation,
    is_generation_request,
    is_skip_answer,
    require,
)


# ── Budget ────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("text, amount, symbol", [
    ("£2000", 2000, "£"),
    ("my budget is £2000 total", 2000, "£"),
    ("£2,500", 2500, "£"),
    ("about £10,000 for everything", 10000, "£"),
    ("$4000", 4000, "$"),
    ("€ 3500", 3500, "€"),
    ("€3.5k", 3500, "€"),
    ("around 1500 pounds", 1500, "£"),
    ("3000 euros", 3000, "€"),
    ("a budget of 2500", 2500, None),
])
def test_budget_amounts(text, amount, symbol):
    assert extract_budget(text) == (amount, symbol)


def test_four_digit_amount_is_not_truncated():
    amount, _ = extract_budget("£1234")
    assert amount == 1234


def test_per_person_budget_multiplies_by_travelers():
    assert extract_budget("£800 each", travelers=3) == (2400, "£")
    assert extract_budget("£800 per person") == (800, "£")


def test_no_budget():
    assert extract_budget("somewhere warm please") == (None, None)
    assert extract_budget("£0") == (None, None)


# ── Duration ──────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("text, days", [
    ("7 days", 7),
    ("10-day trip", 10),
    ("2 weeks", 14),
    ("a week", 7),
    ("ten days in the sun", 10),
    ("a fortnight", 14),
    ("three nights", 3),
    ("1 day", 1),
])
def test_durations(text, days):
    assert extract_duration(text) == days


def test_duration_out_of_range():
    assert extract_duration("0 days") is None
    assert extract_duration("500 days") is None
    assert extract_duration("soon") is None


# ── Travelers ─────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("text, count", [
    ("just me", 1),
    ("travelling solo", 1),
    ("by myself", 1),
    ("me and my wife", 2),
    ("a couple", 2),
    ("two of us", 2),
    ("2 adults", 2),
    ("2 adults and 2 children", 4),
    ("4 people", 4),
    ("a family of five", 5),
    ("a table for 6", 6),
])
def test_traveler_idioms(text, count):
    assert extract_travelers(text) == count


def test_travelers_ignore_durations_and_amounts():
    assert extract_travelers("for 7 days") is None
    assert extract_travelers("for 2000 pounds") is None
    assert extract_travelers("a couple of days") is None


def test_budget_and_solo_in_one_message():
    update = extract_all("£2000 and just me")
    assert update.budget == 2000
    assert update.currency == "£"
    assert update.travelers == 1


# ── Destination / departure ───────────────────────────────────────────────────

def test_destination_keywords_map_to_countries():
    assert extract_destination("I'd love to see Rome") == "Italy"
    assert extract_destination("thinking about japan") == "Japan"
    assert extract_destination("maybe New York") == "United States"
    assert extract_destination("somewhere nice") is None


def test_departure_phrases():
    assert extract_departure("flying from London")[0] == "London"
    assert extract_departure("we're based in Manchester")[0] == "Manchester"
    assert extract_departure("from new york, next month")[0] == "New York"


def test_lowercase_from_phrase_is_not_a_departure():
    assert extract_departure("recommendations from locals")[0] is None


def test_departure_city_is_not_the_destination():
    update = extract_all("Italy from London")
    assert update.destination == "Italy"
    assert update.departure == "London"


def test_bare_place_answers_departure_only_when_asked():
    asked = extract_all("London", expected_field="departure")
    assert asked.departure == "London"
    assert asked.destination is None

    unasked = extract_all("London", expected_field="destination")
    assert unasked.destination == "United Kingdom"
    assert unasked.departure is None


def test_bare_place_rejects_sentences_and_skips():
    assert bare_place("new york") == "New York"
    assert bare_place("I have not decided where yet") is None
    assert bare_place("not sure") is None
    assert bare_place("yes") is None


# ── Accommodation / style ─────────────────────────────────────────────────────

@pytest.mark.parametrize("text, tier", [
    ("luxury please", "luxury"),
    ("5-star", "luxury"),
    ("mid-range", "mid-range"),
    ("4 star is fine", "mid-range"),
    ("budget hotels", "budget"),
    ("something cheap", "budget"),
    ("a boutique place", "boutique"),
    ("hostels are fine", "hostel"),
    ("an airbnb", "apartment"),
])
def test_accommodation_tiers(text, tier):
    assert extract_accommodation(text) == tier


def test_bare_budget_word_needs_the_accommodation_question():
    assert extract_accommodation("budget") is None
    assert extract_accommodation("budget", expected_field="accommodation") == "budget"


def test_travel_style():
    assert extract_travel_style("cultural", expected_field="travel_style") == "cultural"
    assert extract_travel_style("a romantic getaway") == "romantic"
    assert extract_travel_style("cultural") is None
    assert extract_travel_style("luxury", expected_field="travel_style") == "luxury"
    assert extract_travel_style("a luxury trip") is None


def test_tier_word_answers_style_not_accommodation_when_style_asked():
    update = extract_all("luxury", expected_field="travel_style")
    assert update.travel_style == "luxury"
    assert update.accommodation is None


# ── Bare numbers ──────────────────────────────────────────────────────────────

def test_bare_number_fills_the_expected_field():
    assert extract_all("2000", expected_field="budget").budget == 2000
    assert extract_all("7", expected_field="duration").duration_days == 7
    assert extract_all("3", expected_field="travelers").travelers == 3
    assert extract_all("7").duration_days is None
    assert extract_all("500", expected_field="travelers").travelers is None
    assert bare_number("£2,500") == 2500


@pytest.mark.parametrize("text, symbol", [
    ("£", "£"),
    ("pounds", "£"),
    ("sterling please", "£"),
    ("USD", "$"),
    ("in dollars", "$"),
    ("euros", "€"),
    ("hmm", None),
])
def test_currency_answers(text, symbol):
    assert extract_currency(text) == symbol


def test_currency_word_fills_the_currency_question_only():
    assert extract_all("dollars", expected_field="currency").currency == "$"
    assert extract_all("dollars").currency is None


# ── Preferences ───────────────────────────────────────────────────────────────

def test_preferences_are_ordered_and_unique():
    tags = extract_preferences("I love history, museums and ancient ruins, plus great food")
    assert tags[:3] == ["history", "art", "food"]
    assert len(tags) == len(set(tags))


def test_preferences_do_not_match_inside_words():
    assert "wellness" not in extract_preferences("Spain sounds great")
    assert "nightlife" not in extract_preferences("Barcelona")


def test_pace_and_destination_tags():
    tags = extract_preferences("a relaxed pace, mostly Rome and the Vatican", destination="Italy")
    assert "relaxed-pace" in tags
    assert "rome-vatican" in tags


# ── Skip / confirmation ───────────────────────────────────────────────────────

def test_skip_answers():
    assert is_skip_answer("no preference")
    assert is_skip_answer("Nope.")
    assert is_skip_answer("either is fine")
    assert not is_skip_answer("museums")


def test_confirmations_and_generation_requests():
    assert is_confirmation("yes")
    assert is_confirmation("Let's go!")
    assert is_confirmation("ok, go ahead")
    assert is_confirmation("please create my itinerary")
    assert is_generation_request("generate the itinerary")
    assert not is_generation_request("I want to plan a trip")
    assert not is_confirmation("yesterday was busy")


# ── Strict form ───────────────────────────────────────────────────────────────

def test_require_raises_no_match():
    assert require(5, "budget") == 5
    with pytest.raises(ExtractionNoMatch) as info:
        require(None, "budget")
    assert info.value.field_name == "budget"
