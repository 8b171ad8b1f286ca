"""
modules/input/extractors.py
----------------------------
Keyword and regex extractors for one chat message.

Each extract_<field>() is a pure function returning a value or None.
Extraction never raises on user text; `require()` is the strict form used
where a caller needs a field and wants ExtractionNoMatch instead of None.

extract_all(text, expected_field, travelers_hint) → RequirementUpdate

Context-aware answers:
  expected_field in {budget, duration, travelers} and the message is a bare
  number  → that number answers the field.
  expected_field == departure and the message is a short place name
  → it answers the departure and is never read as a destination.
  expected_field == currency → '£', 'dollars', 'EUR'... answers the currency
  of a budget that was given as a plain number.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Optional, TypeVar

import config
from modules.errors import ExtractionNoMatch
from modules.planning.budget_planner import round_half_up
from schemas.requirements import RequirementUpdate

T = TypeVar("T")


def _kw_pattern(keyword: str) -> str:
    # word-boundary match to avoid partial hits (e.g. "art" in "start")
    return r"(?<!\w)" + re.escape(keyword) + r"(?!\w)"


def _plural_pattern(keyword: str) -> str:
    # "museum" also matches "museums", "beach" also "beaches"
    return r"(?<!\w)" + re.escape(keyword) + r"(?:s|es)?(?!\w)"


def require(value: Optional[T], field_name: str) -> T:
    if value is None:
        raise ExtractionNoMatch(field_name)
    return value


# ── Numbers ───────────────────────────────────────────────────────────────────

_WORD_NUMBERS: dict[str, int] = {
    "one": 1, "two": 2, "three": 3, "four": 4, "five": 5, "six": 6, "seven": 7,
    "eight": 8, "nine": 9, "ten": 10, "eleven": 11, "twelve": 12, "thirteen": 13,
    "fourteen": 14, "fifteen": 15, "sixteen": 16, "seventeen": 17, "eighteen": 18,
    "nineteen": 19, "twenty": 20, "thirty": 30,
}
_NUMBER = r"(\d+|" + "|".join(_WORD_NUMBERS) + r")"


def _to_int(token: str) -> int:
    token = token.lower()
    return _WORD_NUMBERS[token] if token in _WORD_NUMBERS else int(token)


_BARE_NUMBER_RE = re.compile(r"^\s*[£$€]?\s*(\d{1,3}(?:,\d{3})+|\d+)\s*[.!]?\s*$")


def bare_number(text: str) -> Optional[int]:
    m = _BARE_NUMBER_RE.match(text)
    return int(m.group(1).replace(",", "")) if m else None


# ── Destination ───────────────────────────────────────────────────────────────

_DESTINATION_KEYWORDS: dict[str, str] = {
    # Countries
    "italy": "Italy", "japan": "Japan", "france": "France", "thailand": "Thailand",
    "spain": "Spain", "greece": "Greece", "germany": "Germany", "portugal": "Portugal",
    "netherlands": "Netherlands", "holland": "Netherlands", "turkey": "Turkey",
    "united kingdom": "United Kingdom", "uk": "United Kingdom", "england": "United Kingdom",
    "scotland": "United Kingdom", "united states": "United States", "usa": "United States",
    "america": "United States",
    # Italy
    "rome": "Italy", "venice": "Italy", "florence": "Italy", "milan": "Italy",
    "naples": "Italy", "tuscany": "Italy", "amalfi": "Italy",
    # Japan
    "tokyo": "Japan", "kyoto": "Japan", "osaka": "Japan", "hiroshima": "Japan",
    # France
    "paris": "France", "lyon": "France", "marseille": "France", "provence": "France",
    # Thailand
    "bangkok": "Thailand", "phuket": "Thailand", "chiang mai": "Thailand",
    # Spain
    "madrid": "Spain", "barcelona": "Spain", "seville": "Spain", "valencia": "Spain",
    # Greece
    "athens": "Greece", "santorini": "Greece", "mykonos": "Greece", "crete": "Greece",
    # United Kingdom
    "london": "United Kingdom", "edinburgh": "United Kingdom", "manchester": "United Kingdom",
    # Germany
    "berlin": "Germany", "munich": "Germany", "hamburg": "Germany",
    # Portugal / Netherlands / Turkey
    "lisbon": "Portugal", "porto": "Portugal", "amsterdam": "Netherlands",
    "istanbul": "Turkey",
    # United States
    "new york": "United States", "los angeles": "United States",
    "chicago": "United States", "miami": "United States",
}

_DESTINATION_RES: list[tuple[re.Pattern, str]] = [
    (re.compile(_kw_pattern(kw), re.IGNORECASE), country)
    for kw, country in _DESTINATION_KEYWORDS.items()
]


def extract_destination(text: str, exclude: Optional[tuple[int, int]] = None) -> Optional[str]:
    """Earliest destination keyword in text, outside the `exclude` span."""
    best: Optional[tuple[int, int, str]] = None          # (start, -length, country)
    for pattern, country in _DESTINATION_RES:
        for m in pattern.finditer(text):
            if exclude and m.start() < exclude[1] and m.end() > exclude[0]:
                continue
            candidate = (m.start(), -(m.end() - m.start()), country)
            if best is None or candidate < best:
                best = candidate
            break
    return best[2] if best else None


# ── Departure ─────────────────────────────────────────────────────────────────

_PLACE = r"([A-Za-z][A-Za-z.'-]*(?:\s+[A-Za-z][A-Za-z.'-]*){0,2})"

_FROM_RE = re.compile(r"\bfrom\s+" + _PLACE, re.IGNORECASE)
_DEPARTURE_RES: list[re.Pattern] = [
    re.compile(r"\b(?:flying|departing|leaving|travell?ing|coming|flight)\s+(?:from|out\s+of)\s+" + _PLACE,
               re.IGNORECASE),
    re.compile(r"\b(?:based|living|live)\s+in\s+" + _PLACE, re.IGNORECASE),
    _FROM_RE,
]

# A place name stops at the first of these words
_PLACE_STOP_WORDS: frozenset[str] = frozenset({
    "and", "for", "with", "on", "in", "to", "at", "by", "around", "during", "next",
    "this", "the", "a", "an", "my", "our", "me", "us", "we", "i", "it", "there",
    "here", "home", "now", "today", "tomorrow", "budget", "please", "but", "or",
    "january", "february", "march", "april", "may", "june", "july", "august",
    "september", "october", "november", "december", "weekend", "week", "work",
})

_MAX_PLACE_WORDS = 4


def _clean_place(raw: str) -> Optional[str]:
    words: list[str] = []
    for word in raw.split():
        token = word.strip(".,!?;:'\"")
        if not token or token.lower() in _PLACE_STOP_WORDS:
            break
        words.append(token)
        if word[-1] in ".,!?;:":
            break
    if not words:
        return None
    return " ".join(w[:1].upper() + w[1:] for w in words)


def _looks_like_place(raw: str, place: str) -> bool:
    # Bare "from X" is only trusted for capitalised or known place names
    return raw[:1].isupper() or place.lower() in _DESTINATION_KEYWORDS


def extract_departure(text: str) -> tuple[Optional[str], Optional[tuple[int, int]]]:
    """Departure place and its character span in text, or (None, None)."""
    for pattern in _DEPARTURE_RES:
        m = pattern.search(text)
        if not m:
            continue
        place = _clean_place(m.group(1))
        if place and pattern is _FROM_RE and not _looks_like_place(m.group(1), place):
            continue
        if place:
            start = m.start(1)
            return place, (start, start + len(place))
    return None, None


def bare_place(text: str) -> Optional[str]:
    """A short letters-only answer such as 'London' or 'new york'."""
    stripped = text.strip().strip(".!")
    if not stripped or len(stripped.split()) > _MAX_PLACE_WORDS:
        return None
    if not re.fullmatch(r"[A-Za-z][A-Za-z .'-]*", stripped):
        return None
    if is_skip_answer(stripped) or is_confirmation(stripped):
        return None
    return _clean_place(stripped)


# ── Budget ────────────────────────────────────────────────────────────────────

_AMOUNT = r"(\d{1,3}(?:,\d{3})+|\d+)(\.\d+)?\s*(k\b)?"

_SYMBOL_AMOUNT_RE = re.compile(r"([£$€])\s*" + _AMOUNT, re.IGNORECASE)
_WORDED_AMOUNT_RE = re.compile(
    _AMOUNT + r"\s*(pounds?|quid|gbp|euros?|eur|dollars?|usd|bucks)\b", re.IGNORECASE
)
_BUDGET_PHRASE_RE = re.compile(
    r"\bbudget\s+(?:of|is|around|about|roughly)?\s*(?:[£$€]\s*)?" + _AMOUNT, re.IGNORECASE
)
_PER_PERSON_RE = re.compile(r"\b(each|per\s+person|per\s+head|pp)\b", re.IGNORECASE)

_CURRENCY_WORDS: dict[str, str] = {
    "pound": "£", "pounds": "£", "quid": "£", "gbp": "£",
    "euro": "€", "euros": "€", "eur": "€",
    "dollar": "$", "dollars": "$", "usd": "$", "bucks": "$",
}


def _amount(digits: str, fraction: Optional[str], thousands: Optional[str]) -> int:
    value = Decimal(digits.replace(",", "") + (fraction or ""))
    if thousands:
        value *= 1000
    return round_half_up(value)


def extract_budget(text: str, travelers: Optional[int] = None) -> tuple[Optional[int], Optional[str]]:
    """
    Total budget and currency symbol.

    The whole digit run after the symbol is captured: "£2000" → 2000,
    "£2,500" → 2500, "€3.5k" → 3500. "each" / "per person" multiplies by
    the traveler count (1 if unknown).
    """
    amount: Optional[int] = None
    symbol: Optional[str] = None

    m = _SYMBOL_AMOUNT_RE.search(text)
    if m:
        symbol = m.group(1)
        amount = _amount(m.group(2), m.group(3), m.group(4))
    else:
        m = _WORDED_AMOUNT_RE.search(text)
        if m:
            symbol = _CURRENCY_WORDS[m.group(4).lower()]
            amount = _amount(m.group(1), m.group(2), m.group(3))
        else:
            m = _BUDGET_PHRASE_RE.search(text)
            if m:
                amount = _amount(m.group(1), m.group(2), m.group(3))

    if amount is None or amount <= 0:
        return None, None
    if _PER_PERSON_RE.search(text):
        amount *= travelers or 1
    return amount, symbol


_CURRENCY_ANSWER_RE = re.compile(
    r"([£$€])|\b(" + "|".join(_CURRENCY_WORDS) + r"|sterling)\b", re.IGNORECASE
)


def extract_currency(text: str) -> Optional[str]:
    """Currency symbol named in an answer like '£', 'pounds' or 'USD'."""
    m = _CURRENCY_ANSWER_RE.search(text)
    if not m:
        return None
    if m.group(1):
        return m.group(1)
    word = m.group(2).lower()
    return "£" if word == "sterling" else _CURRENCY_WORDS[word]


# ── Duration ──────────────────────────────────────────────────────────────────

_NUMERIC_DURATION_RE = re.compile(r"\b(\d+)\s*-?\s*(days?|weeks?|nights?)\b", re.IGNORECASE)
_WRITTEN_DURATION_RE = re.compile(
    r"\b(a|an|" + "|".join(_WORD_NUMBERS) + r")\s+(days?|weeks?|nights?|fortnights?)\b",
    re.IGNORECASE,
)
_UNIT_DAYS: dict[str, int] = {"day": 1, "night": 1, "week": 7, "fortnight": 14}


def _unit_days(unit: str) -> int:
    return _UNIT_DAYS[unit.lower().rstrip("s")]


def extract_duration(text: str) -> Optional[int]:
    days: Optional[int] = None
    m = _NUMERIC_DURATION_RE.search(text)
    if m:
        days = int(m.group(1)) * _unit_days(m.group(2))
    else:
        m = _WRITTEN_DURATION_RE.search(text)
        if m:
            count = 1 if m.group(1).lower() in ("a", "an") else _to_int(m.group(1))
            days = count * _unit_days(m.group(2))
    if days is None or not 1 <= days <= config.MAX_DURATION_DAYS:
        return None
    return days


# ── Travelers ─────────────────────────────────────────────────────────────────

_SOLO_RE = re.compile(
    r"\b(just\s+me|only\s+me|solo|by\s+myself|myself|on\s+my\s+own|one\s+person|alone)\b",
    re.IGNORECASE,
)
_PAIR_RE = re.compile(
    r"\b(couple\b(?!\s+of)|two\s+of\s+us|"
    r"(?:me\s+and|with)\s+my\s+(?:partner|wife|husband|girlfriend|boyfriend|fianc[eé]e?)|"
    r"my\s+(?:partner|wife|husband|girlfriend|boyfriend|fianc[eé]e?)\s+and\s+(?:i|me))",
    re.IGNORECASE,
)
_ADULTS_RE = re.compile(r"\b" + _NUMBER + r"\s+adults?\b", re.IGNORECASE)
_CHILDREN_RE = re.compile(r"\b" + _NUMBER + r"\s+(?:children|child|kids?)\b", re.IGNORECASE)
_PEOPLE_RE = re.compile(
    r"\b" + _NUMBER + r"\s+(?:people|persons|person|travell?ers|guests|pax|of\s+us)\b",
    re.IGNORECASE,
)
_GROUP_RE = re.compile(r"\b(?:group|party|family)\s+of\s+" + _NUMBER + r"\b", re.IGNORECASE)
_FOR_N_RE = re.compile(
    r"\bfor\s+(\d+)\b(?!\s*-?\s*(?:days?|weeks?|nights?|months?|years?|k\b|pounds?|euros?|dollars?|%|,\d))",
    re.IGNORECASE,
)


def extract_travelers(text: str) -> Optional[int]:
    count: Optional[int] = None

    adults = _ADULTS_RE.search(text)
    if adults:
        count = _to_int(adults.group(1))
        children = _CHILDREN_RE.search(text)
        if children:
            count += _to_int(children.group(1))
    else:
        for pattern in (_PEOPLE_RE, _GROUP_RE, _FOR_N_RE):
            m = pattern.search(text)
            if m:
                count = _to_int(m.group(1))
                break
        else:
            if _SOLO_RE.search(text):
                count = 1
            elif _PAIR_RE.search(text):
                count = 2

    if count is None or not 1 <= count <= config.MAX_TRAVELERS:
        return None
    return count


# ── Accommodation ─────────────────────────────────────────────────────────────

_ACCOMMODATION_RES: list[tuple[re.Pattern, str]] = [
    (re.compile(r"\b(luxury|luxurious|5[\s-]?stars?|five[\s-]stars?)\b", re.IGNORECASE), "luxury"),
    (re.compile(r"\b(mid[\s-]?range|4[\s-]?stars?|four[\s-]stars?|moderate)\b", re.IGNORECASE), "mid-range"),
    (re.compile(r"\b(budget\s+(?:hotels?|accommodation|options?|stays?|places?)|cheap|affordable|"
                r"3[\s-]?stars?|three[\s-]stars?)\b", re.IGNORECASE), "budget"),
    (re.compile(r"\bboutique\b", re.IGNORECASE), "boutique"),
    (re.compile(r"\bhostels?\b", re.IGNORECASE), "hostel"),
    (re.compile(r"\b(apartments?|airbnb)\b", re.IGNORECASE), "apartment"),
    (re.compile(r"\bresorts?\b", re.IGNORECASE), "resort"),
    (re.compile(r"\bvillas?\b", re.IGNORECASE), "villa"),
    (re.compile(r"\bryokan\b", re.IGNORECASE), "ryokan"),
    (re.compile(r"\bhotels?\b", re.IGNORECASE), "hotel"),
]


def extract_accommodation(text: str, expected_field: Optional[str] = None) -> Optional[str]:
    for pattern, tier in _ACCOMMODATION_RES:
        if pattern.search(text):
            return tier
    # A bare "budget" only answers the accommodation question
    if expected_field == "accommodation" and re.search(r"\bbudget\b", text, re.IGNORECASE):
        return "budget"
    return None


# ── Travel style ──────────────────────────────────────────────────────────────

_STYLE_SYNONYMS: dict[str, list[str]] = {
    "adventure":   ["adventure", "adventurous", "thrill", "action-packed", "active"],
    "relaxation":  ["relaxation", "relaxing", "relaxed", "chill", "laid back", "laid-back", "unwind"],
    "cultural":    ["cultural", "culture", "heritage"],
    "romantic":    ["romantic", "honeymoon", "anniversary"],
    "family":      ["family", "family-friendly", "kid-friendly", "with kids"],
    "business":    ["business", "work trip", "conference"],
    "backpacking": ["backpacking", "backpacker"],
    "mixed":       ["mixed", "a bit of everything", "bit of everything", "balanced", "mix"],
}
# Tier words double as accommodation answers, so they only count when asked for a style
_TIER_STYLES: dict[str, list[str]] = {
    "luxury":    ["luxury", "luxurious", "upscale"],
    "budget":    ["budget", "cheap", "shoestring"],
    "mid-range": ["mid-range", "mid range", "moderate"],
}
_STYLE_CONTEXT_RE = re.compile(r"\b(style|trip|holiday|vacation|getaway|break|travell?er)\b", re.IGNORECASE)


def extract_travel_style(text: str, expected_field: Optional[str] = None) -> Optional[str]:
    asked = expected_field == "travel_style"
    if not asked and not _STYLE_CONTEXT_RE.search(text):
        return None
    lower = text.lower()
    table = {**_STYLE_SYNONYMS, **_TIER_STYLES} if asked else _STYLE_SYNONYMS
    best: Optional[tuple[int, str]] = None
    for style, words in table.items():
        for word in words:
            m = re.search(_kw_pattern(word), lower)
            if m and (best is None or m.start() < best[0]):
                best = (m.start(), style)
    return best[1] if best else None


# ── Preferences ───────────────────────────────────────────────────────────────

_PREFERENCE_KEYWORDS: dict[str, list[str]] = {
    "sightseeing":  ["sightseeing", "sight seeing", "tourist", "attraction", "landmark",
                     "monument", "visiting"],
    "history":      ["history", "historic", "historical", "ancient", "ruin", "heritage",
                     "colosseum", "forum"],
    "art":          ["art", "museum", "gallery", "galleries", "renaissance", "painting",
                     "sculpture", "vatican"],
    "food":         ["food", "cuisine", "cooking", "restaurant", "dining", "culinary", "wine",
                     "tasting", "pasta", "pizza", "sushi", "seafood", "street food", "vegetarian",
                     "foodie"],
    "nature":       ["nature", "outdoor", "outdoors", "hiking", "beach", "beaches", "mountain",
                     "park", "garden"],
    "adventure":    ["adventure", "sport", "hiking", "diving", "skiing", "climbing", "cycling"],
    "wellness":     ["wellness", "spa", "relaxation", "yoga", "meditation", "health", "massage"],
    "culture":      ["culture", "cultural", "traditional", "local", "authentic", "temple",
                     "festival", "custom"],
    "shopping":     ["shopping", "market", "boutique", "souvenir", "craft", "fashion"],
    "nightlife":    ["nightlife", "bar", "club", "entertainment", "music", "show"],
    "architecture": ["architecture", "building", "monument", "church", "churches", "castle",
                     "palace", "cathedral"],
    "photography":  ["photography", "photo", "scenic", "view", "instagram"],
    "romantic":     ["romantic", "sunset", "couple"],
}

_PACE_RELAXED = ("relaxed", "slow", "leisurely")
_PACE_FAST = ("fast", "packed", "busy")
_STYLE_POPULAR = ("tourist", "famous", "popular")
_STYLE_LOCAL = ("local", "hidden", "authentic", "off-beaten", "off the beaten")

_DESTINATION_PREFERENCES: dict[str, list[tuple[tuple[str, ...], str]]] = {
    "Italy": [
        (("rome", "vatican"), "rome-vatican"),
        (("tuscany", "florence"), "tuscany"),
        (("venice",), "venice"),
        (("amalfi", "coast"), "amalfi-coast"),
    ],
    "Japan": [
        (("traditional", "temple"), "traditional-culture"),
        (("modern", "tokyo", "technology"), "modern-japan"),
        (("ryokan",), "ryokan-experience"),
        (("onsen", "hot spring"), "hot-springs"),
    ],
    "Thailand": [
        (("beach", "island"), "beaches-islands"),
        (("temple", "cultural"), "cultural-sites"),
        (("street food",), "street-food"),
        (("spa", "wellness"), "wellness-activities"),
    ],
}

_SKIP_RE = re.compile(
    r"\b(no\s+preferences?|anything|whatever|skip|not\s+sure|don'?t\s+mind|no\s+idea|"
    r"surprise\s+me|doesn'?t\s+matter|either(?:\s+is\s+fine)?|both)\b",
    re.IGNORECASE,
)
_SKIP_WHOLE_RE = re.compile(r"^\s*(no|nope|none|nah|n/a|pass)\s*[.!]*\s*$", re.IGNORECASE)


def _has_any(lower: str, keywords: tuple[str, ...] | list[str]) -> bool:
    return any(re.search(_plural_pattern(k), lower) for k in keywords)


def extract_preferences(text: str, destination: Optional[str] = None) -> list[str]:
    """Ordered, de-duplicated preference tags found in text."""
    lower = text.lower()
    found: list[str] = []

    for category, keywords in _PREFERENCE_KEYWORDS.items():
        if _has_any(lower, keywords):
            found.append(category)

    if _has_any(lower, _PACE_RELAXED):
        found.append("relaxed-pace")
    elif _has_any(lower, _PACE_FAST):
        found.append("fast-pace")

    if _has_any(lower, _STYLE_POPULAR):
        found.append("popular-attractions")
    elif _has_any(lower, _STYLE_LOCAL):
        found.append("local-experiences")

    for keywords, tag in _DESTINATION_PREFERENCES.get(destination or "", []):
        if _has_any(lower, keywords):
            found.append(tag)

    return list(dict.fromkeys(found))


def is_skip_answer(text: str) -> bool:
    return bool(_SKIP_WHOLE_RE.match(text) or _SKIP_RE.search(text))


# ── Confirmation ──────────────────────────────────────────────────────────────

_YES_RES: list[re.Pattern] = [
    re.compile(r"^\s*(yes|yeah|yep|sure|ok|okay|alright|definitely|absolutely|sounds good|"
               r"let'?s do it|let'?s do this|let'?s go|go ahead|please do)\s*[.!]*\s*$", re.IGNORECASE),
    re.compile(r"^\s*(yes|yeah|yep|sure|ok|okay|alright)\b.*\b(please|go ahead|do it)\b", re.IGNORECASE),
]
_GENERATE_RES: list[re.Pattern] = [
    re.compile(r"\b(generate|create|make|build)\b.*\bitinerary\b", re.IGNORECASE),
    re.compile(r"^\s*let'?s\s+(generate|create|make|build)\b", re.IGNORECASE),
]


def is_generation_request(text: str) -> bool:
    """Explicit ask to build the itinerary ("create my itinerary")."""
    return any(p.search(text) for p in _GENERATE_RES)


def is_confirmation(text: str) -> bool:
    return any(p.search(text) for p in _YES_RES) or is_generation_request(text)


# ── All fields ────────────────────────────────────────────────────────────────

# Outstanding question → (update attribute, accepted range) for bare-number answers
_NUMERIC_FIELDS: dict[str, tuple[str, int, int]] = {
    "budget":    ("budget", 1, 10**9),
    "duration":  ("duration_days", 1, config.MAX_DURATION_DAYS),
    "travelers": ("travelers", 1, config.MAX_TRAVELERS),
}


def extract_all(
    text: str,
    expected_field: Optional[str] = None,
    travelers_hint: Optional[int] = None,
) -> RequirementUpdate:
    """Run every core extractor; the update carries only the fields that matched."""
    update = RequirementUpdate()
    if not text or not text.strip():
        return update

    departure, span = extract_departure(text)
    answered_departure = False
    if departure is None and expected_field == "departure":
        departure = bare_place(text)
        answered_departure = departure is not None
    update.departure = departure

    if not answered_departure:
        update.destination = extract_destination(text, exclude=span)

    update.travelers = extract_travelers(text)
    update.budget, update.currency = extract_budget(text, update.travelers or travelers_hint)
    update.duration_days = extract_duration(text)

    if expected_field in _NUMERIC_FIELDS:
        attr, low, high = _NUMERIC_FIELDS[expected_field]
        number = bare_number(text)
        if number is not None and getattr(update, attr) is None and low <= number <= high:
            setattr(update, attr, number)

    if expected_field == "currency" and update.currency is None:
        update.currency = extract_currency(text)

    update.travel_style = extract_travel_style(text, expected_field)
    if not (expected_field == "travel_style" and update.travel_style in _TIER_STYLES):
        update.accommodation = extract_accommodation(text, expected_field)
    return update
