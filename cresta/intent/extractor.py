"""Rules-based filter extraction.

Extraction is a pure function of the message text. Every field is optional: when nothing matches, the
field stays `None`; the extractor never raises.
"""

from __future__ import annotations

import re

from cresta.intent.dictionaries import (
    BUILDING_SUFFIXES,
    CITY_STOP_PHRASES,
    DETAIL_TERMS,
    FIELD_KEYWORDS,
    LOCATION_PREPOSITIONS,
    STREET_SUFFIXES,
)
from cresta.intent.normalize import collapse_spaces, has_word, normalize_text
from cresta.intent.schema import BuildingClass, FilterSet, RequestedField

_CLASS_RE = re.compile(r"\bclass\s+(?P<cls>[abc])\b")

_PREPOSITION = "|".join(LOCATION_PREPOSITIONS)
_CITY_TAIL = r"(?:\s+(?:city|properties|buildings)\b|\s*$)"
_CITY_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(
        rf"\b(?:properties|list|buildings)\s+(?:of\s+properties\s+)?(?:{_PREPOSITION})\s+"
        rf"(?P<city>[a-z ]+?){_CITY_TAIL}"
    ),
    re.compile(rf"\b(?:{_PREPOSITION})\s+(?P<city>[a-z ]+?){_CITY_TAIL}"),
)
_MIN_CITY_LENGTH = 2

_SUFFIX = "|".join(BUILDING_SUFFIXES)
_STREET = "|".join(STREET_SUFFIXES)
_NAMED = rf"[a-z0-9 ]+\s(?:{_SUFFIX})\b"
_ADDRESS = rf"\d+\s+[a-z ]+?\b(?:{_STREET})\b(?:\s+(?:n|s|e|w|ne|nw|se|sw|north|south|east|west)\b)?"
_FIELD_WORDS = r"\b(?:year|built|renovated|size|floors)\b"

_BUILDING_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"\b(?:details|information|info)\s+(?:of|about|for|on)\s+(?:the\s+)?(?P<name>{_NAMED})"),
    re.compile(rf"{_FIELD_WORDS}.*?\b(?:of|for)\s+(?:the\s+)?(?P<name>{_NAMED})"),
    re.compile(rf"{_FIELD_WORDS}.*?\b(?:of|for)\s+(?P<name>\d+\s+[a-z ]+)"),
    re.compile(rf"\byear\s+(?P<name>{_NAMED})\s+(?:built|build)\b"),
    re.compile(rf"\byear\s+(?:the\s+)?(?P<name>{_NAMED})\s+(?:was\s+)?(?:built|build|renovated|renovate)\b"),
    re.compile(rf"(?P<name>{_NAMED})\s+(?:was|is)\b"),
    re.compile(rf"\b(?:in|of|about|for|at|on|owns)\s+(?:the\s+)?(?P<name>{_NAMED})"),
    re.compile(rf"\bthe\s+(?P<name>{_NAMED})"),
    re.compile(rf"(?P<name>{_NAMED})"),
    re.compile(rf"\b(?:details|information|info)\s+(?:of|about|for|on)\s+(?P<name>{_ADDRESS})"),
    re.compile(rf"(?P<name>{_ADDRESS})"),
)

# Question and topic words that an unanchored pattern can sweep into the front of a building name.
_LEADING_FILLER: frozenset[str] = frozenset(
    {
        "the", "what", "when", "which", "where", "who", "how", "is", "was", "did", "does",
        "show", "me", "tell", "give", "find", "about", "year", "of", "for", "in", "a", "an",
        "at", "on", "owns", "owner", "landlord", "lease", "leases", "info", "details", "information",
    }
)


def extract_building_class(text: str) -> BuildingClass | None:
    """Extract "class a|b|c" from normalized text."""

    match = _CLASS_RE.search(text)
    if not match:
        return None
    return BuildingClass(match.group("cls").upper())


def extract_city(text: str) -> str | None:
    """Extract a preposition-qualified city name from normalized text."""

    if not has_word(text, *LOCATION_PREPOSITIONS):
        return None

    for pattern in _CITY_PATTERNS:
        match = pattern.search(text)
        if match:
            candidate = collapse_spaces(match.group("city"))
            if len(candidate) < _MIN_CITY_LENGTH or has_word(candidate, *CITY_STOP_PHRASES):
                return None
            return candidate
    return None


def _clean_building_name(span: str) -> str | None:
    words = collapse_spaces(span).split()
    while words and words[0] in _LEADING_FILLER:
        words.pop(0)
    # A bare suffix ("building", "street") names nothing.
    if len(words) < 2 and not any(w.isdigit() for w in words):
        return None
    return " ".join(words)


def extract_building_name(text: str) -> str | None:
    """Extract a building name or street address from normalized text.

    Patterns are tried in order; the first one yielding a usable name wins.
    """

    for pattern in _BUILDING_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        name = _clean_building_name(match.group("name"))
        if name:
            return name
    return None


def extract_requested_field(text: str) -> RequestedField | None:
    """Return the column of the first field keyword present, in table order."""

    for keyword, column in FIELD_KEYWORDS:
        if has_word(text, keyword):
            return column
    return None


def extract_filters(message: str | None) -> FilterSet:
    """Extract a `FilterSet` from a raw chat message."""

    text = normalize_text(message)
    return FilterSet(
        building_class=extract_building_class(text),
        city=extract_city(text),
        building_name=extract_building_name(text),
        requested_field=extract_requested_field(text),
        is_detail_request=has_word(text, *DETAIL_TERMS),
    )
