"""English keyword dictionaries for filter extraction and intent classification.

These tables are scanned in declaration order; the order is a priority policy and must be kept.
"""

from __future__ import annotations

from cresta.intent.schema import RequestedField

LOCATION_PREPOSITIONS: tuple[str, ...] = ("in", "from", "at", "for")

# Candidate city spans containing any of these (as whole words) are not cities.
CITY_STOP_PHRASES: tuple[str, ...] = (
    "show me",
    "give me",
    "list of",
    "all",
    "some",
    "any",
    "properties",
    "buildings",
    "the",
    "a",
    "an",
)

BUILDING_SUFFIXES: tuple[str, ...] = ("building", "tower", "center", "plaza", "complex", "avenue", "street")
STREET_SUFFIXES: tuple[str, ...] = ("ave", "avenue", "st", "street", "rd", "road", "blvd", "boulevard")

DETAIL_TERMS: tuple[str, ...] = ("detail", "details", "information", "info")

# Keyword -> column, first hit wins.
FIELD_KEYWORDS: tuple[tuple[str, RequestedField], ...] = (
    ("size", RequestedField.building_size),
    ("building size", RequestedField.building_size),
    ("square feet", RequestedField.building_size),
    ("sqft", RequestedField.building_size),
    ("floors", RequestedField.number_of_floors),
    ("floor", RequestedField.number_of_floors),
    ("stories", RequestedField.number_of_floors),
    ("story", RequestedField.number_of_floors),
    ("levels", RequestedField.number_of_floors),
    ("property subtype", RequestedField.property_sub_type),
    ("subtype", RequestedField.property_sub_type),
    ("sub type", RequestedField.property_sub_type),
    ("year renovated", RequestedField.year_renovated),
    ("year of renovation", RequestedField.year_renovated),
    ("renovated", RequestedField.year_renovated),
    ("renovate", RequestedField.year_renovated),
    ("renovation", RequestedField.year_renovated),
    ("renovation year", RequestedField.year_renovated),
    ("year built", RequestedField.year_built),
    ("built", RequestedField.year_built),
    ("build", RequestedField.year_built),
    ("what year", RequestedField.year_built),
    ("when was", RequestedField.year_built),
    ("year was built", RequestedField.year_built),
    ("was built", RequestedField.year_built),
    ("landlord", RequestedField.current_landlord),
    ("current landlord", RequestedField.current_landlord),
    ("owner", RequestedField.current_landlord),
)

DISCOVERY_VERBS: tuple[str, ...] = (
    "show",
    "list",
    "give",
    "find",
    "tell",
    "what",
    "which",
    "all",
    "display",
    "available",
)

DISCLOSURE_VERBS: tuple[str, ...] = ("show", "tell", "find", "about", "who", "what", "give", "which")

LANDLORD_TERMS: tuple[str, ...] = ("landlord", "landlords", "owner", "owners", "owns", "owned")
CITY_TERMS: tuple[str, ...] = ("cities", "city list")
BUILDING_CLASS_TERMS: tuple[str, ...] = ("building class", "building classes")
PROPERTY_TERMS: tuple[str, ...] = ("properties", "buildings")
LEASE_TERMS: tuple[str, ...] = ("lease", "leases", "leasing")
RENT_TERMS: tuple[str, ...] = ("rent", "rents", "rental", "price", "prices", "pricing")
