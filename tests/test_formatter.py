"""Tests for reply formatting (lists, single fields, apologies, humanized rows)."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from cresta.intent.schema import BuildingClass, FilterSet, QueryIntent, RequestedField
from cresta.reply.formatter import HELP_TEXT, format_field_value, format_list_line, format_reply

TODAY = date(2025, 6, 1)

_CITY_ROWS = [
    {"CITY": "New York", "STATE": "NY", "PROPERTY_COUNT": 12},
    {"CITY": "Chicago", "STATE": "IL", "PROPERTY_COUNT": 7},
    {"CITY": "Boston", "STATE": "MA", "PROPERTY_COUNT": 1},
]


def test_city_list_is_numbered_in_row_order() -> None:
    reply = format_reply(QueryIntent.city_list, FilterSet(), _CITY_ROWS, today=TODAY)
    assert reply.text == (
        "Here are all the cities available in our commercial real estate database:\n\n"
        "1. New York, NY (12 properties)\n\n"
        "2. Chicago, IL (7 properties)\n\n"
        "3. Boston, MA (1 property)"
    )
    assert reply.count == 3
    assert reply.rows == []


def test_list_lines_follow_row_shape() -> None:
    rows = [
        {"BUILDING_CLASS": "A"},
        {"BUILDING_NAME": "Flatiron Building", "CITY": "New York", "STATE": "NY"},
        {"BUILDING_NAME": "Willis Tower"},
    ]
    reply = format_reply(QueryIntent.building_class_list, FilterSet(), rows, today=TODAY)
    lines = reply.text.split("\n\n")[1:]
    assert lines == [
        "1. Class A",
        "2. Flatiron Building – New York, NY",
        "3. Willis Tower",
    ]


def test_city_property_list_intro_counts_rows() -> None:
    rows = [{"BUILDING_NAME": "Flatiron Building", "CITY": "New York", "STATE": "NY"}]
    reply = format_reply(QueryIntent.city_property_list, FilterSet(city="new york"), rows, today=TODAY)
    assert reply.text.startswith("Here is 1 commercial property in New York.\n\n1. Flatiron Building")

    rows.append({"BUILDING_NAME": "Chrysler Building", "CITY": "New York", "STATE": "NY"})
    reply = format_reply(QueryIntent.city_property_list, FilterSet(city="new york"), rows, today=TODAY)
    assert reply.text.startswith("Here are 2 commercial properties in New York.")


@pytest.mark.parametrize(
    ("row", "expected"),
    [
        ({"CITY": "Chicago", "STATE": "IL"}, "1. Chicago, IL"),
        ({"CITY": "Chicago", "STATE": "IL", "PROPERTY_COUNT": 0}, "1. Chicago, IL"),
        ({"CITY": "Chicago", "STATE": "IL", "PROPERTY_COUNT": 1}, "1. Chicago, IL (1 property)"),
    ],
)
def test_list_line_without_building_name(row: dict, expected: str) -> None:
    assert format_list_line(1, row) == expected


def test_city_menu_sets_suggestions_and_popup() -> None:
    rows = [{"CITY": "Boston"}, {"CITY": "Chicago"}]
    reply = format_reply(QueryIntent.property_list_by_city, FilterSet(), rows, today=TODAY)
    assert reply.text == "What city would you like to see properties in?"
    assert reply.suggestions == ["Boston", "Chicago"]
    assert reply.show_city_popup is True
    assert reply.rows == []
    assert reply.count == 0


@pytest.mark.parametrize(
    ("filters", "expected"),
    [
        (
            FilterSet(building_name="flatiron building", city="new york", building_class=BuildingClass.A),
            "I couldn't find any information about Flatiron Building in our current portfolio.",
        ),
        (
            FilterSet(city="new york", building_class=BuildingClass.A),
            "I apologize, but we currently don't have any properties available in New York.",
        ),
        (
            FilterSet(building_class=BuildingClass.C),
            "I apologize, but Class C properties are not currently available in our portfolio.",
        ),
        (FilterSet(), "I apologize, but I don't have any property information available right now."),
    ],
)
def test_empty_rows_apology_priority(filters: FilterSet, expected: str) -> None:
    reply = format_reply(QueryIntent.property_detail, filters, [], today=TODAY)
    assert reply.text == expected
    assert reply.count == 0


@pytest.mark.parametrize(
    ("floors", "marker"),
    [(20, "high-rise"), (35, "high-rise"), (19, "mid-rise"), (10, "mid-rise"), (9, "low-rise")],
)
def test_floor_thresholds(floors: int, marker: str) -> None:
    text = format_field_value(RequestedField.number_of_floors, floors, "Tower One", current_year=2025)
    assert marker in text
    assert str(floors) in text


def test_building_size_uses_thousands_separator() -> None:
    text = format_field_value(RequestedField.building_size, Decimal("2768591"), "Empire", current_year=2025)
    assert "2,768,591 sq ft" in text


def test_year_built_appends_age() -> None:
    text = format_field_value(RequestedField.year_built, 1931, "Empire State Building", current_year=2025)
    assert text == "Empire State Building was built in 1931 (94 years ago)."


@pytest.mark.parametrize("year", [1900, 0, 1850])
def test_year_renovated_at_or_before_1900_is_not_available(year: int) -> None:
    text = format_field_value(RequestedField.year_renovated, year, "Old Mill", current_year=2025)
    assert text == "Old Mill has not been renovated or renovation year is not available."


def test_year_renovated_after_1900() -> None:
    text = format_field_value(RequestedField.year_renovated, 1901, "Old Mill", current_year=2025)
    assert text == "Old Mill was last renovated in 1901 (124 years ago)."


def test_single_field_reply_uses_row_building_name() -> None:
    filters = FilterSet(building_name="empire state", requested_field=RequestedField.number_of_floors)
    rows = [{"BUILDING_NAME": "Empire State Building", "NUMBER_OF_FLOORS": 102}]
    reply = format_reply(QueryIntent.property_field, filters, rows, today=TODAY)
    assert reply.text.startswith("Empire State Building is an impressive 102-story high-rise")
    assert reply.rows == []


def test_single_field_null_value() -> None:
    filters = FilterSet(building_name="empire state", requested_field=RequestedField.property_sub_type)
    rows = [{"BUILDING_NAME": "Empire State Building", "PROPERTY_SUB_TYPE": None}]
    reply = format_reply(QueryIntent.property_field, filters, rows, today=TODAY)
    assert reply.text == "No property sub type information available for Empire State Building."


def test_landlord_detail() -> None:
    filters = FilterSet(building_name="empire state building")
    rows = [{"BUILDING_NAME": "Empire State Building", "CURRENT_LANDLORD": "ESRT"}]
    reply = format_reply(QueryIntent.landlord_detail, filters, rows, today=TODAY)
    assert reply.text == "The current landlord of Empire State Building is ESRT."


def test_row_shaped_reply_humanizes_column_names() -> None:
    rows = [{"BUILDING_NAME": "Flatiron Building", "YEAR_BUILT": 1902}]
    reply = format_reply(QueryIntent.property_detail, FilterSet(building_name="flatiron building"), rows)
    assert reply.text == "Here's a comprehensive overview of Flatiron Building, a premier commercial property."
    assert reply.rows == [{"BUILDING NAME": "Flatiron Building", "YEAR BUILT": 1902}]
    assert reply.count == 1


def test_average_rent() -> None:
    rows = [{"AVG_RENT": Decimal("54.256"), "LEASE_COUNT": 40}]
    reply = format_reply(QueryIntent.average_rent, FilterSet(city="chicago"), rows, today=TODAY)
    assert reply.text == "The average rent in Chicago is $54.26 per square foot across 40 leases."
    assert reply.rows == [{"AVG RENT": Decimal("54.256"), "LEASE COUNT": 40}]


def test_average_rent_without_leases_apologizes() -> None:
    rows = [{"AVG_RENT": None, "LEASE_COUNT": 0}]
    reply = format_reply(QueryIntent.average_rent, FilterSet(), rows, today=TODAY)
    assert reply.text.startswith("I apologize")


def test_fallback_returns_help_text() -> None:
    assert format_reply(QueryIntent.fallback, FilterSet(), [], today=TODAY).text == HELP_TEXT


def test_formatting_is_deterministic() -> None:
    first = format_reply(QueryIntent.city_list, FilterSet(), _CITY_ROWS, today=TODAY)
    second = format_reply(QueryIntent.city_list, FilterSet(), _CITY_ROWS, today=TODAY)
    assert first.text.encode() == second.text.encode()
    assert first == second
