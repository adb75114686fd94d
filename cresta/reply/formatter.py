"""Result formatting: rows + intent -> `ChatReply`.

Formatting is deterministic; the same rows and filters always produce the same text. The optional
generated introduction is applied by the caller, not here.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from cresta.intent.schema import FilterSet, QueryIntent, RequestedField
from cresta.reply.models import ChatReply
from cresta.sql.columns import PROPERTY_FIELD_COLUMNS, humanize_column

Row = dict[str, Any]

HELP_TEXT = (
    "I can help you search for specific buildings, cities, building classes (A, B, C), properties, "
    'leases, and rent information. Try: "Show me Class A properties", "Properties in New York", '
    'or "What cities are available?"'
)
CITY_PROMPT_TEXT = "What city would you like to see properties in?"

HIGH_RISE_FLOORS = 20
MID_RISE_FLOORS = 10
# Renovation years at or before this are placeholders in the source data.
RENOVATION_YEAR_FLOOR = 1900

_LIST_INTENTS: frozenset[QueryIntent] = frozenset(
    {
        QueryIntent.city_list,
        QueryIntent.building_class_list,
        QueryIntent.class_property_list,
        QueryIntent.city_property_list,
    }
)


def _display(value: str) -> str:
    return value.title()


def _as_decimal(value: Any) -> Decimal | None:
    if isinstance(value, bool):
        return None
    try:
        return Decimal(str(value).replace(",", "").strip())
    except (InvalidOperation, ValueError):
        return None


def _as_int(value: Any) -> int | None:
    number = _as_decimal(value)
    if number is None or not number.is_finite():
        return None
    return int(number)


def _thousands(value: Any) -> str:
    number = _as_decimal(value)
    if number is None or not number.is_finite():
        return str(value)
    if number == number.to_integral_value():
        return f"{int(number):,}"
    return f"{number:,.2f}"


def humanize_row(row: Row) -> Row:
    """Replace underscores in column names with spaces for display."""

    return {humanize_column(key): value for key, value in row.items()}


def no_data_message(filters: FilterSet) -> str:
    """Apology for an empty result, keyed by the most specific filter present."""

    if filters.building_name:
        return f"I couldn't find any information about {_display(filters.building_name)} in our current portfolio."
    if filters.city:
        return f"I apologize, but we currently don't have any properties available in {_display(filters.city)}."
    if filters.building_class:
        return (
            f"I apologize, but Class {filters.building_class.value} properties are not currently "
            "available in our portfolio."
        )
    return "I apologize, but I don't have any property information available right now."


def format_list_line(index: int, row: Row) -> str:
    """Render one numbered list line; content depends on which columns the row carries."""

    name = row.get("BUILDING_NAME")
    city = row.get("CITY")
    state = row.get("STATE")
    building_class = row.get("BUILDING_CLASS")
    property_count = row.get("PROPERTY_COUNT")

    if building_class and not name:
        body = f"Class {building_class}"
    elif city and state and property_count:
        noun = "property" if _as_int(property_count) == 1 else "properties"
        body = f"{city}, {state} ({property_count} {noun})"
    elif city and state and name:
        body = f"{name} – {city}, {state}"
    elif name:
        body = f"{name}"
    elif city and state:
        body = f"{city}, {state}"
    else:
        body = str(city or "")
    return f"{index}. {body}"


def format_numbered_list(rows: list[Row]) -> str:
    return "\n\n".join(format_list_line(idx, row) for idx, row in enumerate(rows, start=1))


def _list_intro(intent: QueryIntent, filters: FilterSet, rows: list[Row]) -> str:
    if intent == QueryIntent.city_list:
        return "Here are all the cities available in our commercial real estate database:"
    if intent == QueryIntent.building_class_list:
        return "Our portfolio features commercial properties across these building classifications:"
    if intent == QueryIntent.class_property_list and filters.building_class:
        return f"Here are the Class {filters.building_class.value} commercial properties in our portfolio:"
    if len(rows) == 1:
        counted = "Here is 1 commercial property"
    else:
        counted = f"Here are {len(rows)} commercial properties"
    if intent == QueryIntent.city_property_list and filters.city:
        return f"{counted} in {_display(filters.city)}."
    return f"{counted} in our portfolio."


def _floors_sentence(name: str, value: Any) -> str:
    floors = _as_int(value)
    if floors is None:
        return f"{name} has {value} floors."
    if floors >= HIGH_RISE_FLOORS:
        return (
            f"{name} is an impressive {floors}-story high-rise, offering commanding views and "
            "substantial vertical presence in the market."
        )
    if floors >= MID_RISE_FLOORS:
        return f"{name} features {floors} floors, representing a well-proportioned mid-rise structure."
    return f"{name} has {floors} floors, providing a more intimate, low-rise environment."


def _year_built_sentence(name: str, value: Any, current_year: int) -> str:
    year = _as_int(value)
    if year is None:
        return f"{name} was built in {value}."
    return f"{name} was built in {year} ({current_year - year} years ago)."


def _year_renovated_sentence(name: str, value: Any, current_year: int) -> str:
    year = _as_int(value)
    if year is None or year <= RENOVATION_YEAR_FLOOR:
        return f"{name} has not been renovated or renovation year is not available."
    return f"{name} was last renovated in {year} ({current_year - year} years ago)."


def format_field_value(field: RequestedField, value: Any, name: str, *, current_year: int) -> str:
    """Render a single PROPERTY attribute as a sentence."""

    formatters: dict[RequestedField, Callable[[], str]] = {
        RequestedField.building_size: lambda: f"{name} offers {_thousands(value)} sq ft.",
        RequestedField.number_of_floors: lambda: _floors_sentence(name, value),
        RequestedField.year_built: lambda: _year_built_sentence(name, value, current_year),
        RequestedField.year_renovated: lambda: _year_renovated_sentence(name, value, current_year),
        RequestedField.current_landlord: lambda: f"The current landlord of {name} is {value}.",
        RequestedField.property_sub_type: lambda: f"{name} is classified as {value}.",
    }
    return formatters[field]()


def _format_single_field(field: RequestedField, filters: FilterSet, rows: list[Row], today: date) -> ChatReply:
    row = rows[0]
    column = PROPERTY_FIELD_COLUMNS[field]
    name = str(row.get("BUILDING_NAME") or _display(filters.building_name or "this property"))

    if column not in row:
        return ChatReply(
            text=f"Here are all available details for {name}:",
            rows=[humanize_row(r) for r in rows],
            count=len(rows),
        )

    value = row[column]
    if value is None or value == "":
        return ChatReply(text=f"No {humanize_column(column).lower()} information available for {name}.")

    return ChatReply(text=format_field_value(field, value, name, current_year=today.year))


def _average_rent_text(filters: FilterSet, row: Row) -> str | None:
    average = _as_decimal(row.get("AVG_RENT"))
    if average is None:
        return None
    where = f" in {_display(filters.city)}" if filters.city else ""
    lease_count = _as_int(row.get("LEASE_COUNT"))
    across = f" across {lease_count} leases" if lease_count else ""
    return f"The average rent{where} is ${average:,.2f} per square foot{across}."


def static_response_text(intent: QueryIntent, filters: FilterSet) -> str:
    """Fixed introduction for row-shaped intents."""

    name = _display(filters.building_name) if filters.building_name else "this property"
    city = _display(filters.city) if filters.city else "this city"
    texts = {
        QueryIntent.property_detail: f"Here's a comprehensive overview of {name}, a premier commercial property.",
        QueryIntent.city_property_detail: f"Properties in {city}:",
        QueryIntent.lease_list: "Here are the most recent leases in our portfolio:",
        QueryIntent.lease_by_building: f"Here are the most recent leases at {name}:",
        QueryIntent.lease_by_city: f"Here are the most recent leases in {city}:",
        QueryIntent.average_rent: "Here is the average rent per square foot:",
    }
    return texts.get(intent, "Here is what I found:")


def format_reply(
        intent: QueryIntent,
        filters: FilterSet,
        rows: list[Row],
        *,
        today: date | None = None,
) -> ChatReply:
    """Shape raw rows into a `ChatReply` for the given intent."""

    today = today or date.today()

    if intent == QueryIntent.fallback:
        return ChatReply(text=HELP_TEXT)

    if not rows:
        return ChatReply(text=no_data_message(filters))

    if intent == QueryIntent.property_list_by_city:
        cities = [str(row["CITY"]) for row in rows if row.get("CITY")]
        return ChatReply(text=CITY_PROMPT_TEXT, suggestions=cities, show_city_popup=True)

    if intent in _LIST_INTENTS:
        text = f"{_list_intro(intent, filters, rows)}\n\n{format_numbered_list(rows)}"
        return ChatReply(text=text, count=len(rows))

    if intent == QueryIntent.landlord_detail:
        return _format_single_field(RequestedField.current_landlord, filters, rows, today)

    if intent == QueryIntent.property_field and filters.requested_field is not None:
        return _format_single_field(filters.requested_field, filters, rows, today)

    if intent == QueryIntent.average_rent:
        text = _average_rent_text(filters, rows[0])
        if text is None:
            return ChatReply(text=no_data_message(filters))
        return ChatReply(text=text, rows=[humanize_row(r) for r in rows], count=len(rows))

    return ChatReply(
        text=static_response_text(intent, filters),
        rows=[humanize_row(r) for r in rows],
        count=len(rows),
    )
