"""Allowlisted PROPERTY columns for single-field questions.

Every column name in a single-field template comes from this mapping; no user-provided identifier is
ever interpolated into SQL.
"""

from __future__ import annotations

from cresta.intent.schema import RequestedField

PROPERTY_FIELD_COLUMNS: dict[RequestedField, str] = {
    RequestedField.building_size: "BUILDING_SIZE",
    RequestedField.number_of_floors: "NUMBER_OF_FLOORS",
    RequestedField.year_built: "YEAR_BUILT",
    RequestedField.year_renovated: "YEAR_RENOVATED",
    RequestedField.current_landlord: "CURRENT_LANDLORD",
    RequestedField.property_sub_type: "PROPERTY_SUB_TYPE",
}


def humanize_column(name: str) -> str:
    """Display form of a column name (`YEAR_BUILT` -> `YEAR BUILT`)."""

    return name.replace("_", " ")
