"""Intent and filter models (Pydantic).

These models are the contract between the extractor/classifier and the SQL template store.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class BuildingClass(StrEnum):
    """Commercial building classification."""

    A = "A"
    B = "B"
    C = "C"


class RequestedField(StrEnum):
    """Single PROPERTY attribute a user can ask for; values are the warehouse column names."""

    building_size = "BUILDING_SIZE"
    number_of_floors = "NUMBER_OF_FLOORS"
    year_built = "YEAR_BUILT"
    year_renovated = "YEAR_RENOVATED"
    current_landlord = "CURRENT_LANDLORD"
    property_sub_type = "PROPERTY_SUB_TYPE"


class QueryIntent(StrEnum):
    """Closed set of query intents, one per classifier rule."""

    landlord_detail = "landlord_detail"
    city_list = "city_list"
    building_class_list = "building_class_list"
    property_list_by_city = "property_list_by_city"
    city_property_list = "city_property_list"
    property_detail = "property_detail"
    property_field = "property_field"
    class_property_list = "class_property_list"
    city_property_detail = "city_property_detail"
    lease_by_building = "lease_by_building"
    lease_by_city = "lease_by_city"
    lease_list = "lease_list"
    average_rent = "average_rent"
    fallback = "fallback"


class FilterSet(BaseModel):
    """Structured fields extracted from one chat message.

    Absent values are `None`; extraction never fails.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    building_class: BuildingClass | None = None
    city: str | None = None
    building_name: str | None = None
    requested_field: RequestedField | None = None
    is_detail_request: bool = False
