"""Fixed, parameterized SQL templates.

Each intent maps to literal SQL text with `?` placeholders. Text filters always match case-insensitively
via `UPPER(column) LIKE UPPER(?)`, and every template carries an explicit ORDER BY and LIMIT so the same
data always yields the same rows.
"""

from __future__ import annotations

from dataclasses import dataclass

from cresta.intent.schema import FilterSet, QueryIntent, RequestedField
from cresta.sql.columns import PROPERTY_FIELD_COLUMNS


class TemplateStoreError(ValueError):
    """Raised when an intent/filter combination has no query template."""


@dataclass(frozen=True)
class QuerySpec:
    """A parameterized SQL query ready for execution."""

    sql: str
    params: tuple[str, ...]


_LEASE_WITH_PROPERTY = (
    "SELECT L.*, P.BUILDING_NAME, P.CITY, P.STATE"
    " FROM LEASE L JOIN PROPERTY P ON P.PROPERTY_ID = L.PROPERTY_ID"
)

CITY_LIST_SQL = (
    "SELECT CITY, STATE, COUNT(*) AS PROPERTY_COUNT FROM PROPERTY"
    " WHERE CITY IS NOT NULL GROUP BY CITY, STATE"
    " ORDER BY PROPERTY_COUNT DESC, CITY LIMIT 20"
)
BUILDING_CLASS_LIST_SQL = (
    "SELECT DISTINCT BUILDING_CLASS FROM PROPERTY WHERE BUILDING_CLASS IS NOT NULL"
    " ORDER BY BUILDING_CLASS LIMIT 10"
)
CITY_MENU_SQL = "SELECT DISTINCT CITY FROM PROPERTY WHERE CITY IS NOT NULL ORDER BY CITY LIMIT 15"
CITY_PROPERTY_LIST_SQL = (
    "SELECT BUILDING_NAME, CITY, STATE FROM PROPERTY WHERE UPPER(CITY) LIKE UPPER(?)"
    " ORDER BY BUILDING_NAME LIMIT 20"
)
PROPERTY_DETAIL_SQL = (
    "SELECT * FROM PROPERTY WHERE UPPER(BUILDING_NAME) LIKE UPPER(?) ORDER BY BUILDING_NAME LIMIT 10"
)
LANDLORD_DETAIL_SQL = (
    "SELECT BUILDING_NAME, CURRENT_LANDLORD FROM PROPERTY WHERE UPPER(BUILDING_NAME) LIKE UPPER(?)"
    " ORDER BY BUILDING_NAME LIMIT 10"
)
CLASS_PROPERTY_LIST_SQL = (
    "SELECT BUILDING_NAME FROM PROPERTY WHERE UPPER(BUILDING_CLASS) LIKE UPPER(?)"
    " ORDER BY BUILDING_NAME LIMIT 20"
)
CITY_PROPERTY_DETAIL_SQL = (
    "SELECT * FROM PROPERTY WHERE UPPER(CITY) LIKE UPPER(?) ORDER BY BUILDING_NAME LIMIT 10"
)
LEASE_LIST_SQL = f"{_LEASE_WITH_PROPERTY} ORDER BY L.EXECUTION_DATE DESC LIMIT 10"
LEASE_BY_BUILDING_SQL = (
    f"{_LEASE_WITH_PROPERTY} WHERE UPPER(P.BUILDING_NAME) LIKE UPPER(?)"
    " ORDER BY L.EXECUTION_DATE DESC LIMIT 10"
)
LEASE_BY_CITY_SQL = (
    f"{_LEASE_WITH_PROPERTY} WHERE UPPER(P.CITY) LIKE UPPER(?)"
    " ORDER BY L.EXECUTION_DATE DESC LIMIT 10"
)
AVERAGE_RENT_SQL = (
    "SELECT AVG(RENT_PSF) AS AVG_RENT, COUNT(*) AS LEASE_COUNT FROM LEASE"
    " WHERE RENT_PSF IS NOT NULL ORDER BY AVG_RENT LIMIT 10"
)
AVERAGE_RENT_BY_CITY_SQL = (
    "SELECT AVG(L.RENT_PSF) AS AVG_RENT, COUNT(*) AS LEASE_COUNT"
    " FROM LEASE L JOIN PROPERTY P ON P.PROPERTY_ID = L.PROPERTY_ID"
    " WHERE L.RENT_PSF IS NOT NULL AND UPPER(P.CITY) LIKE UPPER(?) ORDER BY AVG_RENT LIMIT 10"
)

PROPERTY_FIELD_SQL: dict[RequestedField, str] = {
    field: (
        f"SELECT BUILDING_NAME, {column} FROM PROPERTY WHERE UPPER(BUILDING_NAME) LIKE UPPER(?)"
        " ORDER BY BUILDING_NAME LIMIT 10"
    )
    for field, column in PROPERTY_FIELD_COLUMNS.items()
}

# Unfiltered browse queries behind the REST listing endpoints.
BROWSE_PROPERTIES_SQL = "SELECT * FROM PROPERTY ORDER BY BUILDING_NAME LIMIT 100"
BROWSE_LEASES_SQL = "SELECT * FROM LEASE ORDER BY EXECUTION_DATE DESC LIMIT 100"
BROWSE_CITIES_SQL = (
    "SELECT CITY, STATE, COUNT(*) AS PROPERTY_COUNT FROM PROPERTY"
    " WHERE CITY IS NOT NULL GROUP BY CITY, STATE ORDER BY PROPERTY_COUNT DESC, CITY LIMIT 100"
)


def _contains(value: str) -> str:
    return f"%{value}%"


def _require(value: str | None, name: str, intent: QueryIntent) -> str:
    if value is None:
        raise TemplateStoreError(f"{intent} requires {name}")
    return value


def build_query(intent: QueryIntent, filters: FilterSet) -> QuerySpec | None:
    """Look up the SQL template for an intent and bind its parameters.

    Returns `None` for `fallback`, which runs no SQL.
    """

    builders = {
        QueryIntent.city_list: _build_static(CITY_LIST_SQL),
        QueryIntent.building_class_list: _build_static(BUILDING_CLASS_LIST_SQL),
        QueryIntent.property_list_by_city: _build_static(CITY_MENU_SQL),
        QueryIntent.city_property_list: _build_city(CITY_PROPERTY_LIST_SQL),
        QueryIntent.landlord_detail: _build_building(LANDLORD_DETAIL_SQL),
        QueryIntent.property_detail: _build_building(PROPERTY_DETAIL_SQL),
        QueryIntent.property_field: _build_property_field,
        QueryIntent.class_property_list: _build_class_property_list,
        QueryIntent.city_property_detail: _build_city(CITY_PROPERTY_DETAIL_SQL),
        QueryIntent.lease_by_building: _build_building(LEASE_BY_BUILDING_SQL),
        QueryIntent.lease_by_city: _build_city(LEASE_BY_CITY_SQL),
        QueryIntent.lease_list: _build_static(LEASE_LIST_SQL),
        QueryIntent.average_rent: _build_average_rent,
    }

    if intent == QueryIntent.fallback:
        return None

    try:
        builder = builders[intent]
    except KeyError as exc:
        raise TemplateStoreError(f"Unsupported intent: {intent}") from exc

    return builder(intent, filters)


def _build_static(sql: str):
    def build(_intent: QueryIntent, _filters: FilterSet) -> QuerySpec:
        return QuerySpec(sql=sql, params=())

    return build


def _build_city(sql: str):
    def build(intent: QueryIntent, filters: FilterSet) -> QuerySpec:
        city = _require(filters.city, "city", intent)
        return QuerySpec(sql=sql, params=(_contains(city),))

    return build


def _build_building(sql: str):
    def build(intent: QueryIntent, filters: FilterSet) -> QuerySpec:
        name = _require(filters.building_name, "building_name", intent)
        return QuerySpec(sql=sql, params=(_contains(name),))

    return build


def _build_property_field(intent: QueryIntent, filters: FilterSet) -> QuerySpec:
    name = _require(filters.building_name, "building_name", intent)
    if filters.requested_field is None:
        raise TemplateStoreError(f"{intent} requires requested_field")
    return QuerySpec(sql=PROPERTY_FIELD_SQL[filters.requested_field], params=(_contains(name),))


def _build_class_property_list(intent: QueryIntent, filters: FilterSet) -> QuerySpec:
    if filters.building_class is None:
        raise TemplateStoreError(f"{intent} requires building_class")
    return QuerySpec(sql=CLASS_PROPERTY_LIST_SQL, params=(filters.building_class.value,))


def _build_average_rent(_intent: QueryIntent, filters: FilterSet) -> QuerySpec:
    if filters.city is None:
        return QuerySpec(sql=AVERAGE_RENT_SQL, params=())
    return QuerySpec(sql=AVERAGE_RENT_BY_CITY_SQL, params=(_contains(filters.city),))
