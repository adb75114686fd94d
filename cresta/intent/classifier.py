"""Rule-ordered intent classifier.

Rules are evaluated top to bottom and the first match wins. Building-identified questions are the most
specific and come first; topic words such as "properties" or "cities" only trigger list intents when a
discovery verb is present.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from cresta.intent.dictionaries import (
    BUILDING_CLASS_TERMS,
    CITY_TERMS,
    DISCLOSURE_VERBS,
    DISCOVERY_VERBS,
    LANDLORD_TERMS,
    LEASE_TERMS,
    PROPERTY_TERMS,
    RENT_TERMS,
)
from cresta.intent.normalize import has_word, normalize_text
from cresta.intent.schema import FilterSet, QueryIntent


@dataclass(frozen=True)
class MessageContext:
    """Normalized message plus its extracted filters, as seen by the rules."""

    text: str
    filters: FilterSet

    def mentions(self, *words: str) -> bool:
        return has_word(self.text, *words)

    @property
    def has_discovery_verb(self) -> bool:
        return self.mentions(*DISCOVERY_VERBS)

    @property
    def is_lease_or_rent_topic(self) -> bool:
        return self.mentions(*LEASE_TERMS) or self.mentions(*RENT_TERMS)


@dataclass(frozen=True)
class Rule:
    """A named classifier rule."""

    intent: QueryIntent
    matches: Callable[[MessageContext], bool]
    description: str


def _landlord_detail(ctx: MessageContext) -> bool:
    return (
            ctx.filters.building_name is not None
            and ctx.mentions(*LANDLORD_TERMS)
            and ctx.mentions(*DISCLOSURE_VERBS)
    )


def _city_list(ctx: MessageContext) -> bool:
    return ctx.mentions(*CITY_TERMS) and ctx.has_discovery_verb


def _building_class_list(ctx: MessageContext) -> bool:
    return ctx.mentions(*BUILDING_CLASS_TERMS) and ctx.has_discovery_verb


def _property_list_by_city(ctx: MessageContext) -> bool:
    # Requests already narrowed by building class skip the city menu.
    return (
            ctx.mentions(*PROPERTY_TERMS)
            and ctx.filters.city is None
            and ctx.filters.building_class is None
            and ctx.has_discovery_verb
    )


def _city_property_list(ctx: MessageContext) -> bool:
    return ctx.mentions(*PROPERTY_TERMS) and ctx.filters.city is not None and ctx.has_discovery_verb


def _property_by_name(ctx: MessageContext) -> bool:
    return ctx.filters.building_name is not None and not ctx.is_lease_or_rent_topic


def _property_detail(ctx: MessageContext) -> bool:
    return _property_by_name(ctx) and ctx.filters.requested_field is None


def _property_field(ctx: MessageContext) -> bool:
    return _property_by_name(ctx) and ctx.filters.requested_field is not None


def _class_property_list(ctx: MessageContext) -> bool:
    return ctx.filters.building_class is not None and not ctx.is_lease_or_rent_topic


def _city_property_detail(ctx: MessageContext) -> bool:
    return ctx.filters.city is not None and not ctx.is_lease_or_rent_topic


def _lease_by_building(ctx: MessageContext) -> bool:
    return ctx.mentions(*LEASE_TERMS) and ctx.filters.building_name is not None


def _lease_by_city(ctx: MessageContext) -> bool:
    return ctx.mentions(*LEASE_TERMS) and ctx.filters.city is not None


def _lease_list(ctx: MessageContext) -> bool:
    return ctx.mentions(*LEASE_TERMS) and ctx.has_discovery_verb


def _average_rent(ctx: MessageContext) -> bool:
    return ctx.mentions(*RENT_TERMS) and ctx.has_discovery_verb


RULES: tuple[Rule, ...] = (
    Rule(QueryIntent.landlord_detail, _landlord_detail, "building + landlord/owner + disclosure verb"),
    Rule(QueryIntent.city_list, _city_list, "cities + discovery verb"),
    Rule(QueryIntent.building_class_list, _building_class_list, "building class + discovery verb"),
    Rule(QueryIntent.property_list_by_city, _property_list_by_city, "properties, no city, no class"),
    Rule(QueryIntent.city_property_list, _city_property_list, "properties + city"),
    Rule(QueryIntent.property_field, _property_field, "building + requested field"),
    Rule(QueryIntent.property_detail, _property_detail, "building"),
    Rule(QueryIntent.class_property_list, _class_property_list, "building class"),
    Rule(QueryIntent.city_property_detail, _city_property_detail, "city"),
    Rule(QueryIntent.lease_by_building, _lease_by_building, "lease + building"),
    Rule(QueryIntent.lease_by_city, _lease_by_city, "lease + city"),
    Rule(QueryIntent.lease_list, _lease_list, "lease + discovery verb"),
    Rule(QueryIntent.average_rent, _average_rent, "rent/price + discovery verb"),
)


def classify(message: str | None, filters: FilterSet) -> QueryIntent:
    """Select exactly one intent for a message; `fallback` when no rule matches."""

    ctx = MessageContext(text=normalize_text(message), filters=filters)
    for rule in RULES:
        if rule.matches(ctx):
            return rule.intent
    return QueryIntent.fallback
