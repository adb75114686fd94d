"""Message -> (filters, intent, query) resolution."""

from __future__ import annotations

from dataclasses import dataclass

from cresta.intent.classifier import classify
from cresta.intent.extractor import extract_filters
from cresta.intent.schema import FilterSet, QueryIntent
from cresta.sql.templates import QuerySpec, build_query


@dataclass(frozen=True)
class Resolution:
    """Everything derived from a message before any data is fetched."""

    filters: FilterSet
    intent: QueryIntent
    query: QuerySpec | None


def resolve_message(message: str | None) -> Resolution:
    """Resolve a chat message into filters, an intent and its bound query (`None` for fallback)."""

    filters = extract_filters(message)
    intent = classify(message, filters)
    return Resolution(filters=filters, intent=intent, query=build_query(intent, filters))
