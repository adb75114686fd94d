"""Prompt construction for the optional narrative introduction."""

from __future__ import annotations

import json
from typing import Any

from cresta.intent.schema import QueryIntent

# Row-shaped intents whose static text may be replaced by a generated introduction.
NARRATIVE_INTENTS: frozenset[QueryIntent] = frozenset(
    {
        QueryIntent.property_detail,
        QueryIntent.city_property_detail,
        QueryIntent.lease_list,
        QueryIntent.lease_by_building,
        QueryIntent.lease_by_city,
        QueryIntent.average_rent,
    }
)

SAMPLE_ROWS = 3


def build_narrative_prompt(message: str, rows: list[dict[str, Any]]) -> str:
    """Embed the user's question and a small JSON sample of the result rows."""

    sample = json.dumps(rows[:SAMPLE_ROWS], default=str, indent=2, sort_keys=True)
    return (
        "You are Cresta, a commercial real estate assistant.\n"
        f'A user asked: "{message}"\n'
        f"The database returned {len(rows)} row(s). Here is a sample:\n"
        f"{sample}\n"
        "Write a 2-3 sentence professional introduction to these results. "
        "Do not invent figures that are not in the data and do not use markdown."
    )
