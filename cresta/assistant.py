"""Chat pipeline: message -> resolution -> rows -> reply.

The pipeline is a function of the message and two collaborators: a row fetcher (the warehouse) and an
optional text generator. Row-fetcher failures propagate to the caller; text-generation failures only
cost the narrative introduction.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

from cresta.db.query import Row, RowFetcher
from cresta.intent.resolver import Resolution, resolve_message
from cresta.llm.client import TextGenerator
from cresta.reply.formatter import format_reply
from cresta.reply.models import ChatReply
from cresta.reply.narrative import NARRATIVE_INTENTS, build_narrative_prompt

logger = logging.getLogger(__name__)

DEFAULT_NARRATIVE_TIMEOUT_S = 10.0


@dataclass(frozen=True)
class AnswerResult:
    """Reply plus the resolution that produced it."""

    resolution: Resolution
    reply: ChatReply
    narrated: bool = False


async def _narrate(
        message: str,
        rows: list[Row],
        *,
        generate_text: TextGenerator,
        timeout_s: float,
) -> str | None:
    prompt = build_narrative_prompt(message, rows)
    try:
        text: Any = await asyncio.wait_for(generate_text(prompt), timeout=timeout_s)
    except TimeoutError:
        logger.warning("narrative generation timed out timeout_s=%.1f", timeout_s)
        return None
    except Exception as exc:  # noqa: BLE001 - any generator failure degrades to static text
        logger.warning("narrative generation failed reason=%s", exc)
        return None

    if not isinstance(text, str) or not text.strip():
        return None
    return text.strip()


async def answer_with_resolution(
        message: str,
        *,
        fetch_rows: RowFetcher,
        generate_text: TextGenerator | None = None,
        narrative_timeout_s: float = DEFAULT_NARRATIVE_TIMEOUT_S,
        today: date | None = None,
) -> AnswerResult:
    """Answer a chat message.

    Strategy:
        1) Resolve filters, intent and query; `fallback` returns help text without touching the DB.
        2) Fetch rows and format them deterministically.
        3) For row-shaped intents with data, optionally replace the static text with a generated
           introduction, bounded by `narrative_timeout_s`.
    """

    resolution = resolve_message(message)
    if resolution.query is None:
        reply = format_reply(resolution.intent, resolution.filters, [], today=today)
        return AnswerResult(resolution=resolution, reply=reply)

    rows = await fetch_rows(resolution.query.sql, resolution.query.params)
    reply = format_reply(resolution.intent, resolution.filters, rows, today=today)

    if generate_text is None or not reply.rows or resolution.intent not in NARRATIVE_INTENTS:
        return AnswerResult(resolution=resolution, reply=reply)

    intro = await _narrate(message, rows, generate_text=generate_text, timeout_s=narrative_timeout_s)
    if intro is None:
        return AnswerResult(resolution=resolution, reply=reply)

    return AnswerResult(resolution=resolution, reply=reply.model_copy(update={"text": intro}), narrated=True)


async def answer(
        message: str,
        *,
        fetch_rows: RowFetcher,
        generate_text: TextGenerator | None = None,
        narrative_timeout_s: float = DEFAULT_NARRATIVE_TIMEOUT_S,
        today: date | None = None,
) -> ChatReply:
    """Answer a chat message (convenience wrapper)."""

    result = await answer_with_resolution(
        message,
        fetch_rows=fetch_rows,
        generate_text=generate_text,
        narrative_timeout_s=narrative_timeout_s,
        today=today,
    )
    return result.reply
