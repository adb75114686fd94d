"""Text-generation client (Google Generative Language API, feature-flagged).

The model only ever writes a short prose introduction for rows the warehouse already returned; it never
sees or produces SQL.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from cresta.config.settings import Settings

TextGenerator = Callable[[str], Awaitable[str]]


class TextGenerationError(RuntimeError):
    """Raised when the text-generation API fails to return usable text."""


@dataclass(frozen=True)
class LLMConfig:
    """Configuration for the `generateContent` API call."""

    api_key: str
    model: str = "gemini-1.5-flash"
    api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    timeout_s: float = 10.0


def _generate_content_url(config: LLMConfig) -> str:
    return (
        f"{config.api_base.rstrip('/')}/models/{quote(config.model, safe='')}:generateContent"
        f"?key={quote(config.api_key, safe='')}"
    )


def generate_text(prompt: str, *, config: LLMConfig) -> str:
    """Call the API and return the first candidate's text."""

    payload = {"contents": [{"parts": [{"text": prompt}]}]}

    req = Request(
        _generate_content_url(config),
        method="POST",
        headers={"Content-Type": "application/json"},
        data=json.dumps(payload).encode(),
    )

    try:
        with urlopen(req, timeout=config.timeout_s) as resp:  # noqa: S310 (explicit, feature-flagged network call)
            body = resp.read()
    except HTTPError as exc:
        raise TextGenerationError(f"LLM HTTP error: {exc.code}") from exc
    except (URLError, TimeoutError) as exc:
        raise TextGenerationError("LLM connection error") from exc

    try:
        decoded = json.loads(body)
        text = decoded["candidates"][0]["content"]["parts"][0]["text"]
    except Exception as exc:  # noqa: BLE001
        raise TextGenerationError("Unexpected LLM response format") from exc

    text = (text or "").strip()
    if not text:
        raise TextGenerationError("LLM returned empty text")
    return text


def make_text_generator(config: LLMConfig) -> TextGenerator:
    """Wrap the blocking HTTP call so callers can bound it with an asyncio timeout."""

    async def generate(prompt: str) -> str:
        return await asyncio.to_thread(generate_text, prompt, config=config)

    return generate


def llm_config_from_settings(settings: Settings) -> LLMConfig | None:
    """Build the client config, or `None` when text generation is disabled or has no credentials."""

    if not settings.llm_enabled or not settings.llm_api_key:
        return None
    return LLMConfig(
        api_key=settings.llm_api_key,
        model=settings.llm_model,
        api_base=settings.llm_api_base,
        timeout_s=settings.llm_timeout_s,
    )
