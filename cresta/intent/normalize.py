"""Text normalization for deterministic intent parsing."""

from __future__ import annotations

import re

_NON_WORD_RE = re.compile(r"[^a-z0-9\s]+")
_MULTISPACE_RE = re.compile(r"\s+")


def normalize_text(text: str | None) -> str:
    """Normalize user text for rules-based parsing.

    Normalization:
        - Lowercase.
        - Replace every character outside `[a-z0-9]` and whitespace with a space.
        - Collapse whitespace and trim.
    """

    value = (text or "").lower()
    value = _NON_WORD_RE.sub(" ", value)
    return _MULTISPACE_RE.sub(" ", value).strip()


def collapse_spaces(text: str) -> str:
    """Trim a captured span and collapse its internal whitespace."""

    return _MULTISPACE_RE.sub(" ", text).strip()


def has_word(text: str, *words: str) -> bool:
    """Whether any of `words` (single words or phrases) occurs in `text` on word boundaries."""

    padded = f" {text} "
    return any(f" {word} " in padded for word in words)
