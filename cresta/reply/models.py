"""Reply model produced by the chat pipeline."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChatReply(BaseModel):
    """A chat answer: prose plus the rows backing it.

    `suggestions` and `show_city_popup` are only set when the reply asks the user to pick a city.
    """

    model_config = ConfigDict(extra="forbid")

    text: str
    rows: list[dict[str, Any]] = Field(default_factory=list)
    count: int = 0
    suggestions: list[str] | None = None
    show_city_popup: bool | None = None
