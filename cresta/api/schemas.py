"""HTTP request/response models for the chat API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from cresta.reply.models import ChatReply


class ChatRequest(BaseModel):
    """Inbound chat message.

    `message` is optional at the model level so a missing value is answered with the API's own 400
    error body instead of a validation error.
    """

    message: str | None = None


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    response: str
    data: list[dict[str, Any]] = Field(default_factory=list)
    count: int = 0
    suggestions: list[str] | None = None
    show_city_popup: bool | None = Field(default=None, alias="showCityPopup")

    @classmethod
    def from_reply(cls, reply: ChatReply) -> ChatResponse:
        return cls(
            response=reply.text,
            data=reply.rows,
            count=reply.count,
            suggestions=reply.suggestions,
            show_city_popup=reply.show_city_popup,
        )


class RowsResponse(BaseModel):
    data: list[dict[str, Any]]
    count: int


class ErrorResponse(BaseModel):
    error: str
