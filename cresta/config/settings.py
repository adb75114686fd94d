"""Environment configuration and validation.

This module defines strongly-typed application settings loaded from environment variables
(optionally via a local `.env` file).
"""

from __future__ import annotations

import re

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_SCHEMA_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_$]*$")


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    The text-generation collaborator is optional; without credentials every reply falls back to the
    static response text.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_url: str = Field(alias="DATABASE_URL")
    db_schema: str = Field(default="public", alias="DB_SCHEMA")
    db_pool_max_size: int = Field(default=10, alias="DB_POOL_MAX_SIZE")

    llm_enabled: bool = Field(default=False, alias="LLM_ENABLED")
    llm_api_key: str | None = Field(default=None, alias="LLM_API_KEY")
    llm_model: str = Field(default="gemini-1.5-flash", alias="LLM_MODEL")
    llm_api_base: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        alias="LLM_API_BASE",
    )
    llm_timeout_s: float = Field(default=10.0, alias="LLM_TIMEOUT_S")

    cors_allow_origins: str = Field(default="*", alias="CORS_ALLOW_ORIGINS")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3001, alias="PORT")

    @field_validator("db_schema")
    @classmethod
    def validate_db_schema(cls, value: str) -> str:
        """Validate that the warehouse schema is a plain SQL identifier."""

        if not _SCHEMA_NAME_RE.fullmatch(value):
            raise ValueError("DB_SCHEMA must be a plain SQL identifier")
        return value

    @field_validator("llm_timeout_s")
    @classmethod
    def validate_llm_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("LLM_TIMEOUT_S must be positive")
        return value

    @model_validator(mode="after")
    def validate_llm_config(self) -> Settings:
        """Validate the optional text-generation configuration.

        If text generation is enabled, an API key must be provided.
        """

        if self.llm_enabled and not self.llm_api_key:
            raise ValueError("LLM_API_KEY is required when LLM_ENABLED=true")
        return self

    @property
    def cors_origins(self) -> list[str]:
        """CORS origins parsed from the comma-separated setting."""

        return [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        RuntimeError: If the environment configuration is missing or invalid.
    """

    try:
        return Settings()
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc
