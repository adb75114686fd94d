"""Application composition root.

This module wires together configuration, the DB pool and the optional text generator for the HTTP
runtime.
"""

from __future__ import annotations

from dataclasses import dataclass

from psycopg_pool import AsyncConnectionPool

from cresta.config.settings import Settings
from cresta.db.pool import create_pool
from cresta.llm.client import TextGenerator, llm_config_from_settings, make_text_generator


@dataclass(frozen=True)
class App:
    """Shared application dependencies for request handlers."""

    settings: Settings
    pool: AsyncConnectionPool
    text_generator: TextGenerator | None = None


def create_app(settings: Settings) -> App:
    """Create the application container.

    Note:
        The returned DB pool is not opened. Call `await app.pool.open()` at startup.
    """

    pool = create_pool(
        settings.database_url,
        schema=settings.db_schema,
        max_size=settings.db_pool_max_size,
    )
    llm_config = llm_config_from_settings(settings)
    text_generator = make_text_generator(llm_config) if llm_config is not None else None
    return App(settings=settings, pool=pool, text_generator=text_generator)
