"""Async Postgres connection pool.

The chat pipeline uses an async pool (psycopg3) owned by the application container. Every acquired
connection is configured to resolve warehouse tables in the configured schema.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool

from cresta.db.session import set_search_path


def create_pool(
        database_url: str,
        *,
        schema: str = "public",
        min_size: int = 1,
        max_size: int | None = None,
        timeout: float = 30.0,
) -> AsyncConnectionPool:
    """Create an async DB pool.

    The returned pool is created with `open=False`. Call `await pool.open()` at startup.
    """

    async def configure(conn: AsyncConnection) -> None:
        await set_search_path(conn, schema)

    return AsyncConnectionPool(
        conninfo=database_url,
        min_size=min_size,
        max_size=max_size,
        timeout=timeout,
        open=False,
        configure=configure,
    )


@asynccontextmanager
async def get_conn(pool: AsyncConnectionPool) -> AsyncIterator[AsyncConnection]:
    """Acquire a pooled connection."""

    async with pool.connection() as conn:
        yield conn
