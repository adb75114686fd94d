"""Safe DB query helpers.

Templates are written with `?` placeholders; they are translated to psycopg's `%s` style here, and
every user value travels as a bound parameter.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, LiteralString, cast

from psycopg import AsyncConnection
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from cresta.db.pool import get_conn

Row = dict[str, Any]
RowFetcher = Callable[[str, tuple[Any, ...]], Awaitable[list[Row]]]


def to_psycopg_placeholders(sql: str) -> str:
    """Translate `?` placeholders into `%s`.

    Templates are fixed literals without `?` or `%` inside string constants, so a plain replacement
    is exact.
    """

    return sql.replace("?", "%s")


async def fetch_rows(conn: AsyncConnection, sql: str, params: tuple[Any, ...] = ()) -> list[Row]:
    """Execute a `?`-placeholder query and return rows keyed by upper-cased column names.

    Postgres folds unquoted identifiers to lower case; the warehouse convention (and every consumer of
    these rows) uses upper case.

    DB errors are not swallowed (caller decides how to handle them).
    """

    async with conn.cursor(row_factory=dict_row) as cur:
        await cur.execute(cast(LiteralString, to_psycopg_placeholders(sql)), params)
        rows = await cur.fetchall()

    return [{key.upper(): value for key, value in row.items()} for row in rows]


def make_row_fetcher(pool: AsyncConnectionPool) -> RowFetcher:
    """Bind `fetch_rows` to a pool, one pooled connection per call."""

    async def fetch(sql: str, params: tuple[Any, ...] = ()) -> list[Row]:
        async with get_conn(pool) as conn:
            return await fetch_rows(conn, sql, params)

    return fetch
