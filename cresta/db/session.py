"""DB session configuration helpers.

Warehouse tables (PROPERTY, LEASE) are referenced unqualified in every template, so each session must
resolve them against the configured schema.
"""

from __future__ import annotations

from psycopg import AsyncConnection, sql


async def set_search_path(conn: AsyncConnection, schema: str) -> None:
    """Point the current Postgres session at the warehouse schema."""

    statement = sql.SQL("SET search_path TO {}").format(sql.Identifier(schema))
    async with conn.cursor() as cur:
        await cur.execute(statement, prepare=False)
    # `SET` starts a transaction when autocommit is disabled; commit so the pool doesn't see INTRANS.
    await conn.commit()
