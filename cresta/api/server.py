"""FastAPI transport for the chat assistant.

Hard contract: a chat reply always carries a non-empty `response`. Missing input is rejected with 400
before reaching the pipeline; warehouse failures surface as a generic 500 and are logged internally.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from time import monotonic
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cresta import __version__
from cresta.api.schemas import ChatRequest, ChatResponse, ErrorResponse, RowsResponse
from cresta.app import App
from cresta.assistant import answer_with_resolution
from cresta.db.query import make_row_fetcher
from cresta.sql.templates import BROWSE_CITIES_SQL, BROWSE_LEASES_SQL, BROWSE_PROPERTIES_SQL

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "Hello! I'm Cresta, your AI-powered commercial real estate assistant. I can provide you with a "
    "list of commercial properties and their details, all within the United States. What would you "
    "like to explore today?"
)

router = APIRouter(prefix="/api")


def get_app(request: Request) -> App:
    return request.app.state.cresta


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@router.post(
    "/chat",
    response_model=ChatResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(payload: ChatRequest, app: App = Depends(get_app)) -> Any:
    """Answer one free-text chat message."""

    message = (payload.message or "").strip()
    if not message:
        return _error(400, "Message is required")

    started = monotonic()
    # noinspection PyBroadException
    try:
        result = await answer_with_resolution(
            message,
            fetch_rows=make_row_fetcher(app.pool),
            generate_text=app.text_generator,
            narrative_timeout_s=app.settings.llm_timeout_s,
        )
    except Exception:
        # Handler boundary: never leak SQL or driver details to the user.
        logger.exception("chat handler failed")
        return _error(500, "Database query failed")

    latency_ms = int((monotonic() - started) * 1000)
    logger.info(
        "handled intent=%s rows=%d narrated=%s latency_ms=%d",
        result.resolution.intent,
        len(result.reply.rows),
        result.narrated,
        latency_ms,
    )
    return ChatResponse.from_reply(result.reply)


async def _browse(app: App, sql: str) -> Any:
    # noinspection PyBroadException
    try:
        rows = await make_row_fetcher(app.pool)(sql, ())
    except Exception:
        logger.exception("browse query failed")
        return _error(500, "Database query failed")
    return RowsResponse(data=rows, count=len(rows))


@router.get("/properties", response_model=RowsResponse, responses={500: {"model": ErrorResponse}})
async def list_properties(app: App = Depends(get_app)) -> Any:
    return await _browse(app, BROWSE_PROPERTIES_SQL)


@router.get("/leases", response_model=RowsResponse, responses={500: {"model": ErrorResponse}})
async def list_leases(app: App = Depends(get_app)) -> Any:
    return await _browse(app, BROWSE_LEASES_SQL)


@router.get("/cities", response_model=RowsResponse, responses={500: {"model": ErrorResponse}})
async def list_cities(app: App = Depends(get_app)) -> Any:
    return await _browse(app, BROWSE_CITIES_SQL)


@router.get("/welcome")
async def welcome() -> dict[str, str]:
    return {"message": WELCOME_MESSAGE}


@router.get("/health")
async def health(app: App = Depends(get_app)) -> dict[str, Any]:
    """Report configuration status and whether the warehouse answers a trivial query."""

    database = "ok"
    # noinspection PyBroadException
    try:
        await make_row_fetcher(app.pool)("SELECT 1 AS OK", ())
    except Exception:
        logger.warning("health check: database unreachable", exc_info=True)
        database = "unavailable"

    return {
        "status": "ok" if database == "ok" else "degraded",
        "version": __version__,
        "database": database,
        "schema": app.settings.db_schema,
        "llm": "enabled" if app.text_generator is not None else "disabled",
        "timestamp": datetime.now(UTC).isoformat(),
    }


def create_api(app: App) -> FastAPI:
    """Build the FastAPI application around an `App` container.

    The DB pool is opened on startup and closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(_api: FastAPI):
        await app.pool.open(wait=True)
        try:
            yield
        finally:
            logger.info("shutting down")
            await app.pool.close()

    api = FastAPI(title="Cresta", version=__version__, lifespan=lifespan)
    api.state.cresta = app
    api.add_middleware(
        CORSMiddleware,
        allow_origins=app.settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    api.include_router(router)
    return api
