"""Tests for the HTTP transport contract.

Every successful chat reply carries a non-empty `response`; missing input is a 400 and warehouse failures
are a generic 500 that never leaks driver details.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest
from fastapi.testclient import TestClient

from cresta.api.server import WELCOME_MESSAGE, create_api


def _make_app(text_generator: Any = None) -> Any:
    return SimpleNamespace(
        settings=SimpleNamespace(llm_timeout_s=1.0, cors_origins=["*"], db_schema="public"),
        pool=object(),
        text_generator=text_generator,
    )


def _client(
        monkeypatch: pytest.MonkeyPatch,
        rows: list[dict[str, Any]] | Exception,
        *,
        text_generator: Any = None,
) -> TestClient:
    async def _fetch(_sql: str, _params: tuple[Any, ...] = ()) -> list[dict[str, Any]]:
        if isinstance(rows, Exception):
            raise rows
        return rows

    monkeypatch.setattr("cresta.api.server.make_row_fetcher", lambda _pool: _fetch)
    # Used without a context manager so the lifespan (pool open/close) does not run.
    return TestClient(create_api(_make_app(text_generator)))


@pytest.mark.parametrize("body", [{}, {"message": ""}, {"message": "   "}, {"message": None}])
def test_chat_requires_message(monkeypatch: pytest.MonkeyPatch, body: dict[str, Any]) -> None:
    client = _client(monkeypatch, [])

    resp = client.post("/api/chat", json=body)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Message is required"}


def test_chat_rejects_get(monkeypatch: pytest.MonkeyPatch) -> None:
    client = _client(monkeypatch, [])

    assert client.get("/api/chat").status_code == 405


def test_chat_city_list(monkeypatch: pytest.MonkeyPatch) -> None:
    client = _client(monkeypatch, [{"CITY": "New York", "STATE": "NY", "PROPERTY_COUNT": 4}])

    resp = client.post("/api/chat", json={"message": "What cities are available?"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["response"].endswith("1. New York, NY (4 properties)")
    assert body["data"] == []
    assert body["count"] == 1
    assert "suggestions" not in body
    assert "showCityPopup" not in body


def test_chat_city_menu_uses_camel_case_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    client = _client(monkeypatch, [{"CITY": "Boston"}])

    body = client.post("/api/chat", json={"message": "Show me properties"}).json()

    assert body["showCityPopup"] is True
    assert body["suggestions"] == ["Boston"]
    assert body["response"] == "What city would you like to see properties in?"


def test_chat_narrative_failure_still_answers(monkeypatch: pytest.MonkeyPatch) -> None:
    async def _failing(_prompt: str) -> str:
        raise RuntimeError("quota exceeded")

    client = _client(
        monkeypatch,
        [{"BUILDING_NAME": "Flatiron Building", "YEAR_BUILT": 1902}],
        text_generator=_failing,
    )

    body = client.post("/api/chat", json={"message": "Tell me about the Flatiron Building"}).json()

    assert body["response"] == (
        "Here's a comprehensive overview of Flatiron Building, a premier commercial property."
    )
    assert body["data"] == [{"BUILDING NAME": "Flatiron Building", "YEAR BUILT": 1902}]
    assert body["count"] == 1


def test_chat_database_failure_is_generic(monkeypatch: pytest.MonkeyPatch) -> None:
    client = _client(monkeypatch, RuntimeError("password authentication failed for user"))

    resp = client.post("/api/chat", json={"message": "What cities are available?"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Database query failed"}


def test_fallback_never_touches_database(monkeypatch: pytest.MonkeyPatch) -> None:
    client = _client(monkeypatch, RuntimeError("should not be called"))

    body = client.post("/api/chat", json={"message": "hello"}).json()

    assert body["response"].startswith("I can help you search")
    assert body["count"] == 0


def test_browse_endpoints(monkeypatch: pytest.MonkeyPatch) -> None:
    client = _client(monkeypatch, [{"BUILDING_NAME": "Willis Tower"}])

    for path in ("/api/properties", "/api/leases", "/api/cities"):
        resp = client.get(path)
        assert resp.status_code == 200
        assert resp.json() == {"data": [{"BUILDING_NAME": "Willis Tower"}], "count": 1}


def test_welcome(monkeypatch: pytest.MonkeyPatch) -> None:
    client = _client(monkeypatch, [])

    assert client.get("/api/welcome").json() == {"message": WELCOME_MESSAGE}


def test_health_reports_degraded_database(monkeypatch: pytest.MonkeyPatch) -> None:
    client = _client(monkeypatch, RuntimeError("unreachable"))

    body = client.get("/api/health").json()

    assert body["status"] == "degraded"
    assert body["database"] == "unavailable"
    assert body["llm"] == "disabled"


def test_cors_preflight(monkeypatch: pytest.MonkeyPatch) -> None:
    client = _client(monkeypatch, [])

    resp = client.options(
        "/api/chat",
        headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "POST"},
    )

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"
