"""
tests.api.test_correlation_id

Purpose:
    Regression tests for correlation-id propagation.

Covers:
    - Generated ids are UUIDs and differ between requests
    - Incoming ids are echoed verbatim (not regenerated)
    - The id is visible to handler code through the ambient context
    - The ambient context is cleared on success and on exceptions
"""

from __future__ import annotations

import asyncio
import logging
import uuid

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from hello_service.api.logging.correlation_context import correlation_scope, get_correlation_id
from hello_service.api.logging.correlation_id_filter import CorrelationIdFilter
from hello_service.api.main import create_app
from hello_service.api.middleware.correlation_id import (
    CorrelationIdMiddleware,
    generate_correlation_id,
)

HEADER = "X-Correlation-ID"


def _probe_app(settings_factory):
    app = create_app(settings_factory())

    def probe() -> dict:
        return {"correlation_id": get_correlation_id()}

    app.add_api_route("/probe", probe)
    return app


def test_generated_id_is_uuid_and_unique(client) -> None:
    seen = set()
    for _ in range(5):
        r = client.get("/hello")
        cid = r.headers[HEADER]
        assert str(uuid.UUID(cid)) == cid
        seen.add(cid)
    assert len(seen) == 5


def test_incoming_id_is_echoed(client) -> None:
    r = client.get("/hello", headers={HEADER: "test-123"})
    assert r.headers[HEADER] == "test-123"


def test_header_lookup_is_case_insensitive(client) -> None:
    r = client.get("/hello", headers={"x-correlation-id": "lower-case"})
    assert r.headers[HEADER] == "lower-case"


def test_blank_incoming_id_is_replaced(client) -> None:
    r = client.get("/hello", headers={HEADER: "   "})
    cid = r.headers[HEADER]
    assert cid.strip()
    uuid.UUID(cid)


def test_handler_sees_bound_id(settings_factory) -> None:
    with TestClient(_probe_app(settings_factory)) as client:
        r = client.get("/probe", headers={HEADER: "abc-1"})
        assert r.json() == {"correlation_id": "abc-1"}

        r2 = client.get("/probe")
        assert r2.json()["correlation_id"] == r2.headers[HEADER]


def test_context_cleared_after_success_and_failure() -> None:
    mw = CorrelationIdMiddleware(app=PlainTextResponse("unused"))

    def _request(headers: list[tuple[bytes, bytes]]) -> Request:
        return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})

    async def ok(request: Request) -> PlainTextResponse:
        assert get_correlation_id() == "req-1"
        return PlainTextResponse("ok")

    async def boom(request: Request) -> PlainTextResponse:
        assert get_correlation_id() == "req-2"
        raise RuntimeError("handler failed")

    async def scenario() -> list:
        observed = []
        response = await mw.dispatch(_request([(b"x-correlation-id", b"req-1")]), ok)
        assert response.headers[HEADER] == "req-1"
        observed.append(get_correlation_id())

        with pytest.raises(RuntimeError):
            await mw.dispatch(_request([(b"x-correlation-id", b"req-2")]), boom)
        observed.append(get_correlation_id())
        return observed

    assert asyncio.run(scenario()) == [None, None]


def test_generation_failure_falls_back_to_sentinel(monkeypatch) -> None:
    def broken():
        raise OSError("no entropy")

    monkeypatch.setattr("hello_service.api.middleware.correlation_id.uuid.uuid4", broken)
    assert generate_correlation_id() == "unavailable"


def test_log_filter_injects_bound_id() -> None:
    filt = CorrelationIdFilter()
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", (), None)

    filt.filter(record)
    assert record.correlation_id == "-"

    with correlation_scope("log-42"):
        filt.filter(record)
    assert record.correlation_id == "log-42"
    assert get_correlation_id() is None
