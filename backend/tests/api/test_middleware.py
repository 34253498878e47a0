"""Middleware — request identification and failure containment.

Invariants:
    - X-Request-Id is echoed when valid, generated (UUID4) when absent or invalid
    - The response header and meta.requestId always agree
    - An unhandled exception becomes 500 INTERNAL_ERROR with no details and no fault text
    - Crashes are logged with the request id
    - Attached errors on an empty-bodied response become an envelope (200/204 promoted to 500)
    - Streamed bodies are passed through even with attached errors
"""

import logging
import uuid

import pytest
from fastapi import Request
from fastapi.responses import JSONResponse, Response, StreamingResponse
from httpx import ASGITransport, AsyncClient

from app.api.middleware import attach_error


@pytest.fixture
async def faulty_client(memory_app):
    """Client for an app with extra routes that misbehave on purpose."""

    @memory_app.get("/faulty/crash")
    async def crash():
        raise RuntimeError("connection string postgres://admin:hunter2@db")

    @memory_app.get("/faulty/deferred")
    async def deferred(request: Request):
        attach_error(request, ValueError("quota lookup failed"))
        return Response(status_code=503)

    @memory_app.get("/faulty/deferred-default")
    async def deferred_default(request: Request):
        attach_error(request, ValueError("first"))
        attach_error(request, ValueError("second"))
        return Response()

    @memory_app.get("/faulty/deferred-with-body")
    async def deferred_with_body(request: Request):
        attach_error(request, ValueError("ignored"))
        return JSONResponse({"ok": True})

    @memory_app.get("/faulty/deferred-streaming")
    async def deferred_streaming(request: Request):
        attach_error(request, ValueError("ignored"))
        return StreamingResponse(iter([b"part-1,", b"part-2"]), media_type="text/plain")

    @memory_app.get("/faulty/deferred-no-content")
    async def deferred_no_content(request: Request):
        attach_error(request, ValueError("nothing written"))
        return Response(status_code=204)

    async with AsyncClient(
        transport=ASGITransport(app=memory_app), base_url="http://test",
    ) as c:
        yield c


# --- Request identification ---------------------------------------------------

async def test_generates_request_id_when_absent(client):
    res = await client.get("/api/v1/modules/1")

    header = res.headers["x-request-id"]
    assert uuid.UUID(header).version == 4
    assert res.json()["meta"]["requestId"] == header


async def test_echoes_valid_inbound_request_id(client):
    res = await client.post(
        "/api/v1/modules", json={"name": "Inventory"},
        headers={"X-Request-Id": "trace-abc.123"},
    )
    assert res.headers["x-request-id"] == "trace-abc.123"
    assert res.json()["meta"]["requestId"] == "trace-abc.123"


@pytest.mark.parametrize("bad_id", ["has spaces", "x" * 200, "<script>", "-leading-dash"])
async def test_replaces_invalid_inbound_request_id(client, bad_id):
    res = await client.get("/api/v1/modules/1", headers={"X-Request-Id": bad_id})
    header = res.headers["x-request-id"]
    assert header != bad_id
    assert uuid.UUID(header)


async def test_request_id_on_validation_failure(client):
    res = await client.post(
        "/api/v1/modules", json={"name": "In"}, headers={"X-Request-Id": "req-400"},
    )
    assert res.status_code == 400
    assert res.headers["x-request-id"] == "req-400"
    assert res.json()["meta"]["requestId"] == "req-400"


async def test_health_response_has_request_id(client):
    res = await client.get("/health")
    assert res.headers["x-request-id"]


# --- Failure containment ------------------------------------------------------

async def test_crash_becomes_internal_error_envelope(faulty_client):
    res = await faulty_client.get("/faulty/crash", headers={"X-Request-Id": "crash-1"})

    assert res.status_code == 500
    body = res.json()
    assert body["success"] is False
    assert body["message"] == "An unexpected error occurred"
    assert body["error"] == {
        "code": "INTERNAL_ERROR", "message": "An unexpected error occurred",
    }
    assert "data" not in body
    assert "hunter2" not in res.text
    assert res.headers["x-request-id"] == "crash-1"
    assert body["meta"]["requestId"] == "crash-1"


async def test_crash_is_logged_with_request_id(faulty_client, caplog):
    with caplog.at_level(logging.ERROR, logger="app.api.middleware"):
        await faulty_client.get("/faulty/crash", headers={"X-Request-Id": "crash-2"})

    records = [r for r in caplog.records if r.name == "app.api.middleware"]
    assert records
    assert records[0].request_id == "crash-2"
    assert records[0].exc_info is not None


async def test_deferred_error_uses_response_status(faulty_client):
    res = await faulty_client.get("/faulty/deferred")

    assert res.status_code == 503
    body = res.json()
    assert body["error"]["code"] == "INTERNAL_ERROR"
    assert body["error"]["details"] == {"error": ["quota lookup failed"]}
    assert body["message"] == "An unexpected error occurred"


async def test_deferred_error_on_200_promoted_to_500(faulty_client):
    res = await faulty_client.get("/faulty/deferred-default")

    assert res.status_code == 500
    assert res.json()["error"]["details"] == {"error": ["first", "second"]}


async def test_deferred_error_ignored_when_handler_wrote_body(faulty_client):
    res = await faulty_client.get("/faulty/deferred-with-body")

    assert res.status_code == 200
    assert res.json() == {"ok": True}


async def test_deferred_error_ignored_for_streamed_body(faulty_client):
    res = await faulty_client.get("/faulty/deferred-streaming")

    assert res.status_code == 200
    assert res.text == "part-1,part-2"


async def test_deferred_error_on_204_promoted_to_500(faulty_client):
    res = await faulty_client.get("/faulty/deferred-no-content")

    assert res.status_code == 500
    assert res.json()["error"]["details"] == {"error": ["nothing written"]}
