"""HTTP Middleware — request identification and failure containment.

Invariants:
    - Every response carries X-Request-Id: the caller's valid id, or a fresh UUID4
    - request.state.request_id is set before any handler runs
    - Unhandled exceptions become a 500 INTERNAL_ERROR envelope with no details;
      the fault is logged server-side with the request id, never returned to the caller
    - Errors attached via attach_error on an empty-bodied response become an error
      envelope using that response's status (200 and 204 promoted to 500); streamed
      bodies and responses without an explicit empty length pass through untouched

Design Decisions:
    - Function middleware registered in create_app, request id outermost so crash
      responses still get the header
    - Invalid inbound ids are replaced, not rejected: tracing must never fail a request
"""

import logging
import re
import time
import uuid

from fastapi import Request, status
from fastapi.responses import Response

from app.api.envelope import ResponseMapper, envelope_response, status_to_message
from app.infrastructure.observability import request_id_var

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-Id"
_REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9._:-]{0,127}")


def get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or ""


def attach_error(request: Request, error: Exception) -> None:
    """Record an error for the middleware to render after the handler returns."""
    if not hasattr(request.state, "deferred_errors"):
        request.state.deferred_errors = []
    request.state.deferred_errors.append(error)


def _resolve_request_id(incoming: str | None) -> str:
    if incoming and _REQUEST_ID_PATTERN.fullmatch(incoming):
        return incoming
    return str(uuid.uuid4())


async def request_id_middleware(request: Request, call_next):
    req_id = _resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
    request.state.request_id = req_id
    token = request_id_var.set(req_id)
    started = time.perf_counter()
    try:
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = req_id
        logger.info(
            "request.completed",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": int((time.perf_counter() - started) * 1000),
            },
        )
        return response
    finally:
        request_id_var.reset(token)


async def exception_middleware(request: Request, call_next):
    req_id = get_request_id(request)
    mapper = ResponseMapper(req_id)
    try:
        response = await call_next(request)
    except Exception as exc:
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc!r}",
            exc_info=True,
            extra={"request_id": req_id, "error_code": "INTERNAL_ERROR"},
        )
        api_response, status_code = mapper.error(
            "INTERNAL_ERROR",
            status_to_message(status.HTTP_500_INTERNAL_SERVER_ERROR),
            None,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
        return envelope_response(api_response, status_code)

    errors = getattr(request.state, "deferred_errors", None)
    if errors and _is_empty(response):
        return _render_deferred(mapper, response, errors)
    return response


def _is_empty(response: Response) -> bool:
    # Streamed and chunked bodies carry no content-length and are never replaced
    if response.status_code == status.HTTP_204_NO_CONTENT:
        return True
    return response.headers.get("content-length") == "0"


def _render_deferred(
    mapper: ResponseMapper, response: Response, errors: list[Exception],
) -> Response:
    status_code = response.status_code
    if status_code in (status.HTTP_200_OK, status.HTTP_204_NO_CONTENT):
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    logger.warning(
        f"Handler attached {len(errors)} error(s) without a response body",
        extra={"status_code": status_code, "error_code": "INTERNAL_ERROR"},
    )
    api_response, status_code = mapper.error(
        "INTERNAL_ERROR",
        status_to_message(status_code),
        {"error": [str(e) for e in errors]},
        status_code,
    )
    return envelope_response(api_response, status_code)
