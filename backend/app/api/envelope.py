"""Response Envelope — builds the uniform success/error wrapper for every endpoint.

Invariants:
    - Every envelope is stamped with meta.requestId and an RFC3339 UTC meta.timestamp
    - Messages for a status always come from status_to_message (consistent across endpoints)
    - Rendered JSON is camelCase with absent fields omitted

Design Decisions:
    - ResponseMapper bound to one request id: handlers never pass the id around
    - Mapper returns (envelope, status) pairs; rendering to JSONResponse is a separate step
"""

from datetime import datetime, timezone
from typing import Any, Mapping

from fastapi import status
from fastapi.responses import JSONResponse

from app.schemas.envelope import APIError, APIResponse, ResponseMeta

_STATUS_MESSAGES = {
    status.HTTP_200_OK: "Operation completed successfully",
    status.HTTP_201_CREATED: "Resource created successfully",
    status.HTTP_400_BAD_REQUEST: "Invalid request parameters",
    status.HTTP_404_NOT_FOUND: "Resource not found",
    status.HTTP_409_CONFLICT: "Resource already exists",
}
_DEFAULT_MESSAGE = "An unexpected error occurred"


def status_to_message(status_code: int) -> str:
    """Canonical human-readable phrase for an HTTP status."""
    return _STATUS_MESSAGES.get(status_code, _DEFAULT_MESSAGE)


def rfc3339_now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class ResponseMapper:
    """Creates standardized API responses for one request."""

    def __init__(self, request_id: str):
        self.request_id = request_id

    def _meta(self) -> ResponseMeta:
        return ResponseMeta(request_id=self.request_id, timestamp=rfc3339_now())

    def success(
        self, data: Any, message: str, status_code: int,
    ) -> tuple[APIResponse, int]:
        return APIResponse(
            success=True, message=message, data=data, meta=self._meta(),
        ), status_code

    def error(
        self,
        code: str,
        message: str,
        details: dict[str, list[str]] | None,
        status_code: int,
    ) -> tuple[APIResponse, int]:
        return APIResponse(
            success=False,
            message=message,
            error=APIError(code=code, message=message, details=details),
            meta=self._meta(),
        ), status_code


def envelope_response(
    api_response: APIResponse,
    status_code: int,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    """Render an envelope as the HTTP response."""
    return JSONResponse(
        status_code=status_code,
        content=api_response.model_dump(
            mode="json", by_alias=True, exclude_none=True,
        ),
        headers=headers,
    )
