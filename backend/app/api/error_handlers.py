"""Error Handlers — map typed errors to status codes and envelopes.

Invariants:
    - ModuleError → fixed table below; unknown ModuleError subclasses (storage faults) → 500
    - RequestValidationError → 400 VALIDATION_ERROR with {field: [messages]} details
    - 400 envelopes name the offending field; 500 envelopes carry no details
    - Envelope messages come from status_to_message

Design Decisions:
    - Two-layer handler: domain (ModuleError), validation (Pydantic); the catch-all lives
      in middleware so crash responses still pass through request identification
    - Table ordered most-specific first, matched with isinstance
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError

from app.api.envelope import ResponseMapper, envelope_response, status_to_message
from app.api.middleware import get_request_id
from app.core.errors import (
    DescriptionLengthError, InvalidModuleIdError, ModuleError,
    ModuleValidationError, NameExistsError, NameLengthError, NameRequiredError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

SERVICE_ERROR_TABLE: tuple[tuple[type[ModuleError], int, str], ...] = (
    (NameRequiredError, status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR"),
    (NameLengthError, status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR"),
    (DescriptionLengthError, status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR"),
    (InvalidModuleIdError, status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR"),
    (NameExistsError, status.HTTP_409_CONFLICT, "RESOURCE_CONFLICT"),
    (NotFoundError, status.HTTP_404_NOT_FOUND, "NOT_FOUND"),
)

_TRANSPORT_MESSAGES = {
    "missing": "This field is required",
    "string_too_short": "Value is too short",
    "string_too_long": "Value exceeds maximum length",
}


def map_service_error(exc: Exception) -> tuple[int, str]:
    """Status and envelope code for an error raised below the API layer."""
    for error_type, status_code, code in SERVICE_ERROR_TABLE:
        if isinstance(exc, error_type):
            return status_code, code
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_module_error_handler(app)
    _register_validation_error_handler(app)


def _register_module_error_handler(app: FastAPI) -> None:
    """Register module domain/infrastructure error handler."""

    @app.exception_handler(ModuleError)
    async def module_error_handler(request: Request, exc: ModuleError):
        status_code, code = map_service_error(exc)
        if status_code >= 500:
            logger.error(
                f"ModuleError: {exc.message}",
                exc_info=exc,
                extra={"error_code": exc.code, "path": request.url.path},
            )
        else:
            logger.info(
                f"ModuleError: {exc.message}",
                extra={"error_code": exc.code, "path": request.url.path},
            )
        details = None
        if status_code == status.HTTP_400_BAD_REQUEST and isinstance(
            exc, ModuleValidationError,
        ):
            details = {exc.field: [exc.message]}
        mapper = ResponseMapper(get_request_id(request))
        api_response, status_code = mapper.error(
            code, status_to_message(status_code), details, status_code,
        )
        return envelope_response(api_response, status_code)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        mapper = ResponseMapper(get_request_id(request))
        api_response, status_code = mapper.error(
            "VALIDATION_ERROR",
            status_to_message(status.HTTP_400_BAD_REQUEST),
            build_validation_details(exc.errors()),
            status.HTTP_400_BAD_REQUEST,
        )
        return envelope_response(api_response, status_code)


def build_validation_details(errors) -> dict[str, list[str]]:
    """Collect every field violation into {field: [messages]}."""
    details: dict[str, list[str]] = {}
    for e in errors:
        loc = [str(part) for part in e["loc"]]
        if e["type"] == "json_invalid":
            # loc is ("body", <char offset>) for malformed JSON
            loc = loc[:1]
        field = ".".join(loc[1:]) or loc[0]
        message = _TRANSPORT_MESSAGES.get(e["type"], e["msg"])
        details.setdefault(field, []).append(message)
    return details
