"""Module Routes — create and fetch modules.

Invariants:
    - Payload is bound and transport-validated by Pydantic before the handler body runs
    - Service errors propagate to api/error_handlers.py, which owns the status mapping
    - Successful create returns 201 with Location: /api/v1/modules/{id}
    - Every response body is an APIResponse envelope

Design Decisions:
    - id path parameter typed str: the repository decides what a malformed id is,
      so "abc" surfaces as InvalidModuleIdError instead of a framework 422
    - ModuleService built per request from app.state.module_repository (explicit DI)
"""

import logging

from fastapi import APIRouter, Depends, Request, status

from app.api.envelope import ResponseMapper, envelope_response, status_to_message
from app.api.middleware import get_request_id
from app.schemas.envelope import APIResponse
from app.schemas.module import ModuleRequest, ModuleResponse
from app.services.module_service import ModuleService

logger = logging.getLogger(__name__)

MODULES_PATH = "/api/v1/modules"
router = APIRouter(prefix=MODULES_PATH, tags=["modules"])

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": APIResponse, "description": "Validation error"},
    status.HTTP_404_NOT_FOUND: {"model": APIResponse, "description": "Module not found"},
    status.HTTP_409_CONFLICT: {"model": APIResponse, "description": "Module name already exists"},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": APIResponse, "description": "Internal server error"},
}


def get_module_service(request: Request) -> ModuleService:
    """FastAPI dependency — service over the repository chosen at startup."""
    return ModuleService(request.app.state.module_repository)


@router.post(
    "",
    response_model=APIResponse[ModuleResponse],
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
async def create_module(
    body: ModuleRequest,
    request: Request,
    service: ModuleService = Depends(get_module_service),
):
    """Create a new module."""
    created = await service.create_module(body)
    mapper = ResponseMapper(get_request_id(request))
    api_response, status_code = mapper.success(
        created,
        status_to_message(status.HTTP_201_CREATED),
        status.HTTP_201_CREATED,
    )
    return envelope_response(
        api_response, status_code,
        headers={"Location": f"{MODULES_PATH}/{created.id}"},
    )


@router.get(
    "/{module_id}",
    response_model=APIResponse[ModuleResponse],
    responses=_ERROR_RESPONSES,
)
async def get_module(
    module_id: str,
    request: Request,
    service: ModuleService = Depends(get_module_service),
):
    """Get a module by id."""
    module = await service.get_module_by_id(module_id)
    mapper = ResponseMapper(get_request_id(request))
    api_response, status_code = mapper.success(
        module,
        status_to_message(status.HTTP_200_OK),
        status.HTTP_200_OK,
    )
    return envelope_response(api_response, status_code)
