"""Module Service — business rules for creating and reading modules.

Invariants:
    - create_module validates in a fixed order and stops at the first violation:
      name required → name length → name uniqueness → description length
    - Name rules apply to the trimmed name; the trimmed name is what gets stored
    - created_at is assigned here, once, from the current UTC time
    - Storage faults surface as DatabaseError naming the failing step, never as a business error
    - Repository "absent" becomes NotFoundError here; other repository errors pass through

Design Decisions:
    - Service returns DTOs (ModuleResponse), never entities or HTTP responses
    - Repository injected via constructor (ADR: no hidden global storage handle)
"""

import logging
from datetime import datetime, timezone

from app.core.domain_types import (
    DESCRIPTION_MAX_LENGTH, NAME_MAX_LENGTH, NAME_MIN_LENGTH, Module,
)
from app.core.errors import (
    DatabaseError, DescriptionLengthError, NameExistsError, NameLengthError,
    NameRequiredError, NotFoundError,
)
from app.core.repository_protocols import ModuleRepository
from app.schemas.module import ModuleRequest, ModuleResponse

logger = logging.getLogger(__name__)


class ModuleService:
    """Create and fetch modules through a ModuleRepository."""

    def __init__(self, repository: ModuleRepository):
        self._repo = repository

    async def create_module(self, request: ModuleRequest) -> ModuleResponse:
        name = request.name.strip()
        if not name:
            raise NameRequiredError()
        if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
            raise NameLengthError()

        try:
            exists = await self._repo.is_module_name_exists(name, 0)
        except DatabaseError as e:
            raise DatabaseError(e.detail, "name check") from e
        if exists:
            raise NameExistsError(name)

        if len(request.description) > DESCRIPTION_MAX_LENGTH:
            raise DescriptionLengthError()

        entity = Module(
            name=name,
            description=request.description,
            is_active=request.is_active,
            created_at=datetime.now(timezone.utc),
        )
        try:
            saved = await self._repo.create_module(entity)
        except DatabaseError as e:
            raise DatabaseError(e.detail, "module create") from e

        logger.info(f"Module created: id={saved.id} name={saved.name!r}")
        return ModuleResponse.from_entity(saved)

    async def get_module_by_id(self, raw_id: str | int) -> ModuleResponse:
        entity = await self._repo.get_module_by_id(raw_id)
        if entity is None:
            raise NotFoundError(raw_id)
        return ModuleResponse.from_entity(entity)
