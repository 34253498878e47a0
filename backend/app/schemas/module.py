"""Module Schemas — Pydantic DTOs with field-level validation for the API boundary.

Invariants:
    - ModuleRequest.name: required, 3-50 chars (untrimmed — the service re-checks trimmed)
    - ModuleRequest.description: at most 200 chars, defaults to ""
    - ModuleRequest.is_active defaults to False when omitted
    - An explicit null for description or isActive means "use the default"
    - ModuleResponse.created_at is always timezone-aware UTC

Design Decisions:
    - camelCase on the wire via alias_generator, snake_case in Python (populate_by_name)
    - Response built from the domain entity, never from the ORM row
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.core.domain_types import (
    DESCRIPTION_MAX_LENGTH, NAME_MAX_LENGTH, NAME_MIN_LENGTH,
    Module, as_utc,
)


class ModuleRequest(BaseModel):
    """Module creation payload."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    description: str = Field("", max_length=DESCRIPTION_MAX_LENGTH)
    is_active: bool = False

    @field_validator("description", "is_active", mode="before")
    @classmethod
    def null_means_default(cls, v, info):
        if v is None:
            return cls.model_fields[info.field_name].default
        return v


class ModuleResponse(BaseModel):
    """Module response — public-facing module data."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    description: str
    is_active: bool
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, v: datetime) -> datetime:
        return as_utc(v)

    @classmethod
    def from_entity(cls, entity: Module) -> "ModuleResponse":
        return cls(
            id=entity.id,
            name=entity.name,
            description=entity.description,
            is_active=entity.is_active,
            created_at=entity.created_at,
        )
