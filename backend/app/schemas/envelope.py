"""Envelope Schemas — the uniform JSON wrapper returned by every endpoint.

Invariants:
    - Exactly one of data/error is populated: success carries data, failure carries error
    - meta.request_id and meta.timestamp are present on every response
    - Serialized field names are camelCase (requestId), absent fields omitted

Design Decisions:
    - Generic APIResponse[DataT] over an untyped payload: OpenAPI documents the real data shape
    - Invariant enforced by model_validator so an inconsistent envelope cannot be built
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class APIError(BaseModel):
    """Machine-readable code, human-readable message, optional per-field details."""
    code: str
    message: str
    details: dict[str, list[str]] | None = None


class ResponseMeta(BaseModel):
    """Tracing metadata stamped on every response."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    request_id: str
    timestamp: str


class APIResponse(BaseModel, Generic[DataT]):
    """Standard response structure for all API endpoints."""
    success: bool
    message: str
    data: DataT | None = None
    error: APIError | None = None
    meta: ResponseMeta

    @model_validator(mode="after")
    def check_data_xor_error(self) -> "APIResponse":
        if self.success:
            if self.error is not None or self.data is None:
                raise ValueError("successful response must carry data and no error")
        elif self.error is None or self.data is not None:
            raise ValueError("failed response must carry an error and no data")
        return self
