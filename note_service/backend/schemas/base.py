"""
Response envelope for the HTTP API.

Every HTTP body has the same outer shape::

    {"success": ..., "data": ..., "error": ..., "metadata": {...}}

List endpoints add a ``pagination`` block. RPC responses do not use the
envelope; see schemas.note_v1 and schemas.rpc.
"""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from note_service.backend.store.note_store import utc_now

DataT = TypeVar("DataT")


class ResponseMetadata(BaseModel):
    timestamp: datetime = Field(default_factory=utc_now)
    request_id: str | None = None


class ErrorDetail(BaseModel):
    code: str
    message: str
    details: dict[str, Any] | None = None


class _Envelope(BaseModel):
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)


class ApiResponse(_Envelope, Generic[DataT]):
    """Successful single-object response."""

    model_config = ConfigDict(from_attributes=True)

    success: bool = True
    data: DataT | None = None
    error: ErrorDetail | None = None


class ErrorResponse(_Envelope):
    success: bool = False
    data: None = None
    error: ErrorDetail


class PaginationInfo(BaseModel):
    """``has_more`` is true when notes remain after the returned page."""

    total: int
    limit: int
    offset: int
    has_more: bool = False


class PaginatedResponse(_Envelope, Generic[DataT]):
    success: bool = True
    data: list[DataT]
    error: None = None
    pagination: PaginationInfo
