"""
Pagination Utilities.

Offset pagination for the notes list endpoint. Default and maximum
page sizes come from the ``pagination`` section of application.yaml.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from fastapi import Query
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel

from note_service.backend.core.config import get_app_config
from note_service.backend.schemas.base import PaginatedResponse, PaginationInfo, ResponseMetadata


@dataclass(frozen=True)
class PaginationParams:
    limit: int
    offset: int


def get_pagination_params(
    limit: int | None = Query(
        default=None,
        ge=1,
        description="Maximum number of notes to return (default and maximum from application.yaml)",
    ),
    offset: int = Query(
        default=0,
        ge=0,
        description="Number of notes to skip",
    ),
) -> PaginationParams:
    """
    FastAPI dependency for ``?limit=&offset=``.

    Raises:
        RequestValidationError: If limit exceeds the configured maximum
    """
    settings = get_app_config().application.pagination
    if limit is None:
        limit = settings.default_limit
    elif limit > settings.max_limit:
        raise RequestValidationError([{
            "loc": ("query", "limit"),
            "msg": f"Input should be less than or equal to {settings.max_limit}",
            "type": "less_than_equal",
            "input": limit,
        }])
    return PaginationParams(limit=limit, offset=offset)


def create_paginated_response(
    items: Sequence[Any],
    item_schema: type[BaseModel],
    total: int,
    limit: int,
    offset: int,
    request_id: str | None = None,
) -> dict[str, Any]:
    """
    Render one page as a PaginatedResponse dict.

    ``items`` may be domain objects; each is validated through
    ``item_schema`` before serialization. ``has_more`` is true when
    notes remain after this page.
    """
    page = PaginatedResponse(
        data=[item_schema.model_validate(item).model_dump(mode="json") for item in items],
        pagination=PaginationInfo(
            total=total,
            limit=limit,
            offset=offset,
            has_more=offset + len(items) < total,
        ),
        metadata=ResponseMetadata(request_id=request_id),
    )
    return page.model_dump(mode="json")
