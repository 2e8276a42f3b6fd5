"""
Notes HTTP endpoints.

    POST   /notes             create, 201 with the stored note
    GET    /notes             page in insertion order
    GET    /notes/{note_id}   fetch one
    PATCH  /notes/{note_id}   apply the fields present in the body
    DELETE /notes/{note_id}   remove, 204 with no body

Domain errors are rendered by the application exception handlers.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response, status

from note_service.backend.core.dependencies import NoteServiceDep, RequestId
from note_service.backend.core.pagination import (
    PaginationParams,
    create_paginated_response,
    get_pagination_params,
)
from note_service.backend.models.note import Note
from note_service.backend.schemas.base import ApiResponse, ResponseMetadata
from note_service.backend.schemas.note import NoteCreate, NoteResponse, NoteUpdate

router = APIRouter()

Pagination = Annotated[PaginationParams, Depends(get_pagination_params)]
NoteEnvelope = ApiResponse[NoteResponse]


def _envelope(note: Note, request_id: str) -> NoteEnvelope:
    return NoteEnvelope(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "",
    response_model=NoteEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create a note",
)
async def create_note(
    data: NoteCreate,
    service: NoteServiceDep,
    request_id: RequestId,
) -> NoteEnvelope:
    """The server assigns the id and both timestamps."""
    return _envelope(await service.create_note(data.to_domain()), request_id)


@router.get("", summary="List notes")
async def list_notes(
    service: NoteServiceDep,
    request_id: RequestId,
    pagination: Pagination,
) -> dict[str, Any]:
    notes, total = await service.list_notes_paginated(pagination.limit, pagination.offset)
    return create_paginated_response(
        items=notes,
        item_schema=NoteResponse,
        total=total,
        limit=pagination.limit,
        offset=pagination.offset,
        request_id=request_id,
    )


@router.get("/{note_id}", response_model=NoteEnvelope, summary="Get a note")
async def get_note(
    note_id: int,
    service: NoteServiceDep,
    request_id: RequestId,
) -> NoteEnvelope:
    return _envelope(await service.get_note(note_id), request_id)


@router.patch("/{note_id}", response_model=NoteEnvelope, summary="Update a note")
async def update_note(
    note_id: int,
    data: NoteUpdate,
    service: NoteServiceDep,
    request_id: RequestId,
) -> NoteEnvelope:
    """Only fields present in the body change; an empty body still bumps updated_at."""
    return _envelope(await service.update_note(note_id, data.to_patch()), request_id)


@router.delete(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a note",
)
async def delete_note(note_id: int, service: NoteServiceDep) -> Response:
    await service.delete_note(note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
