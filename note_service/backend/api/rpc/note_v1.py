"""
note_v1.NoteV1 RPC Service.

Each RPC method is a POST to ``<rpc_prefix>/note_v1.NoteV1/<Method>``
taking and returning JSON-encoded note_v1 messages. Failures are
rendered as RPC status bodies by the exception handlers.
"""

from fastapi import APIRouter

from note_service.backend.core.dependencies import NoteServiceDep
from note_service.backend.schemas.note_v1 import (
    CreateRequest,
    CreateResponse,
    DeleteRequest,
    GetRequest,
    GetResponse,
    ListRequest,
    ListResponse,
    Note,
    UpdateRequest,
)
from note_service.backend.schemas.rpc import Empty

SERVICE_NAME = "note_v1.NoteV1"

router = APIRouter(prefix=f"/{SERVICE_NAME}")


@router.post("/Create", response_model=CreateResponse, summary="NoteV1.Create")
async def create(message: CreateRequest, service: NoteServiceDep) -> CreateResponse:
    """Create a note and return its id."""
    note = await service.create_note(message.info.to_domain())
    return CreateResponse(id=note.id)


@router.post("/Get", response_model=GetResponse, summary="NoteV1.Get")
async def get(message: GetRequest, service: NoteServiceDep) -> GetResponse:
    """Get a note by id."""
    note = await service.get_note(message.id)
    return GetResponse(note=Note.model_validate(note))


@router.post("/List", response_model=ListResponse, summary="NoteV1.List")
async def list_notes(message: ListRequest, service: NoteServiceDep) -> ListResponse:
    """List notes in creation order. A limit of zero or less returns no notes."""
    notes = await service.list_notes(limit=message.limit, offset=message.offset)
    return ListResponse(notes=[Note.model_validate(note) for note in notes])


@router.post("/Update", response_model=Empty, summary="NoteV1.Update")
async def update(message: UpdateRequest, service: NoteServiceDep) -> Empty:
    """Patch a note. Unset wrapper fields are left untouched."""
    await service.update_note(message.id, message.info.to_patch())
    return Empty()


@router.post("/Delete", response_model=Empty, summary="NoteV1.Delete")
async def delete(message: DeleteRequest, service: NoteServiceDep) -> Empty:
    """Delete a note."""
    await service.delete_note(message.id)
    return Empty()
