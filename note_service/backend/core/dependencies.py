"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

import uuid
from typing import Annotated

from fastapi import Depends, Header, Request

from note_service.backend.services.note import NoteService
from note_service.backend.store.note_store import NoteStore


def get_note_store(request: Request) -> NoteStore:
    """Return the note store owned by the running application."""
    return request.app.state.note_store


NoteStoreDep = Annotated[NoteStore, Depends(get_note_store)]


def get_note_service(request: Request, store: NoteStoreDep) -> NoteService:
    """Build a NoteService over the application's store and field limits."""
    return NoteService(store, limits=request.app.state.field_limits)


NoteServiceDep = Annotated[NoteService, Depends(get_note_service)]


async def get_request_id(
    request: Request,
    x_request_id: str | None = Header(None),
) -> str:
    """
    Return the request ID bound by RequestContextMiddleware.

    Falls back to the X-Request-ID header, then to a fresh UUID, when
    the middleware is not installed.
    """
    state_id = getattr(request.state, "request_id", None)
    return state_id or x_request_id or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]
