"""
note_v1 Messages.

Request and response messages of the note_v1.NoteV1 RPC service:

    rpc Create(CreateRequest) returns (CreateResponse);
    rpc Get(GetRequest) returns (GetResponse);
    rpc List(ListRequest) returns (ListResponse);
    rpc Update(UpdateRequest) returns (Empty);
    rpc Delete(DeleteRequest) returns (Empty);

Update carries UpdateNoteInfo, whose fields are wrapper messages so a
client can set a field to "" or false without touching the others.
"""

from datetime import datetime

from pydantic import Field

from note_service.backend.models.note import NoteInfo as NoteInfoModel
from note_service.backend.models.patch import NotePatch
from note_service.backend.schemas.rpc import BoolValue, Message, StringValue

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class NoteInfo(Message):
    title: str = ""
    context: str = ""
    author: str = ""
    is_public: bool = False

    def to_domain(self) -> NoteInfoModel:
        return NoteInfoModel(
            title=self.title,
            context=self.context,
            author=self.author,
            is_public=self.is_public,
        )


class Note(Message):
    id: int
    info: NoteInfo
    created_at: datetime
    updated_at: datetime


class UpdateNoteInfo(Message):
    title: StringValue | None = None
    context: StringValue | None = None
    author: StringValue | None = None
    is_public: BoolValue | None = None

    def to_patch(self) -> NotePatch:
        """Unwrap set wrappers into a patch; unset wrappers stay absent."""
        present = {}
        for name in ("title", "context", "author", "is_public"):
            wrapper = getattr(self, name)
            if wrapper is not None:
                present[name] = wrapper.value
        return NotePatch.from_mapping(present)


class CreateRequest(Message):
    info: NoteInfo = Field(default_factory=NoteInfo)


class CreateResponse(Message):
    id: int


class GetRequest(Message):
    id: int = Field(default=0, ge=INT64_MIN, le=INT64_MAX)


class GetResponse(Message):
    note: Note


class ListRequest(Message):
    limit: int = Field(default=0, ge=INT64_MIN, le=INT64_MAX)
    offset: int = Field(default=0, ge=INT64_MIN, le=INT64_MAX)


class ListResponse(Message):
    notes: list[Note] = Field(default_factory=list)


class UpdateRequest(Message):
    id: int = Field(default=0, ge=INT64_MIN, le=INT64_MAX)
    info: UpdateNoteInfo = Field(default_factory=UpdateNoteInfo)


class DeleteRequest(Message):
    id: int = Field(default=0, ge=INT64_MIN, le=INT64_MAX)
