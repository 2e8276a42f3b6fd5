"""
Note Schemas.

Pydantic schemas for the HTTP notes API request/response bodies.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from note_service.backend.models.note import NoteInfo
from note_service.backend.models.patch import NotePatch


class NoteInfoSchema(BaseModel):
    """Note content as sent to and returned from the HTTP API."""

    title: str = Field(description="Note title", examples=["Groceries"])
    context: str = Field(description="Note body", examples=["Milk, eggs, bread"])
    author: str = Field(description="Author name", examples=["Ada Lovelace"])
    is_public: bool = Field(description="Whether the note is public")

    model_config = ConfigDict(from_attributes=True, extra="forbid")

    def to_domain(self) -> NoteInfo:
        """Convert to the store's NoteInfo."""
        return NoteInfo(
            title=self.title,
            context=self.context,
            author=self.author,
            is_public=self.is_public,
        )


class NoteCreate(NoteInfoSchema):
    """Schema for creating a new note."""


class NoteUpdate(BaseModel):
    """
    Schema for patching a note.

    Only fields present in the request body are applied. Explicit
    nulls are rejected because no note field is nullable.
    """

    title: str | None = Field(default=None, description="Note title")
    context: str | None = Field(default=None, description="Note body")
    author: str | None = Field(default=None, description="Author name")
    is_public: bool | None = Field(default=None, description="Whether the note is public")

    model_config = ConfigDict(extra="forbid")

    @field_validator("title", "context", "author", "is_public", mode="before")
    @classmethod
    def _reject_null(cls, value):
        if value is None:
            raise ValueError("field may be omitted but not null")
        return value

    def to_patch(self) -> NotePatch:
        """Build a patch holding only the fields the client sent."""
        return NotePatch.from_mapping(self.model_dump(exclude_unset=True))


class NoteResponse(BaseModel):
    """Schema for a note in API responses."""

    id: int = Field(description="Note identifier")
    info: NoteInfoSchema = Field(description="Note content")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)
