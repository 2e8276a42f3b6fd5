"""
Note Model.

Domain entities held by the note store. Both types are frozen, so a
Note handed to a caller is an immutable snapshot: mutation only
happens by the store swapping in a new instance.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class NoteInfo:
    """Content payload of a note. Every field is always populated."""

    title: str
    context: str
    author: str
    is_public: bool


@dataclass(frozen=True, slots=True)
class Note:
    """
    Stored note.

    ``id`` and ``created_at`` never change after creation;
    ``updated_at`` moves forward on every successful update.
    """

    id: int
    info: NoteInfo
    created_at: datetime
    updated_at: datetime

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.info.title!r})>"
