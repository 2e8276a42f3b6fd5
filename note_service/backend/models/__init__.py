# Domain models package
from note_service.backend.models.note import Note, NoteInfo
from note_service.backend.models.patch import ABSENT, NotePatch

__all__ = [
    "ABSENT",
    "Note",
    "NoteInfo",
    "NotePatch",
]
