# Note store package
from note_service.backend.store.note_store import NoteStore
from note_service.backend.store.rwlock import ReadWriteLock

__all__ = [
    "NoteStore",
    "ReadWriteLock",
]
