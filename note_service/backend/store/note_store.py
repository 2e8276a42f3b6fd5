"""
Note Store.

In-memory owner of all notes. Assigns identifiers, stamps times,
applies patches and serializes access with a reader-writer lock.
Every operation is all-or-nothing and the store never logs; errors
propagate to the caller.

Usage:
    store = NoteStore()
    note = store.create(NoteInfo(title="A", context="B", author="C", is_public=True))
    store.update(note.id, NotePatch(context="Z"))
    store.list(limit=10, offset=0)
"""

import secrets
from collections.abc import Callable, Sequence
from datetime import datetime, timedelta, timezone
from itertools import islice

from note_service.backend.core.exceptions import (
    IdentifierExhaustedError,
    NotFoundError,
    ValidationError,
)
from note_service.backend.models.note import Note, NoteInfo
from note_service.backend.models.patch import NotePatch
from note_service.backend.store.rwlock import ReadWriteLock

MAX_NOTE_ID = 2**63 - 1
DEFAULT_ID_MAX_ATTEMPTS = 8

_CLOCK_STEP = timedelta(microseconds=1)


def random_note_id() -> int:
    """Draw a non-negative identifier from the signed 64-bit range."""
    return secrets.randbits(63)


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class NoteStore:
    """
    Concurrency-safe CRUD store for notes.

    Readers (get, list, count) share the lock; writers (create,
    update, delete) hold it exclusively. Notes are frozen, so returning
    the stored instance hands out an immutable snapshot.

    List order is insertion order.
    """

    def __init__(
        self,
        id_factory: Callable[[], int] = random_note_id,
        clock: Callable[[], datetime] = utc_now,
        id_max_attempts: int = DEFAULT_ID_MAX_ATTEMPTS,
    ) -> None:
        if id_max_attempts < 1:
            raise ValueError("id_max_attempts must be at least 1")

        self._notes: dict[int, Note] = {}
        self._issued_ids: set[int] = set()
        self._lock = ReadWriteLock()
        self._id_factory = id_factory
        self._clock = clock
        self._id_max_attempts = id_max_attempts
        self._last_timestamp: datetime | None = None

    def create(self, info: NoteInfo) -> Note:
        """
        Insert a new note.

        Raises:
            IdentifierExhaustedError: If every identifier drawn was already issued
        """
        with self._lock.write():
            note_id = self._allocate_id()
            now = self._next_timestamp()
            note = Note(id=note_id, info=info, created_at=now, updated_at=now)
            self._issued_ids.add(note_id)
            self._notes[note_id] = note
            return note

    def get(self, note_id: int) -> Note:
        """
        Return the current snapshot of a note.

        Raises:
            NotFoundError: If no note has this id
        """
        with self._lock.read():
            return self._get_locked(note_id)

    def list(self, limit: int, offset: int = 0) -> Sequence[Note]:
        """
        Return up to ``limit`` notes after skipping ``offset``, in insertion order.

        ``limit <= 0`` returns nothing; an offset past the end returns nothing.

        Raises:
            ValidationError: If offset is negative
        """
        if offset < 0:
            raise ValidationError(
                "offset must not be negative",
                details={"offset": offset},
            )
        if limit <= 0:
            return []

        with self._lock.read():
            if offset >= len(self._notes):
                return []
            # Bound the window by the store size; islice rejects stops past sys.maxsize.
            stop = offset + min(limit, len(self._notes) - offset)
            return list(islice(self._notes.values(), offset, stop))

    def update(self, note_id: int, patch: NotePatch) -> Note:
        """
        Apply a patch and refresh ``updated_at``.

        Absent patch fields keep their stored value. An all-absent patch
        still counts as an update.

        Raises:
            NotFoundError: If no note has this id
        """
        with self._lock.write():
            current = self._get_locked(note_id)
            note = Note(
                id=current.id,
                info=patch.apply(current.info),
                created_at=current.created_at,
                updated_at=self._next_timestamp(),
            )
            self._notes[note_id] = note
            return note

    def delete(self, note_id: int) -> None:
        """
        Remove a note permanently.

        Raises:
            NotFoundError: If no note has this id
        """
        with self._lock.write():
            self._get_locked(note_id)
            del self._notes[note_id]

    def count(self) -> int:
        """Number of stored notes."""
        with self._lock.read():
            return len(self._notes)

    def _get_locked(self, note_id: int) -> Note:
        note = self._notes.get(note_id)
        if note is None:
            raise NotFoundError(f"Note {note_id} not found")
        return note

    def _allocate_id(self) -> int:
        # Issued ids are never handed out again, even after delete.
        for _ in range(self._id_max_attempts):
            candidate = self._id_factory()
            if not 0 <= candidate <= MAX_NOTE_ID:
                raise ValueError(f"id_factory returned out-of-range id {candidate}")
            if candidate not in self._issued_ids:
                return candidate
        raise IdentifierExhaustedError(
            f"No unused note identifier after {self._id_max_attempts} attempts"
        )

    def _next_timestamp(self) -> datetime:
        now = self._clock()
        if self._last_timestamp is not None and now <= self._last_timestamp:
            now = self._last_timestamp + _CLOCK_STEP
        self._last_timestamp = now
        return now
