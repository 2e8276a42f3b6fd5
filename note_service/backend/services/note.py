"""
Note Service.

Business logic layer for notes, shared by the HTTP and RPC transports.
Validates field limits, dispatches to the note store and logs.
"""

from collections.abc import Sequence

from note_service.backend.core.config_schema import FieldLimitsSchema
from note_service.backend.models.note import Note, NoteInfo
from note_service.backend.models.patch import NotePatch
from note_service.backend.services.base import BaseService
from note_service.backend.store.note_store import NoteStore


class NoteService(BaseService):
    """
    Service for note operations.

    Field limits are optional; without them any string length is accepted.
    """

    def __init__(
        self,
        store: NoteStore,
        limits: FieldLimitsSchema | None = None,
    ) -> None:
        super().__init__(store)
        self._limits = limits

    async def create_note(self, info: NoteInfo) -> Note:
        """
        Create a new note.

        Raises:
            ValidationError: If a field exceeds its configured limit
            IdentifierExhaustedError: If no identifier could be allocated
        """
        self._check_limits(
            title=info.title,
            context=info.context,
            author=info.author,
        )
        self._log_operation("Creating note", title=info.title)

        note = await self._run_store_call(self.store.create, info)

        self._log_debug("Note created", note_id=note.id)
        return note

    async def get_note(self, note_id: int) -> Note:
        """
        Get a note by ID.

        Raises:
            NotFoundError: If note not found
        """
        return await self._run_store_call(self.store.get, note_id)

    async def list_notes(self, limit: int, offset: int = 0) -> Sequence[Note]:
        """
        List notes in insertion order.

        Raises:
            ValidationError: If offset is negative
        """
        return await self._run_store_call(self.store.list, limit, offset)

    async def list_notes_paginated(
        self,
        limit: int,
        offset: int = 0,
    ) -> tuple[Sequence[Note], int]:
        """
        List notes with total count for pagination.

        The page and the total are read separately, so a concurrent write
        between the two can make them disagree by that write.

        Returns:
            Tuple of (notes, total count)
        """
        notes = await self.list_notes(limit=limit, offset=offset)
        total = await self.count_notes()
        return notes, total

    async def count_notes(self) -> int:
        """Number of stored notes."""
        return await self._run_store_call(self.store.count)

    async def update_note(self, note_id: int, patch: NotePatch) -> Note:
        """
        Patch an existing note. Absent fields are left untouched.

        Raises:
            NotFoundError: If note not found
            ValidationError: If a present field exceeds its configured limit
        """
        changes = patch.changes()
        self._check_limits(**{
            name: value for name, value in changes.items() if isinstance(value, str)
        })
        self._log_operation(
            "Updating note",
            note_id=note_id,
            fields=list(changes.keys()),
        )

        return await self._run_store_call(self.store.update, note_id, patch)

    async def delete_note(self, note_id: int) -> None:
        """
        Delete a note.

        Raises:
            NotFoundError: If note not found
        """
        self._log_operation("Deleting note", note_id=note_id)
        await self._run_store_call(self.store.delete, note_id)

    def _check_limits(self, **values: str) -> None:
        if self._limits is None:
            return
        for field_name, value in values.items():
            self._validate_max_length(
                value,
                field_name,
                getattr(self._limits, f"{field_name}_max_length"),
            )
