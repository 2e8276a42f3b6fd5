"""
Base Service.

Services sit between the transports and the note store. The store is
synchronous and lock-based, so every store call is pushed onto the
shared I/O pool instead of running on the event loop.

Usage:
    class NoteService(BaseService):
        async def get_note(self, note_id: int) -> Note:
            return await self._run_store_call(self.store.get, note_id)
"""

import asyncio
from collections.abc import Callable
from typing import Any, TypeVar

from note_service.backend.core.concurrency import get_io_pool
from note_service.backend.core.exceptions import ValidationError
from note_service.backend.core.logging import get_logger
from note_service.backend.store.note_store import NoteStore

T = TypeVar("T")


class BaseService:
    """Holds the store and a logger named after the concrete service module."""

    def __init__(self, store: NoteStore) -> None:
        self._store = store
        self._logger = get_logger(self.__class__.__module__)

    @property
    def store(self) -> NoteStore:
        return self._store

    async def _run_store_call(self, fn: Callable[..., T], *args: Any) -> T:
        """
        Await ``fn(*args)`` on the I/O pool.

        The pool copies contextvars, so request-scoped log fields follow
        the call into the worker thread.
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(get_io_pool(), fn, *args)

    def _validate_max_length(self, value: str, field_name: str, max_length: int) -> None:
        """
        Raises:
            ValidationError: If value is longer than max_length
        """
        if len(value) > max_length:
            raise ValidationError(
                f"{field_name} too long",
                details={field_name: f"Maximum length is {max_length}"},
            )

    def _log_operation(self, operation: str, **context: Any) -> None:
        self._logger.info(operation, extra={"service": self.__class__.__name__, **context})

    def _log_debug(self, message: str, **context: Any) -> None:
        self._logger.debug(message, extra={"service": self.__class__.__name__, **context})
