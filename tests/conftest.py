"""
Root Pytest Fixtures.

Shared fixtures available to all test types.
"""

from datetime import datetime, timedelta, timezone

import pytest

from note_service.backend.models.note import NoteInfo


class FixedClock:
    """Clock that returns the same instant until advanced."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class ScriptedIds:
    """Identifier factory that replays a fixed sequence."""

    def __init__(self, *ids: int) -> None:
        self._ids = list(ids)
        self.calls = 0

    def __call__(self) -> int:
        value = self._ids[self.calls]
        self.calls += 1
        return value


# =============================================================================
# Note Fixtures
# =============================================================================


@pytest.fixture
def note_info() -> NoteInfo:
    """A fully populated public note."""
    return NoteInfo(
        title="Groceries",
        context="Milk, eggs, bread",
        author="Ada",
        is_public=True,
    )


@pytest.fixture
def note_info_payload() -> dict:
    """JSON body matching note_info."""
    return {
        "title": "Groceries",
        "context": "Milk, eggs, bread",
        "author": "Ada",
        "is_public": True,
    }


@pytest.fixture
def fixed_clock() -> FixedClock:
    """A clock frozen at 2024-01-01T12:00:00Z."""
    return FixedClock()


@pytest.fixture
def scripted_ids() -> type[ScriptedIds]:
    """
    Factory for identifier sequences.

    Usage:
        def test_collision(scripted_ids):
            store = NoteStore(id_factory=scripted_ids(7, 7, 9))
    """
    return ScriptedIds

