"""
Note Patch.

Partial update request for a note. Each field is tri-state: ABSENT
(leave untouched) or a present value, where "" and False are values
like any other.

Usage:
    patch = NotePatch(is_public=False)
    patch.changes()          # {"is_public": False}
    patch.apply(note.info)   # new NoteInfo with is_public=False
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Final

from note_service.backend.models.note import NoteInfo


class _Absent:
    """Marker type for a field the caller did not mention."""

    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_Absent":
        return self

    def __deepcopy__(self, memo: dict) -> "_Absent":
        return self

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT: Final = _Absent()


@dataclass(frozen=True, slots=True)
class NotePatch:
    """Per-field tri-state update for a NoteInfo."""

    title: str | _Absent = ABSENT
    context: str | _Absent = ABSENT
    author: str | _Absent = ABSENT
    is_public: bool | _Absent = ABSENT

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "NotePatch":
        """
        Build a patch from the fields present in a mapping.

        Keys missing from ``data`` are absent. Unknown keys raise TypeError.
        """
        return cls(**data)

    def changes(self) -> dict[str, Any]:
        """Return only the present fields, keyed by NoteInfo field name."""
        present = {}
        for field in fields(self):
            value = getattr(self, field.name)
            if value is not ABSENT:
                present[field.name] = value
        return present

    @property
    def is_empty(self) -> bool:
        """True when every field is absent."""
        return not self.changes()

    def apply(self, info: NoteInfo) -> NoteInfo:
        """Return ``info`` with every present field overwritten."""
        return replace(info, **self.changes())
