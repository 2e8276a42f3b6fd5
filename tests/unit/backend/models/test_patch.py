"""
Unit Tests for NotePatch.

Tests tri-state field handling: absent vs present, including falsy values.
"""

import copy
import pickle

import pytest

from note_service.backend.models import ABSENT, NoteInfo, NotePatch


class TestAbsent:
    """Tests for the ABSENT marker."""

    def test_absent_is_falsy_singleton(self):
        """Should be a falsy singleton that survives copying."""
        assert not ABSENT
        assert repr(ABSENT) == "ABSENT"
        assert copy.copy(ABSENT) is ABSENT
        assert copy.deepcopy(ABSENT) is ABSENT
        assert pickle.loads(pickle.dumps(ABSENT)) is ABSENT


class TestNotePatch:
    """Tests for building and applying patches."""

    def test_default_patch_is_empty(self):
        """Should start with every field absent."""
        patch = NotePatch()

        assert patch.is_empty
        assert patch.changes() == {}

    def test_falsy_values_are_present(self):
        """Should treat "" and False as present values."""
        patch = NotePatch(context="", is_public=False)

        assert not patch.is_empty
        assert patch.changes() == {"context": "", "is_public": False}

    def test_from_mapping_only_sets_given_keys(self):
        """Should leave keys missing from the mapping absent."""
        patch = NotePatch.from_mapping({"title": "T"})

        assert patch.title == "T"
        assert patch.context is ABSENT
        assert patch.author is ABSENT
        assert patch.is_public is ABSENT

    def test_from_mapping_rejects_unknown_keys(self):
        """Should refuse fields that NoteInfo does not have."""
        with pytest.raises(TypeError):
            NotePatch.from_mapping({"colour": "blue"})

    def test_apply_overwrites_present_fields_only(self):
        """Should return a new NoteInfo with only present fields replaced."""
        info = NoteInfo(title="A", context="B", author="C", is_public=True)

        result = NotePatch(author="D", is_public=False).apply(info)

        assert result == NoteInfo(title="A", context="B", author="D", is_public=False)
        assert info.author == "C"

    def test_empty_patch_apply_is_identity(self):
        """Should leave the info unchanged when nothing is present."""
        info = NoteInfo(title="A", context="B", author="C", is_public=True)

        assert NotePatch().apply(info) == info
