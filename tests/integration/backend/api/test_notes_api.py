"""
Integration Tests for Notes API.

Tests the notes API endpoints against a real in-memory store.
"""

from datetime import datetime

import pytest
from httpx import AsyncClient

from note_service.backend.core.exceptions import IdentifierExhaustedError
from note_service.backend.models import NoteInfo
from note_service.backend.store.note_store import NoteStore

NOTES = "/api/v1/notes"


class TestCreateNote:
    """Tests for POST /api/v1/notes."""

    @pytest.mark.asyncio
    async def test_create_note_success(self, client: AsyncClient, api, note_info_payload):
        """Should create a note and return it."""
        response = await client.post(NOTES, json=note_info_payload)

        data = api.assert_success(response, expected_status=201)
        note = data["data"]
        assert note["info"] == note_info_payload
        assert isinstance(note["id"], int)
        assert note["id"] >= 0
        assert note["created_at"] == note["updated_at"]
        assert datetime.fromisoformat(note["created_at"]).tzinfo is not None

    @pytest.mark.asyncio
    async def test_create_then_get_round_trips(self, client: AsyncClient, api, note_info_payload):
        """Should return the same info from a subsequent GET."""
        created = api.assert_success(await client.post(NOTES, json=note_info_payload), 201)

        response = await client.get(f"{NOTES}/{created['data']['id']}")

        assert api.assert_success(response)["data"] == created["data"]

    @pytest.mark.asyncio
    async def test_create_note_missing_field_fails(self, client: AsyncClient, api):
        """Should reject a body without every NoteInfo field."""
        response = await client.post(NOTES, json={"title": "Only title"})

        api.assert_validation_error(response, field="context")

    @pytest.mark.asyncio
    async def test_create_note_wrong_type_fails(self, client: AsyncClient, api, note_info_payload):
        """Should reject a non-boolean is_public."""
        note_info_payload["is_public"] = "maybe"

        response = await client.post(NOTES, json=note_info_payload)

        api.assert_validation_error(response, field="is_public")

    @pytest.mark.asyncio
    async def test_create_note_malformed_json_fails(self, client: AsyncClient, api):
        """Should reject a body that is not JSON."""
        response = await client.post(
            NOTES,
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        api.assert_validation_error(response)

    @pytest.mark.asyncio
    async def test_create_note_over_limit_fails(self, client: AsyncClient, api, note_info_payload):
        """Should reject a title longer than the configured limit."""
        note_info_payload["title"] = "x" * 256

        response = await client.post(NOTES, json=note_info_payload)

        data = api.assert_error(response, 400, "VAL_VALIDATION_ERROR")
        assert "title" in data["error"]["details"]

    @pytest.mark.asyncio
    async def test_identifier_exhaustion_is_server_error(self, api, note_info_payload):
        """Should map identifier exhaustion to 500."""
        from httpx import ASGITransport

        from note_service.backend.main import create_app

        store = NoteStore(id_factory=lambda: 1, id_max_attempts=2)
        store.create(NoteInfo(title="", context="", author="", is_public=False))
        app = create_app(store=store)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
            response = await c.post(NOTES, json=note_info_payload)

        api.assert_error(response, 500, IdentifierExhaustedError().code)
        assert store.count() == 1


class TestGetNote:
    """Tests for GET /api/v1/notes/{note_id}."""

    @pytest.mark.asyncio
    async def test_get_note_success(self, client: AsyncClient, note_store: NoteStore, api):
        """Should return a note by ID."""
        note = note_store.create(NoteInfo(title="Get Test", context="C", author="A", is_public=False))

        response = await client.get(f"{NOTES}/{note.id}")

        data = api.assert_success(response)
        assert data["data"]["id"] == note.id
        assert data["data"]["info"]["title"] == "Get Test"
        assert data["data"]["info"]["is_public"] is False

    @pytest.mark.asyncio
    async def test_get_note_not_found(self, client: AsyncClient, api):
        """Should return 404 for a nonexistent note."""
        response = await client.get(f"{NOTES}/12345")

        api.assert_error(response, 404, "RES_NOT_FOUND")

    @pytest.mark.asyncio
    async def test_get_note_non_numeric_id(self, client: AsyncClient, api):
        """Should return 400 for an id that is not an integer."""
        response = await client.get(f"{NOTES}/not-a-number")

        api.assert_validation_error(response, field="note_id")


class TestListNotes:
    """Tests for GET /api/v1/notes."""

    @pytest.mark.asyncio
    async def test_list_notes_empty(self, client: AsyncClient, api):
        """Should return an empty page with zero total."""
        response = await client.get(NOTES)

        data = api.assert_success(response)
        assert data["data"] == []
        assert data["pagination"]["total"] == 0
        assert data["pagination"]["has_more"] is False

    @pytest.mark.asyncio
    async def test_list_notes_in_insertion_order(self, client: AsyncClient, api, note_store):
        """Should page through notes in the order they were created."""
        for title in ("A", "B", "C"):
            note_store.create(NoteInfo(title=title, context="", author="", is_public=True))

        response = await client.get(NOTES, params={"limit": 2, "offset": 1})

        data = api.assert_success(response)
        assert [note["info"]["title"] for note in data["data"]] == ["B", "C"]
        assert data["pagination"] == {"total": 3, "limit": 2, "offset": 1, "has_more": False}

    @pytest.mark.asyncio
    async def test_list_notes_offset_past_end(self, client: AsyncClient, api, note_store):
        """Should return an empty page past the last note."""
        note_store.create(NoteInfo(title="A", context="", author="", is_public=True))

        response = await client.get(NOTES, params={"limit": 10, "offset": 5})

        assert api.assert_success(response)["data"] == []

    @pytest.mark.asyncio
    async def test_list_notes_int64_max_offset(self, client: AsyncClient, api, note_store):
        """Should return an empty page for an offset at the int64 maximum."""
        note_store.create(NoteInfo(title="A", context="", author="", is_public=True))

        response = await client.get(NOTES, params={"offset": 2**63 - 1})

        data = api.assert_success(response)
        assert data["data"] == []
        assert data["pagination"]["total"] == 1
        assert data["pagination"]["has_more"] is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [{"limit": 0}, {"limit": 101}, {"offset": -1}])
    async def test_list_notes_invalid_paging(self, client: AsyncClient, api, params):
        """Should reject out-of-range paging parameters."""
        response = await client.get(NOTES, params=params)

        api.assert_validation_error(response)


class TestUpdateNote:
    """Tests for PATCH /api/v1/notes/{note_id}."""

    @pytest.fixture
    def existing(self, note_store: NoteStore):
        return note_store.create(
            NoteInfo(title="Title", context="Body", author="Ada", is_public=True)
        )

    @pytest.mark.asyncio
    async def test_update_single_field(self, client: AsyncClient, api, existing):
        """Should change only the field that was sent."""
        response = await client.patch(f"{NOTES}/{existing.id}", json={"context": "Z"})

        data = api.assert_success(response)
        assert data["data"]["info"] == {
            "title": "Title",
            "context": "Z",
            "author": "Ada",
            "is_public": True,
        }
        assert datetime.fromisoformat(data["data"]["created_at"]) == existing.created_at

    @pytest.mark.asyncio
    async def test_update_false_and_empty_values(self, client: AsyncClient, api, existing):
        """Should apply false and empty string as real values."""
        response = await client.patch(
            f"{NOTES}/{existing.id}",
            json={"is_public": False, "author": ""},
        )

        info = api.assert_success(response)["data"]["info"]
        assert info["is_public"] is False
        assert info["author"] == ""
        assert info["title"] == "Title"

    @pytest.mark.asyncio
    async def test_empty_patch_bumps_updated_at(self, client: AsyncClient, api, existing):
        """Should refresh updated_at for an empty body."""
        response = await client.patch(f"{NOTES}/{existing.id}", json={})

        note = api.assert_success(response)["data"]
        assert datetime.fromisoformat(note["updated_at"]) > existing.updated_at
        assert note["info"]["title"] == "Title"

    @pytest.mark.asyncio
    async def test_update_null_rejected(self, client: AsyncClient, api, existing, note_store):
        """Should reject an explicit null and leave the note untouched."""
        response = await client.patch(f"{NOTES}/{existing.id}", json={"title": None})

        api.assert_validation_error(response, field="title")
        assert note_store.get(existing.id) == existing

    @pytest.mark.asyncio
    async def test_update_unknown_field_rejected(self, client: AsyncClient, api, existing):
        """Should reject fields that notes do not have."""
        response = await client.patch(f"{NOTES}/{existing.id}", json={"colour": "blue"})

        api.assert_validation_error(response, field="colour")

    @pytest.mark.asyncio
    async def test_update_not_found(self, client: AsyncClient, api):
        """Should return 404 for a nonexistent note."""
        response = await client.patch(f"{NOTES}/999", json={"title": "x"})

        api.assert_error(response, 404, "RES_NOT_FOUND")


class TestDeleteNote:
    """Tests for DELETE /api/v1/notes/{note_id}."""

    @pytest.mark.asyncio
    async def test_delete_note(self, client: AsyncClient, api, note_store):
        """Should delete the note and make it unreachable."""
        note = note_store.create(NoteInfo(title="Bye", context="", author="", is_public=False))

        response = await client.delete(f"{NOTES}/{note.id}")

        assert response.status_code == 204
        assert response.content == b""
        api.assert_error(await client.get(f"{NOTES}/{note.id}"), 404, "RES_NOT_FOUND")
        api.assert_error(await client.delete(f"{NOTES}/{note.id}"), 404, "RES_NOT_FOUND")
