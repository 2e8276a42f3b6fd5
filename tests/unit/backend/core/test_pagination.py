"""
Unit Tests for Pagination Utilities.
"""

import pytest
from fastapi.exceptions import RequestValidationError

from note_service.backend.core.pagination import (
    PaginationParams,
    create_paginated_response,
    get_pagination_params,
)
from note_service.backend.models import NoteInfo
from note_service.backend.schemas.note import NoteResponse
from note_service.backend.store.note_store import NoteStore


class TestCreatePaginatedResponse:
    """Tests for create_paginated_response."""

    def _notes(self, count: int):
        store = NoteStore()
        for i in range(count):
            store.create(NoteInfo(title=str(i), context="", author="", is_public=False))
        return store

    def test_has_more_when_items_remain(self):
        """Should set has_more when the page ends before the total."""
        store = self._notes(5)
        page = store.list(limit=2, offset=1)

        result = create_paginated_response(
            items=page,
            item_schema=NoteResponse,
            total=5,
            limit=2,
            offset=1,
            request_id="req-1",
        )

        assert [item["info"]["title"] for item in result["data"]] == ["1", "2"]
        assert result["pagination"] == {"total": 5, "limit": 2, "offset": 1, "has_more": True}
        assert result["metadata"]["request_id"] == "req-1"
        assert result["success"] is True

    def test_last_page(self):
        """Should clear has_more on the final page."""
        store = self._notes(3)

        result = create_paginated_response(
            items=store.list(limit=2, offset=2),
            item_schema=NoteResponse,
            total=3,
            limit=2,
            offset=2,
        )

        assert len(result["data"]) == 1
        assert result["pagination"]["has_more"] is False

    def test_ids_serialize_as_integers(self):
        """Should keep note ids as JSON integers."""
        store = self._notes(1)

        result = create_paginated_response(
            items=store.list(limit=1),
            item_schema=NoteResponse,
            total=1,
            limit=1,
            offset=0,
        )

        assert isinstance(result["data"][0]["id"], int)


def test_pagination_params():
    """PaginationParams should hold limit and offset."""
    params = PaginationParams(limit=10, offset=20)

    assert (params.limit, params.offset) == (10, 20)


class TestGetPaginationParams:
    """Tests for the pagination dependency."""

    def test_default_limit_from_config(self):
        """Should fall back to the configured default page size."""
        from note_service.backend.core.config import get_app_config

        params = get_pagination_params(limit=None, offset=0)

        assert params.limit == get_app_config().application.pagination.default_limit

    def test_limit_above_maximum_rejected(self):
        """Should reject a limit above the configured maximum."""
        from note_service.backend.core.config import get_app_config

        max_limit = get_app_config().application.pagination.max_limit

        with pytest.raises(RequestValidationError) as exc_info:
            get_pagination_params(limit=max_limit + 1, offset=0)

        assert exc_info.value.errors()[0]["loc"] == ("query", "limit")
