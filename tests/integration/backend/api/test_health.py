"""
Integration Tests for Health Endpoints.
"""

import pytest
from httpx import AsyncClient

from note_service.backend.models import NoteInfo


class TestHealth:
    """Tests for /health and /health/ready."""

    @pytest.mark.asyncio
    async def test_liveness(self, client: AsyncClient):
        """Should report healthy while the process runs."""
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "X-Request-ID" in response.headers

    @pytest.mark.asyncio
    async def test_readiness_reports_note_count(self, client: AsyncClient, note_store):
        """Should include the number of stored notes."""
        note_store.create(NoteInfo(title="A", context="", author="", is_public=False))

        response = await client.get("/health/ready")

        assert response.status_code == 200
        check = response.json()["checks"]["note_store"]
        assert check == {"status": "healthy", "notes": 1}

    @pytest.mark.asyncio
    async def test_request_id_propagated(self, client: AsyncClient):
        """Should echo the caller's request id on API responses."""
        response = await client.get("/api/v1/notes", headers={"X-Request-ID": "trace-1"})

        assert response.headers["X-Request-ID"] == "trace-1"
        assert response.json()["metadata"]["request_id"] == "trace-1"
