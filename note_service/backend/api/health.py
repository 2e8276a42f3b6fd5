"""
Health Check Endpoints.

Endpoints:
- /health: Liveness check (process running)
- /health/ready: Readiness check (note store reachable)
"""

from typing import Any

from fastapi import APIRouter

from note_service.backend.core.dependencies import NoteServiceDep
from note_service.backend.store.note_store import utc_now

router = APIRouter()


@router.get("/health", summary="Liveness check")
async def health() -> dict[str, Any]:
    """Return OK while the process is running."""
    return {"status": "healthy", "timestamp": utc_now().isoformat()}


@router.get("/health/ready", summary="Readiness check")
async def ready(service: NoteServiceDep) -> dict[str, Any]:
    """Report readiness with the current note count."""
    return {
        "status": "healthy",
        "timestamp": utc_now().isoformat(),
        "checks": {"note_store": {"status": "healthy", "notes": await service.count_notes()}},
    }
