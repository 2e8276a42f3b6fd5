"""
RPC Router.

Aggregates all RPC services. Mounted under the configured rpc_prefix.
"""

from fastapi import APIRouter

from note_service.backend.api.rpc import note_v1

router = APIRouter()

router.include_router(note_v1.router, tags=["rpc"])
