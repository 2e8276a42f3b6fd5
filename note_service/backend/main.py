"""
FastAPI application.

One application serves one NoteStore over two transports:

    {api_prefix}/notes                  HTTP API (envelope responses)
    {rpc_prefix}/note_v1.NoteV1/<M>     note_v1 RPC (message bodies)
    /health, /health/ready              health checks

For uvicorn: ``uvicorn note_service.backend.main:app``
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from note_service.backend.api import health
from note_service.backend.api.rpc import router as rpc_router
from note_service.backend.api.v1 import router as api_v1_router
from note_service.backend.core.concurrency import shutdown_pools
from note_service.backend.core.config import get_app_config
from note_service.backend.core.exception_handlers import register_exception_handlers
from note_service.backend.core.logging import get_logger, setup_logging
from note_service.backend.core.middleware import RequestContextMiddleware
from note_service.backend.store.note_store import NoteStore

logger = get_logger(__name__)

_app: FastAPI | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_app_config()
    setup_logging()

    logger.info(
        "Note service starting",
        extra={
            "env": settings.application.environment,
            "api_prefix": settings.application.api_prefix,
            "rpc_prefix": settings.application.rpc_prefix,
            "id_max_attempts": settings.store.id_max_attempts,
        },
    )
    yield

    # Notes live only in memory; they are gone once the process exits.
    logger.info("Note service stopping", extra={"notes": app.state.note_store.count()})
    await shutdown_pools()


def create_app(store: NoteStore | None = None) -> FastAPI:
    """
    Build the application around ``store``.

    When omitted, a fresh NoteStore configured from store.yaml is used.
    Tests pass their own store to seed or inspect it directly.
    """
    settings = get_app_config()
    app_settings = settings.application

    app = FastAPI(
        title=app_settings.name,
        description=app_settings.description,
        version=app_settings.version,
        debug=app_settings.debug,
        docs_url="/docs" if app_settings.docs_enabled else None,
        redoc_url="/redoc" if app_settings.docs_enabled else None,
        lifespan=lifespan,
    )

    if store is None:
        store = NoteStore(id_max_attempts=settings.store.id_max_attempts)
    app.state.note_store = store
    app.state.field_limits = settings.store.limits
    app.state.rpc_prefix = app_settings.rpc_prefix

    app.add_middleware(RequestContextMiddleware)
    if app_settings.cors.origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=app_settings.cors.origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_v1_router, prefix=app_settings.api_prefix)
    app.include_router(rpc_router, prefix=app_settings.rpc_prefix)

    return app


def get_app() -> FastAPI:
    """Process-wide application, created on first use."""
    global _app
    if _app is None:
        _app = create_app()
    return _app


def __getattr__(name: str) -> FastAPI:
    # Lazy `app` so importing this module never loads configuration.
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
