"""
Request Context Middleware.

Tags every request with an id, a frontend and, for RPC calls, the
method being invoked. The tags are bound to structlog for the life of
the request and echoed back in response headers.

Response headers:
    X-Request-ID      - Incoming id, or a fresh UUID
    X-Response-Time   - Handling time in milliseconds
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from note_service.backend.core.logging import VALID_SOURCES, get_logger

logger = get_logger(__name__)

KNOWN_FRONTENDS = VALID_SOURCES - {"unknown"}


def _rpc_method(request: Request) -> str | None:
    """Return "Service/Method" for paths under the app's RPC prefix."""
    prefix = getattr(request.app.state, "rpc_prefix", None)
    if not isinstance(prefix, str):
        return None
    path = request.url.path
    if not path.startswith(prefix + "/"):
        return None
    return path[len(prefix) + 1:] or None


def _frontend(request: Request, rpc_method: str | None) -> str:
    """
    Resolve the calling frontend from X-Frontend-ID.

    RPC calls without the header count as "rpc"; unrecognized values
    become "unknown".
    """
    header = request.headers.get("X-Frontend-ID")
    if header is None:
        return "rpc" if rpc_method else "unknown"
    frontend = header.lower()
    return frontend if frontend in KNOWN_FRONTENDS else "unknown"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Binds request_id, frontend, method, path and rpc_method (RPC only)
    to structlog contextvars and stores request_id and frontend on
    request.state.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        rpc_method = _rpc_method(request)
        frontend = _frontend(request, rpc_method)

        request.state.request_id = request_id
        request.state.frontend = frontend

        context = {
            "request_id": request_id,
            "frontend": frontend,
            "method": request.method,
            "path": request.url.path,
        }
        if rpc_method:
            context["rpc_method"] = rpc_method

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(**context)

        logger.debug(
            "Request started",
            extra={"client_host": request.client.host if request.client else None},
        )

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed with exception",
                extra={
                    "duration_ms": int((time.perf_counter() - start) * 1000),
                    "error_type": type(exc).__name__,
                },
            )
            raise
        else:
            duration_ms = int((time.perf_counter() - start) * 1000)
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"

            logger.debug(
                "Request completed",
                extra={"status_code": response.status_code, "duration_ms": duration_ms},
            )
            return response
        finally:
            structlog.contextvars.clear_contextvars()
