"""
Exception Handlers.

Translate failures into responses. One failure has two encodings:

    HTTP API  ->  ErrorResponse envelope  {"success": false, "error": {...}}
    RPC       ->  RpcStatus body          {"code": "NOT_FOUND", "message": ...}

The encoding is picked from the request path: anything under
``app.state.rpc_prefix`` is an RPC call.

Usage:
    app = FastAPI()
    app.state.rpc_prefix = "/rpc"
    register_exception_handlers(app)
"""

from typing import Any, NamedTuple

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from note_service.backend.core.exceptions import (
    ApplicationError,
    IdentifierExhaustedError,
    NotFoundError,
    ValidationError,
)
from note_service.backend.core.logging import get_logger
from note_service.backend.schemas.base import ErrorDetail, ErrorResponse, ResponseMetadata
from note_service.backend.schemas.rpc import RpcStatus

logger = get_logger(__name__)


class ErrorMapping(NamedTuple):
    status_code: int
    rpc_code: str


INTERNAL = ErrorMapping(500, "INTERNAL")
REQUEST_INVALID = ErrorMapping(400, "INVALID_ARGUMENT")

ERROR_MAP: dict[type[ApplicationError], ErrorMapping] = {
    NotFoundError: ErrorMapping(404, "NOT_FOUND"),
    ValidationError: ErrorMapping(400, "INVALID_ARGUMENT"),
    IdentifierExhaustedError: ErrorMapping(500, "RESOURCE_EXHAUSTED"),
}


def _get_request_id(request: Request) -> str | None:
    """Request ID from request.state, else the X-Request-ID header."""
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return request.headers.get("x-request-id")


def _is_rpc_request(request: Request) -> bool:
    prefix = getattr(request.app.state, "rpc_prefix", None)
    return isinstance(prefix, str) and request.url.path.startswith(prefix + "/")


def _error_response(
    request: Request,
    mapping: ErrorMapping,
    code: str,
    message: str,
    details: Any = None,
) -> JSONResponse:
    """
    Encode one failure for the transport that received the request.

    ``code`` is the envelope error code; RPC bodies carry
    ``mapping.rpc_code`` instead. RPC details are always a list.
    """
    if _is_rpc_request(request):
        if details is not None and not isinstance(details, list):
            details = [details]
        body = RpcStatus(code=mapping.rpc_code, message=message, details=details)
        content = body.model_dump(mode="json", exclude_none=True)
    else:
        body = ErrorResponse(
            error=ErrorDetail(code=code, message=message, details=details),
            metadata=ResponseMetadata(request_id=_get_request_id(request)),
        )
        content = body.model_dump(mode="json")
    return JSONResponse(status_code=mapping.status_code, content=content)


async def application_error_handler(request: Request, exc: ApplicationError) -> JSONResponse:
    """Unmapped ApplicationError subclasses are treated as internal errors."""
    mapping = ERROR_MAP.get(type(exc), INTERNAL)

    log = logger.error if mapping.status_code >= 500 else logger.warning
    log(
        "Server error" if mapping.status_code >= 500 else "Client error",
        extra={
            "code": exc.code,
            "message": exc.message,
            "status": mapping.status_code,
            "path": request.url.path,
            "method": request.method,
        },
    )

    details = getattr(exc, "details", None) or None
    return _error_response(request, mapping, exc.code, exc.message, details)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Request bodies, query strings or path ids that fail to decode.

    Reported as 400 on both transports.
    """
    validation_errors = [
        {
            "field": ".".join(str(loc) for loc in err.get("loc", [])),
            "message": err.get("msg", "Validation error"),
            "type": err.get("type", "unknown"),
        }
        for err in exc.errors()
    ]

    logger.warning(
        "Request validation failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(validation_errors),
        },
    )

    if _is_rpc_request(request):
        return _error_response(
            request,
            REQUEST_INVALID,
            "VAL_REQUEST_INVALID",
            "Request message could not be decoded",
            validation_errors,
        )
    return _error_response(
        request,
        REQUEST_INVALID,
        "VAL_REQUEST_INVALID",
        "Request validation failed",
        {"validation_errors": validation_errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything else. The exception text never reaches the client."""
    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
        },
    )
    return _error_response(request, INTERNAL, "SYS_INTERNAL_ERROR", "An unexpected error occurred")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
