"""
Centralized Logging Configuration.

All modules log through structlog as configured here. Settings come
from config/settings/logging.yaml and may be overridden per call to
setup_logging (the CLIs do this for --verbose/--debug).

Fields in every JSON record:
    timestamp, level, logger, event, func_name, lineno
    request_id, frontend, method, path   (inside an HTTP request)
    rpc_method                            (inside an RPC call)
    source                                (when passed explicitly)

Keys passed as ``extra={...}`` are lifted to top-level fields.

Usage:
    from note_service.backend.core.logging import get_logger, setup_logging

    setup_logging()
    setup_logging(level="DEBUG", format_type="console")

    logger = get_logger(__name__)
    logger.info("Note created", extra={"note_id": 42})

    log_with_source(logger, "cli", "info", "Note fetched", note_id=42)
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Any

import structlog
from structlog.typing import EventDict, Processor

from note_service.backend.core.config import find_project_root, get_app_config
from note_service.backend.core.config_schema import FileHandlerSchema

VALID_SOURCES = frozenset({
    "web",
    "cli",
    "api",
    "rpc",
    "internal",
    "unknown",
})
"""Recognized values for the ``source`` field. Set by the caller, never inferred."""

QUIET_LOGGERS = ("uvicorn.access",)


def _lift_extra(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Merge an ``extra`` mapping into the event dict without overwriting keys."""
    extra = event_dict.pop("extra", None)
    if isinstance(extra, dict):
        for key, value in extra.items():
            event_dict.setdefault(key, value)
    return event_dict


def _normalize_source(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    source = event_dict.get("source")
    if source is not None and source not in VALID_SOURCES:
        event_dict["source"] = "unknown"
    return event_dict


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        _lift_extra,
        _normalize_source,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]


def _file_handler(settings: FileHandlerSchema, formatter: logging.Formatter) -> logging.Handler:
    """Rotating JSONL handler; the path is relative to the project root."""
    log_path = find_project_root() / settings.path
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=settings.max_bytes,
        backupCount=settings.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Arguments left as None fall back to logging.yaml.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: Console output format ('json' or 'console')
        enable_console: Whether to log to stdout
        enable_file_logging: Whether to write the rotating JSONL file
    """
    settings = get_app_config().logging
    handlers = settings.handlers

    effective_level = (level or settings.level).upper()
    effective_format = format_type or settings.format
    console_enabled = handlers.console.enabled if enable_console is None else enable_console
    file_enabled = handlers.file.enabled if enable_file_logging is None else enable_file_logging

    processors = _shared_processors()

    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=processors,
    )
    if effective_format == "console":
        console_formatter = structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
            foreign_pre_chain=processors,
        )
    else:
        console_formatter = json_formatter

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, effective_level))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if console_enabled:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    if file_enabled:
        root_logger.addHandler(_file_handler(handlers.file, json_formatter))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Get a structlog logger for the given name, typically __name__."""
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log a message with an explicit source.

    Use this outside of HTTP request context (CLI commands, scripts).

    Raises:
        AttributeError: If level is not a valid log level
    """
    log_method = getattr(logger, level.lower())
    log_method(message, source=source, **kwargs)
