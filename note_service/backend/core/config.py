"""
Configuration Management.

Every tunable lives in config/settings/*.yaml; each file is validated
against its schema in config_schema when first loaded:

    application.yaml   identity, server address, prefixes, pagination
    logging.yaml       level, renderer and handlers
    store.yaml         identifier policy and field limits
    concurrency.yaml   I/O pool sizing

The directory is found by walking up from the working directory to the
``.project_root`` marker.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from note_service.backend.core.config_schema import (
    ApplicationSchema,
    ConcurrencySchema,
    LoggingSchema,
    StoreSchema,
)

PROJECT_MARKER = ".project_root"
SETTINGS_SUBDIR = Path("config") / "settings"

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def find_project_root() -> Path:
    """
    Raises:
        RuntimeError: If no parent of the working directory holds the marker
    """
    cwd = Path.cwd().resolve()
    for candidate in (cwd, *cwd.parents):
        if (candidate / PROJECT_MARKER).exists():
            return candidate
    raise RuntimeError(f"Project root not found: no {PROJECT_MARKER} above {cwd}")


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Raw mapping from one settings file. An empty file yields {}."""
    path = find_project_root() / SETTINGS_SUBDIR / filename
    if not path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    return yaml.safe_load(path.read_text()) or {}


def _load_validated(schema_cls: type[SchemaT], filename: str) -> SchemaT:
    try:
        return schema_cls.model_validate(load_yaml_config(filename))
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {filename}:\n{e}") from e


@dataclass(frozen=True)
class AppConfig:
    """Validated contents of all settings files."""

    application: ApplicationSchema
    logging: LoggingSchema
    store: StoreSchema
    concurrency: ConcurrencySchema

    @classmethod
    def load(cls) -> "AppConfig":
        return cls(
            application=_load_validated(ApplicationSchema, "application.yaml"),
            logging=_load_validated(LoggingSchema, "logging.yaml"),
            store=_load_validated(StoreSchema, "store.yaml"),
            concurrency=_load_validated(ConcurrencySchema, "concurrency.yaml"),
        )


@lru_cache
def get_app_config() -> AppConfig:
    return AppConfig.load()


def get_server_base_url() -> tuple[str, float]:
    """(base_url, client timeout in seconds) for talking to the configured server."""
    application = get_app_config().application
    return (
        f"http://{application.server.host}:{application.server.port}",
        float(application.timeouts.client),
    )
