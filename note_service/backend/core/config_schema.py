"""
Configuration Schemas.

One model per settings file. Unknown keys are rejected so a typo in YAML
fails at startup rather than being silently ignored.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _StrictBase(BaseModel):
    model_config = ConfigDict(extra="forbid")


# application.yaml


class ServerSchema(_StrictBase):
    host: str
    port: int = Field(gt=0, lt=65536)


class CorsSchema(_StrictBase):
    origins: list[str] = Field(default_factory=list)


class PaginationSchema(_StrictBase):
    default_limit: int = Field(ge=1)
    max_limit: int = Field(ge=1)

    @model_validator(mode="after")
    def _default_within_max(self) -> "PaginationSchema":
        if self.default_limit > self.max_limit:
            raise ValueError("default_limit must not exceed max_limit")
        return self


class TimeoutsSchema(_StrictBase):
    client: float = Field(gt=0)


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    environment: str
    debug: bool
    api_prefix: str
    rpc_prefix: str
    docs_enabled: bool
    server: ServerSchema
    cors: CorsSchema
    pagination: PaginationSchema
    timeouts: TimeoutsSchema


# logging.yaml


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int = Field(gt=0)
    backup_count: int = Field(ge=0)


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    format: Literal["json", "console"]
    handlers: HandlersSchema


# store.yaml


class FieldLimitsSchema(_StrictBase):
    """Maximum lengths, in characters, of the free-text note fields."""

    title_max_length: int = Field(gt=0)
    context_max_length: int = Field(gt=0)
    author_max_length: int = Field(gt=0)


class StoreSchema(_StrictBase):
    id_max_attempts: int = Field(ge=1)
    limits: FieldLimitsSchema


# concurrency.yaml


class ThreadPoolSchema(_StrictBase):
    max_workers: int = Field(ge=1)


class ConcurrencySchema(_StrictBase):
    thread_pool: ThreadPoolSchema
