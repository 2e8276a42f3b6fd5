"""
RPC Schemas.

Well-known message types shared by RPC services, and the status body
returned when an RPC fails.

Wrapper messages (StringValue, BoolValue) make a scalar nullable: a
missing wrapper means "not set", while a wrapper holding "" or false
is a real value.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class Message(BaseModel):
    """Base for RPC messages: unknown fields are a decode error."""

    model_config = ConfigDict(extra="forbid", from_attributes=True)


class Empty(Message):
    """Empty acknowledgement."""


class StringValue(Message):
    """Nullable string wrapper."""

    value: str = ""


class BoolValue(Message):
    """Nullable bool wrapper."""

    value: bool = False


class RpcStatus(BaseModel):
    """Error body for a failed RPC."""

    code: str
    message: str
    details: list[dict[str, Any]] | None = None
