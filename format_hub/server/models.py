"""Pydantic response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for response serialization
and the generated OpenAPI docs.

HOW: One model per response shape. FormatInfo mirrors FileFormat but
exposes the read/write flags under their wire names ``from`` and ``to``.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- ``from`` is a Python keyword, so FormatInfo stores it as ``from_``
  with an alias and always serializes by alias
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FormatInfo(BaseModel):
    """One supported format as seen by API clients."""

    model_config = ConfigDict(populate_by_name=True)

    handler: str = Field(description="Name of the handler that owns this format.")
    name: str = Field(description="Human-readable format name.")
    format: str = Field(description="Short display code, e.g. 'SRT'.")
    extension: str = Field(description="File extension without the dot.")
    mime: str = Field(description="MIME type of the format.")
    from_: bool = Field(alias="from", description="The handler can read this format.")
    to: bool = Field(description="The handler can write this format.")
    internal: str = Field(description="Routing id used for input_format / output_format.")


class ErrorResponse(BaseModel):
    """Error body returned for 4xx responses."""

    detail: str = Field(description="Human-readable error message.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service status, always 'ok' when reachable.")
    version: str = Field(description="Package version.")
