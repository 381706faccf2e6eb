"""HTTP services a castle server announces to its clients."""

from typing import Any, Literal, Optional

from pydantic import Field

from .base import CastleModel


class QueryParametersSchema(CastleModel):
    """JSON schema of a service's query parameters."""
    type: Literal["object"] = "object"
    properties: dict[str, Any] = Field(default_factory=dict)
    required: Optional[list[str]] = None


class SerializableService(CastleModel):
    url: str
    parameters: Optional[QueryParametersSchema] = None
    method: Literal["GET", "POST"]
    name: str
    scope: Optional[Literal["public", "private"]] = None
