"""
Model Base

Common pydantic configuration for every shared castle record.
Attribute names are snake_case in Python and camelCase on the wire.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CastleModel(BaseModel):
    """Immutable record exchanged between the castle server and its clients."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )


def to_wire(model: BaseModel) -> dict[str, Any]:
    """Dump a model to its JSON-compatible wire form."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)
