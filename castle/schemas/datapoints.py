"""
Datapoint Model

A datapoint is a named, typed measurement or control point. Three identity
variants exist, tagged by `kind`:

- global: system-wide unique `id`, no device reference
- device: `deviceId` + device-local `localId`, with a derived global `id`
- local: only a `localId`, used inside device type templates

When `kind` is missing on the wire, the variant is inferred from which
identity fields are present.
"""

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import Discriminator, Field, Tag, model_validator
from pydantic.alias_generators import to_camel

from .base import CastleModel
from .value_types import ValueType, ValueUnit, check_unit_for_type


LocalDatapointId = str
PublicDatapointId = str


def device_datapoint_id(device_id: str, local_id: LocalDatapointId) -> str:
    """Derive the global id of a device datapoint."""
    return f"{device_id}.{local_id}"


# ============================================================================
# Datapoint variants
# ============================================================================

class DatapointAspects(CastleModel):
    """Descriptive aspects shared by all datapoint variants."""
    name: str = Field(..., description="Display name")
    note: Optional[str] = None
    value_type: ValueType
    value_unit: Optional[ValueUnit] = Field(
        None, description="Physical unit, only for valueType 'number'"
    )

    @model_validator(mode="after")
    def _check_unit(self) -> "DatapointAspects":
        check_unit_for_type(self.value_type, self.value_unit)
        return self


class GlobalDatapoint(DatapointAspects):
    """Datapoint with a system-wide unique id."""
    kind: Literal["global"] = "global"
    id: str = Field(..., min_length=1)


class DeviceDatapoint(DatapointAspects):
    """Datapoint belonging to a device; `id` is derived when omitted."""
    kind: Literal["device"] = "device"
    device_id: str = Field(..., min_length=1)
    local_id: LocalDatapointId = Field(..., min_length=1)
    id: str = Field(..., min_length=1)

    @model_validator(mode="before")
    @classmethod
    def _derive_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("id"):
            device_id = data.get("deviceId", data.get("device_id"))
            local_id = data.get("localId", data.get("local_id"))
            if device_id and local_id:
                data = {**data, "id": device_datapoint_id(device_id, local_id)}
        return data


class LocalDatapoint(DatapointAspects):
    """Template datapoint, identified only within its device."""
    kind: Literal["local"] = "local"
    local_id: LocalDatapointId = Field(..., min_length=1)


def _datapoint_kind(value: Any) -> Optional[str]:
    if isinstance(value, Mapping):
        kind = value.get("kind")
        if kind:
            return kind
        if value.get("deviceId") or value.get("device_id"):
            return "device"
        if value.get("id"):
            return "global"
        return "local"
    return getattr(value, "kind", None)


AnyDatapoint = Annotated[
    Union[
        Annotated[GlobalDatapoint, Tag("global")],
        Annotated[DeviceDatapoint, Tag("device")],
        Annotated[LocalDatapoint, Tag("local")],
    ],
    Discriminator(_datapoint_kind),
]

UniqueDatapoint = Annotated[
    Union[
        Annotated[GlobalDatapoint, Tag("global")],
        Annotated[DeviceDatapoint, Tag("device")],
    ],
    Discriminator(_datapoint_kind),
]


# ============================================================================
# Constructors
# ============================================================================

def global_datapoint(
    id: str,
    name: str,
    value_type: ValueType,
    value_unit: Optional[ValueUnit] = None,
    note: Optional[str] = None,
) -> GlobalDatapoint:
    """Create a system-wide datapoint."""
    return GlobalDatapoint(
        id=id, name=name, value_type=value_type, value_unit=value_unit, note=note
    )


def device_datapoint(
    device_id: str,
    local_id: LocalDatapointId,
    name: str,
    value_type: ValueType,
    value_unit: Optional[ValueUnit] = None,
    note: Optional[str] = None,
) -> DeviceDatapoint:
    """Create a device datapoint with its derived global id."""
    return DeviceDatapoint(
        device_id=device_id,
        local_id=local_id,
        id=device_datapoint_id(device_id, local_id),
        name=name,
        value_type=value_type,
        value_unit=value_unit,
        note=note,
    )


def local_datapoint(
    local_id: LocalDatapointId,
    name: str,
    value_type: ValueType,
    value_unit: Optional[ValueUnit] = None,
    note: Optional[str] = None,
) -> LocalDatapoint:
    """Create a template datapoint for a device type."""
    return LocalDatapoint(
        local_id=local_id,
        name=name,
        value_type=value_type,
        value_unit=value_unit,
        note=note,
    )


def instantiate(datapoint: LocalDatapoint, device_id: str) -> DeviceDatapoint:
    """Bind a template datapoint to a concrete device."""
    return device_datapoint(
        device_id,
        datapoint.local_id,
        name=datapoint.name,
        value_type=datapoint.value_type,
        value_unit=datapoint.value_unit,
        note=datapoint.note,
    )


# ============================================================================
# Identity predicates
# ============================================================================

def _identity_field(datapoint: Any, name: str) -> Any:
    if isinstance(datapoint, Mapping):
        return datapoint.get(to_camel(name)) or datapoint.get(name)
    return getattr(datapoint, name, None)


def is_local_datapoint(datapoint: Any) -> bool:
    """
    Check if a datapoint is a template-local one.

    True when neither a global id nor a device id is set. Accepts models
    and wire mappings.
    """
    return not _identity_field(datapoint, "id") and not _identity_field(
        datapoint, "device_id"
    )


def is_device_datapoint(datapoint: Any) -> bool:
    """
    Check if a datapoint is scoped to a device.

    True when both a device id and a local id are set. A global datapoint
    satisfies neither this nor is_local_datapoint.
    """
    return bool(_identity_field(datapoint, "device_id")) and bool(
        _identity_field(datapoint, "local_id")
    )


# ============================================================================
# Datapoint State
# ============================================================================

class DatapointState(CastleModel):
    """Timestamped observation of one datapoint."""
    id: str
    at: int = Field(..., description="Epoch milliseconds")
    value_num: Optional[float] = None
    value_string: Optional[str] = None

    @model_validator(mode="after")
    def _check_single_value(self) -> "DatapointState":
        if (self.value_num is None) == (self.value_string is None):
            raise ValueError("exactly one of valueNum and valueString must be set")
        return self

    @property
    def value(self) -> Union[float, str]:
        return self.value_num if self.value_num is not None else self.value_string

    def value_matches(self, other: "DatapointState") -> bool:
        """Check if both states hold the same value."""
        return (
            self.value_num == other.value_num
            and self.value_string == other.value_string
        )
