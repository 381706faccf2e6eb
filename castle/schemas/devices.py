"""
Device Model

Devices (physical or simulated) expose local datapoints. Device types are
reusable templates describing which datapoints a device of that type has.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Literal, Optional, Union

from pydantic import Field, model_validator

from .base import CastleModel
from .datapoints import DatapointState, LocalDatapoint


class PhysicalDeviceTypeId(str, Enum):
    """Supported hardware device types."""
    SHELLY_1_PM = "shelly-1-pm"
    SHELLY_PLUG_S = "shelly-plug-s"
    SHELLY_1 = "shelly-1"
    SHELLY_2_5 = "shelly-2-5"
    BOSSWERK_MI_600 = "bosswerk-mi-600"
    HICHI_SML_READER = "hichi-sml-reader"


class SimulationDeviceTypeId(str, Enum):
    """Simulated device types."""
    SECONDS = "sim-seconds"
    CONST = "sim-const"
    FILE = "sim-file"
    DAY_NIGHT = "sim-day-night"


MQTT_DEVICE_TYPE = "mqtt"

DeviceTypeId = Union[PhysicalDeviceTypeId, SimulationDeviceTypeId, Literal["mqtt"]]


def is_simulation_type(type_id: Union[DeviceTypeId, str]) -> bool:
    """Check if a device type id names a simulation."""
    return type_id in {t.value for t in SimulationDeviceTypeId}


class SimulationSpec(CastleModel):
    """Date granularity a simulation repeats over."""
    date_level: Literal["day", "year"]


class DatapointRemap(CastleModel):
    """Alias of a device-local key to a global id or a renamed local id."""
    id: Optional[str] = None
    local_id: Optional[str] = None
    name: Optional[str] = None

    @model_validator(mode="after")
    def _check_target(self) -> "DatapointRemap":
        if self.id is not None and self.local_id is not None:
            raise ValueError("a remap sets either id or localId, not both")
        return self


class PeakSuppression(CastleModel):
    """Values above `max` are treated as measurement peaks."""
    max: float


class Device(CastleModel):
    """A configured device instance."""
    id: str
    ip_address: str
    web_interface: Optional[str] = None
    api: str
    type: DeviceTypeId
    datapoints: Optional[dict[str, LocalDatapoint]] = None
    suppress_peaks: Optional[dict[str, PeakSuppression]] = None
    control_datapoints: Optional[dict[str, LocalDatapoint]] = None
    map_control_datapoints: Optional[dict[str, DatapointRemap]] = None
    map_datapoints: Optional[dict[str, DatapointRemap]] = None


class SerializableDeviceType(CastleModel):
    """Template shared by all devices of one type."""
    id: DeviceTypeId
    name: str
    description: Optional[str] = None
    is_simulation: bool
    simulation: Optional[SimulationSpec] = None
    examples: Optional[list[Device]] = None
    datapoints: dict[str, LocalDatapoint] = Field(default_factory=dict)
    control_datapoints: dict[str, LocalDatapoint] = Field(default_factory=dict)


class DeviceStatus(CastleModel):
    """Result of the latest access to a device."""
    responsive: bool
    accessed_at: int
    error: Optional[str] = None
    datapoints: dict[str, DatapointState] = Field(default_factory=dict)


# ============================================================================
# Simulation preview
# ============================================================================

class PreviewInterval(CastleModel):
    """Time window of a simulation preview."""
    from_: datetime = Field(..., alias="from")
    to: datetime


class PreviewOptions(CastleModel):
    """Options for previewing a simulated device."""
    interval: Optional[PreviewInterval] = None
    precision: Optional[timedelta] = None
