"""
Engine Model

An engine runs periodic laps: it collects datapoint states from devices,
transforms them through state parts, executes control parts and actions,
and names the persistence areas its states and controls are written to.
"""

from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import Field, model_validator

from .base import CastleModel
from .controls import ControlExecutionTime, DatapointTargetSpec
from .datapoints import GlobalDatapoint, LocalDatapointId, UniqueDatapoint
from .sequences import DatapointSequenceSpec
from .value_types import ValueType, ValueUnit, check_unit_for_type


class EngineSettings(CastleModel):
    lap_duration: int = Field(..., gt=0, description="Lap period in ms")


# ============================================================================
# Collecting
# ============================================================================

class CollectedDevice(CastleModel):
    datapoints: list[str] = Field(default_factory=list)


class DatacollectorSpec(CastleModel):
    """Devices and datapoints polled each lap or on events."""
    lap_duration: int = Field(..., gt=0)
    on_event: Optional[bool] = None
    devices: dict[str, CollectedDevice] = Field(default_factory=dict)


# ============================================================================
# State parts
# ============================================================================

class DatapointMappingTarget(CastleModel):
    id: str
    name: Optional[str] = None


DatapointMapping = dict[str, DatapointMappingTarget]


class DatapointCalculationSpec(CastleModel):
    """Named formula producing a calculated datapoint."""
    name: str
    code: str
    value_type: ValueType
    value_unit: Optional[ValueUnit] = None

    @model_validator(mode="after")
    def _check_unit(self) -> "DatapointCalculationSpec":
        check_unit_for_type(self.value_type, self.value_unit)
        return self


class StatePartSpec(CastleModel):
    map_datapoints: Optional[DatapointMapping] = None
    calculate_datapoints: Optional[dict[str, DatapointCalculationSpec]] = None
    sequence_datapoints: Optional[list[DatapointSequenceSpec]] = None


# ============================================================================
# Control parts
# ============================================================================

class ControlPartTypeId(str, Enum):
    FREEZERS_CONTROL = "sys-freezers-control"
    ACTION = "sys-action"


class ControlPartOutput(DatapointTargetSpec):
    when: ControlExecutionTime


class ControlPartSpec(CastleModel):
    """Wiring of named inputs and outputs of a control part."""
    type: ControlPartTypeId
    input: dict[str, str] = Field(default_factory=dict)
    output: dict[str, ControlPartOutput] = Field(default_factory=dict)


class SerializableControlPartType(CastleModel):
    """Catalog entry describing a control part type."""
    id: ControlPartTypeId
    name: str
    description: Optional[str] = None
    examples: Optional[list[ControlPartSpec]] = None
    input: dict[str, GlobalDatapoint] = Field(default_factory=dict)
    output: dict[str, GlobalDatapoint] = Field(default_factory=dict)


# ============================================================================
# Persistence targets
# ============================================================================

class PersistenceArea(str, Enum):
    DATAPOINT_LOG = "datapoint-log"
    DATAPOINT_CONTROL_LOG = "datapoint-control-log"


PERSISTENCE_AREAS: dict[PersistenceArea, str] = {
    PersistenceArea.DATAPOINT_LOG: "Log of datapoint states",
    PersistenceArea.DATAPOINT_CONTROL_LOG: "Log of datapoint controls",
}


class StatePersistTargetSpec(CastleModel):
    """Datapoint states to write into a persistence area."""
    to: str = Field(..., description="Name of the persistence backend")
    into: PersistenceArea
    datapoints: list[str] = Field(default_factory=list)


class ControlPersistTargetSpec(CastleModel):
    """Control history to write, per device, into a persistence area."""
    to: str
    into: PersistenceArea
    datapoints: dict[str, list[LocalDatapointId]] = Field(default_factory=dict)


# ============================================================================
# Actions
# ============================================================================

class ControlActionType(str, Enum):
    TOGGLE = "toggle"
    INCREASE = "increase"


_TARGET_PARAM = {
    "device": "<the target device id>",
    "datapoint": "<the target datapoint id>",
}

CONTROL_ACTION_TYPES: dict[ControlActionType, dict[str, Any]] = {
    ControlActionType.TOGGLE: {
        "description": (
            'Toggles the value of the "target" datapoint between "true" and '
            '"false". Depends on the "source" datapoint.'
        ),
        "paramKeys": {
            "source": '"target" or UniqueDatapoint',
            "ifSourceUndefined": {"valueNum": 0, "valueString": "false"},
            "target": _TARGET_PARAM,
        },
    },
    ControlActionType.INCREASE: {
        "description": (
            "Increases the value of the target datapoint using a source and "
            '"params.increase" or 1 without parameter.'
        ),
        "paramKeys": {
            "source": '"target" or UniqueDatapoint',
            "ifSourceUndefined": {"valueNum": 0},
            "increase": {"valueNum": 1},
            "target": _TARGET_PARAM,
        },
    },
}


class ControlActionValueParameter(CastleModel):
    value_num: Optional[float] = None
    value_string: Optional[str] = None


def default_value_parameters(
    action_type: ControlActionType,
) -> dict[str, ControlActionValueParameter]:
    """Get the documented default value parameters of an action type."""
    param_keys = CONTROL_ACTION_TYPES[action_type]["paramKeys"]
    return {
        key: ControlActionValueParameter.model_validate(value)
        for key, value in param_keys.items()
        if key in ("ifSourceUndefined", "increase")
    }


class ControlActionParams(CastleModel):
    """
    Parameters of a control action.

    `source` is either a datapoint to read, or "target" to read back the
    current state of the target.
    """
    source: Union[Literal["target"], UniqueDatapoint]
    target: DatapointTargetSpec
    if_source_undefined: Optional[ControlActionValueParameter] = None
    increase: Optional[ControlActionValueParameter] = None

    @property
    def reads_target(self) -> bool:
        return self.source == "target"


class ControlAction(CastleModel):
    type: ControlActionType
    params: ControlActionParams


class ActionSpec(CastleModel):
    """Named, ordered list of control actions."""
    id: str
    name: str
    execution: list[ControlAction] = Field(default_factory=list)


# ============================================================================
# Engine
# ============================================================================

class EngineSpec(CastleModel):
    """Configured engine."""
    id: str
    auto_start: Optional[bool] = None
    collect: Optional[DatacollectorSpec] = None
    controls: Optional[list[ControlPartSpec]] = None
    actions: Optional[dict[str, ActionSpec]] = None
    persist_state: Optional[list[StatePersistTargetSpec]] = None
    state_parts: Optional[list[StatePartSpec]] = None
    persist_control: Optional[list[ControlPersistTargetSpec]] = None


class SerializableEngine(CastleModel):
    key: str
    settings: EngineSettings
    actions: dict[str, ActionSpec] = Field(default_factory=dict)


class ConsumedDuration(CastleModel):
    total: int = 0
    lap_start: int = 0
    lap_end: int = 0


class EngineDuration(CastleModel):
    consumed: ConsumedDuration = Field(default_factory=ConsumedDuration)
    laps: int = 0


class LapErrors(CastleModel):
    lap: int
    errors: list[str] = Field(default_factory=list)


class EngineStatus(CastleModel):
    """Runtime status of an engine."""
    last_started_at: Optional[int] = None
    last_lap_end_at: Optional[int] = None
    running: bool = False
    duration: EngineDuration = Field(default_factory=EngineDuration)
    errors: list[LapErrors] = Field(default_factory=list)
