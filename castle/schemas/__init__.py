"""
Castle Shared Schemas

Contract-first types shared between the castle server and its clients.
"""

from .base import CastleModel, to_wire

from .errors import (
    CastleSchemaError,
    UnknownMethodError,
    ConfigurationLoadError,
)

from .value_types import (
    ValueType,
    VALUE_TYPES,
    UnitCategory,
    LuxonKey,
    ValueUnit,
    UnitSpec,
    VALUE_UNITS,
    DURATION_UNITS,
    DurationUnit,
    AnyDataValue,
    is_duration_unit,
    get_category_of_unit,
    duration_to_timedelta,
)

from .datapoints import (
    LocalDatapointId,
    PublicDatapointId,
    DatapointAspects,
    GlobalDatapoint,
    DeviceDatapoint,
    LocalDatapoint,
    AnyDatapoint,
    UniqueDatapoint,
    DatapointState,
    # Constructors
    global_datapoint,
    device_datapoint,
    local_datapoint,
    device_datapoint_id,
    instantiate,
    # Predicates
    is_local_datapoint,
    is_device_datapoint,
)

from .devices import (
    PhysicalDeviceTypeId,
    SimulationDeviceTypeId,
    DeviceTypeId,
    MQTT_DEVICE_TYPE,
    SimulationSpec,
    DatapointRemap,
    PeakSuppression,
    Device,
    SerializableDeviceType,
    DeviceStatus,
    PreviewInterval,
    PreviewOptions,
    is_simulation_type,
)

from .sequences import (
    SequenceConditionChange,
    SEQUENCE_CONDITION_CHANGE_ASPECTS,
    SequenceCondition,
    MaxAge,
    SequenceLimit,
    DatapointSequence,
    DatapointSequenceSpec,
    SequenceState,
    DatastateContent,
)

from .responses import (
    ControlResponse,
    DeviceControlResponse,
    EngineControlResponse,
    SystemControlResponse,
    InsertResponse,
    SelectResult,
    SelectResponse,
    SimulationPreviewResult,
    SimulationPreviewResponse,
    ok,
    failed,
)

from .controls import (
    DeviceId,
    ControlExecutionTime,
    DatapointTargetSpec,
    DeviceControlRequestEntry,
    DeviceControlRequest,
    DatapointTargets,
    ExecutedRequest,
    SerializableControlContext,
    ControlContextEntry,
    ControlstateContent,
)

from .engines import (
    EngineSettings,
    CollectedDevice,
    DatacollectorSpec,
    DatapointMappingTarget,
    DatapointMapping,
    DatapointCalculationSpec,
    StatePartSpec,
    ControlPartTypeId,
    ControlPartOutput,
    ControlPartSpec,
    SerializableControlPartType,
    PersistenceArea,
    PERSISTENCE_AREAS,
    StatePersistTargetSpec,
    ControlPersistTargetSpec,
    ControlActionType,
    CONTROL_ACTION_TYPES,
    ControlActionValueParameter,
    ControlActionParams,
    ControlAction,
    ActionSpec,
    EngineSpec,
    SerializableEngine,
    EngineStatus,
    default_value_parameters,
)

from .rows import (
    RowModel,
    DatapointRow,
    SampleRow,
    SampleDatapointRow,
    SampleDataLogRow,
    DatapointLogRow,
    DatapointControlLogRow,
    AnyLogRow,
    parse_log_row,
    datapoint_log_row,
    control_log_row,
)

from .database import (
    TableName,
    ALL_TABLE_NAMES,
    TABLE_ROWS,
    DbExportData,
    TableStatus,
    SystemSetupStatus,
)

from .configuration import (
    MariaDatabaseSpec,
    PersistenceSpec,
    MailingSMTPSpec,
    MailingSpec,
    CertsSpec,
    SystemSpec,
    Configuration,
    CheckedConfiguration,
    SystemStatus,
    load_configuration,
)

from .services import QueryParametersSchema, SerializableService

from .messages import (
    WsMethod,
    WS_METHODS,
    WsMessage,
    is_ws_message,
    is_known_method,
    msg_welcome,
    msg_ping,
    msg_pong,
    msg_subscribe,
    msg_publish,
    reply_to,
    encode_message,
    decode_message,
)

__all__ = [
    # Base
    "CastleModel",
    "to_wire",
    "CastleSchemaError",
    "UnknownMethodError",
    "ConfigurationLoadError",
    # Value types
    "ValueType",
    "VALUE_TYPES",
    "UnitCategory",
    "LuxonKey",
    "ValueUnit",
    "UnitSpec",
    "VALUE_UNITS",
    "DURATION_UNITS",
    "DurationUnit",
    "AnyDataValue",
    "is_duration_unit",
    "get_category_of_unit",
    "duration_to_timedelta",
    # Datapoints
    "LocalDatapointId",
    "PublicDatapointId",
    "DatapointAspects",
    "GlobalDatapoint",
    "DeviceDatapoint",
    "LocalDatapoint",
    "AnyDatapoint",
    "UniqueDatapoint",
    "DatapointState",
    "global_datapoint",
    "device_datapoint",
    "local_datapoint",
    "device_datapoint_id",
    "instantiate",
    "is_local_datapoint",
    "is_device_datapoint",
    # Devices
    "PhysicalDeviceTypeId",
    "SimulationDeviceTypeId",
    "DeviceTypeId",
    "MQTT_DEVICE_TYPE",
    "SimulationSpec",
    "DatapointRemap",
    "PeakSuppression",
    "Device",
    "SerializableDeviceType",
    "DeviceStatus",
    "PreviewInterval",
    "PreviewOptions",
    "is_simulation_type",
    # Sequences
    "SequenceConditionChange",
    "SEQUENCE_CONDITION_CHANGE_ASPECTS",
    "SequenceCondition",
    "MaxAge",
    "SequenceLimit",
    "DatapointSequence",
    "DatapointSequenceSpec",
    "SequenceState",
    "DatastateContent",
    # Responses
    "ControlResponse",
    "DeviceControlResponse",
    "EngineControlResponse",
    "SystemControlResponse",
    "InsertResponse",
    "SelectResult",
    "SelectResponse",
    "SimulationPreviewResult",
    "SimulationPreviewResponse",
    "ok",
    "failed",
    # Controls
    "DeviceId",
    "ControlExecutionTime",
    "DatapointTargetSpec",
    "DeviceControlRequestEntry",
    "DeviceControlRequest",
    "DatapointTargets",
    "ExecutedRequest",
    "SerializableControlContext",
    "ControlContextEntry",
    "ControlstateContent",
    # Engines
    "EngineSettings",
    "CollectedDevice",
    "DatacollectorSpec",
    "DatapointMappingTarget",
    "DatapointMapping",
    "DatapointCalculationSpec",
    "StatePartSpec",
    "ControlPartTypeId",
    "ControlPartOutput",
    "ControlPartSpec",
    "SerializableControlPartType",
    "PersistenceArea",
    "PERSISTENCE_AREAS",
    "StatePersistTargetSpec",
    "ControlPersistTargetSpec",
    "ControlActionType",
    "CONTROL_ACTION_TYPES",
    "ControlActionValueParameter",
    "ControlActionParams",
    "ControlAction",
    "ActionSpec",
    "EngineSpec",
    "SerializableEngine",
    "EngineStatus",
    "default_value_parameters",
    # Rows
    "RowModel",
    "DatapointRow",
    "SampleRow",
    "SampleDatapointRow",
    "SampleDataLogRow",
    "DatapointLogRow",
    "DatapointControlLogRow",
    "AnyLogRow",
    "parse_log_row",
    "datapoint_log_row",
    "control_log_row",
    # Database
    "TableName",
    "ALL_TABLE_NAMES",
    "TABLE_ROWS",
    "DbExportData",
    "TableStatus",
    "SystemSetupStatus",
    # Configuration
    "MariaDatabaseSpec",
    "PersistenceSpec",
    "MailingSMTPSpec",
    "MailingSpec",
    "CertsSpec",
    "SystemSpec",
    "Configuration",
    "CheckedConfiguration",
    "SystemStatus",
    "load_configuration",
    # Services
    "QueryParametersSchema",
    "SerializableService",
    # Messages
    "WsMethod",
    "WS_METHODS",
    "WsMessage",
    "is_ws_message",
    "is_known_method",
    "msg_welcome",
    "msg_ping",
    "msg_pong",
    "msg_subscribe",
    "msg_publish",
    "reply_to",
    "encode_message",
    "decode_message",
]
