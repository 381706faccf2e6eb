from __future__ import annotations

import pytest
from pydantic import ValidationError

from castle.schemas.datapoints import DeviceDatapoint, GlobalDatapoint
from castle.schemas.engines import (
    CONTROL_ACTION_TYPES,
    ControlActionType,
    ControlActionValueParameter,
    ControlPartTypeId,
    DatapointCalculationSpec,
    EngineSpec,
    EngineStatus,
    PersistenceArea,
    default_value_parameters,
)

ENGINE = {
    "id": "house",
    "autoStart": True,
    "collect": {
        "lapDuration": 1000,
        "devices": {"plug": {"datapoints": ["power", "relay"]}},
    },
    "stateParts": [
        {
            "mapDatapoints": {"plug.power": {"id": "house-power", "name": "House power"}},
            "calculateDatapoints": {
                "double": {
                    "name": "Doubled",
                    "code": "return 2 * power",
                    "valueType": "number",
                    "valueUnit": "W",
                }
            },
            "sequenceDatapoints": [
                {
                    "sequenceId": "power-hour",
                    "datapointId": "house-power",
                    "limit": {"maxAge": {"count": 1, "unit": "h"}},
                    "condition": {"change": "value"},
                }
            ],
        }
    ],
    "controls": [
        {
            "type": "sys-freezers-control",
            "input": {"temperature": "freezer.temp"},
            "output": {"relay": {"device": "plug", "datapoint": "relay", "when": "lap-end"}},
        }
    ],
    "actions": {
        "toggle-plug": {
            "id": "toggle-plug",
            "name": "Toggle plug",
            "execution": [
                {
                    "type": "toggle",
                    "params": {
                        "source": "target",
                        "target": {"device": "plug", "datapoint": "relay"},
                        "ifSourceUndefined": {"valueNum": 0, "valueString": "false"},
                    },
                },
                {
                    "type": "increase",
                    "params": {
                        "source": {"id": "counter", "name": "Counter", "valueType": "number"},
                        "target": {"device": "plug", "datapoint": "count"},
                        "increase": {"valueNum": 2},
                    },
                },
            ],
        }
    },
    "persistState": [
        {"to": "main-db", "into": "datapoint-log", "datapoints": ["house-power"]}
    ],
    "persistControl": [
        {"to": "main-db", "into": "datapoint-control-log", "datapoints": {"plug": ["relay"]}}
    ],
}


def test_engine_spec_from_wire() -> None:
    engine = EngineSpec.model_validate(ENGINE)

    assert engine.collect.devices["plug"].datapoints == ["power", "relay"]
    assert engine.controls[0].type is ControlPartTypeId.FREEZERS_CONTROL
    assert engine.controls[0].output["relay"].when.value == "lap-end"
    assert engine.persist_state[0].into is PersistenceArea.DATAPOINT_LOG
    assert engine.persist_control[0].datapoints == {"plug": ["relay"]}

    toggle, increase = engine.actions["toggle-plug"].execution
    assert toggle.type is ControlActionType.TOGGLE
    assert toggle.params.reads_target
    assert isinstance(increase.params.source, GlobalDatapoint)
    assert not increase.params.reads_target
    assert increase.params.increase.value_num == 2


def test_action_source_may_be_device_datapoint() -> None:
    params = EngineSpec.model_validate(
        {
            "id": "e",
            "actions": {
                "a": {
                    "id": "a",
                    "name": "A",
                    "execution": [
                        {
                            "type": "increase",
                            "params": {
                                "source": {
                                    "deviceId": "plug",
                                    "localId": "count",
                                    "name": "Count",
                                    "valueType": "number",
                                },
                                "target": {"device": "plug", "datapoint": "count"},
                            },
                        }
                    ],
                }
            },
        }
    ).actions["a"].execution[0].params

    assert isinstance(params.source, DeviceDatapoint)
    assert params.source.id == "plug.count"


def test_unknown_persistence_area_rejected() -> None:
    payload = {**ENGINE, "persistState": [{"to": "db", "into": "elsewhere", "datapoints": []}]}
    with pytest.raises(ValidationError):
        EngineSpec.model_validate(payload)


def test_calculation_unit_requires_number() -> None:
    with pytest.raises(ValidationError):
        DatapointCalculationSpec(name="x", code="", value_type="string", value_unit="W")


def test_default_value_parameters() -> None:
    assert default_value_parameters(ControlActionType.TOGGLE) == {
        "ifSourceUndefined": ControlActionValueParameter(value_num=0, value_string="false"),
    }
    assert default_value_parameters(ControlActionType.INCREASE)["increase"].value_num == 1
    assert set(CONTROL_ACTION_TYPES) == set(ControlActionType)


def test_engine_status_defaults() -> None:
    status = EngineStatus()

    assert status.running is False
    assert status.last_started_at is None
    assert status.duration.laps == 0
    assert status.errors == []
