from __future__ import annotations

import json
from pathlib import Path

import pytest

from castle.schemas.configuration import (
    CheckedConfiguration,
    Configuration,
    SystemStatus,
    load_configuration,
)
from castle.schemas.devices import PhysicalDeviceTypeId, SimulationDeviceTypeId, is_simulation_type
from castle.schemas.errors import ConfigurationLoadError

CONFIGURATION = {
    "system": {
        "name": "home",
        "host": "castle.local",
        "port": 443,
        "certs": {"hostCert": "certs/host.crt", "hostKey": "certs/host.key"},
        "client": {"path": "client/build"},
    },
    "persistence": {
        "main-db": {
            "type": "maria-db",
            "isDefault": True,
            "database": "castle",
            "host": "localhost",
            "port": 3306,
            "user": "castle",
            "password": "secret",
        }
    },
    "mail": {
        "alerts": {
            "type": "smtp",
            "host": "smtp.local",
            "port": 587,
            "user": "castle",
            "password": "secret",
            "defaultReceivers": ["me@example.org"],
        }
    },
    "devices": {
        "plug": {
            "id": "plug",
            "ipAddress": "192.168.0.20",
            "api": "http://192.168.0.20/rpc",
            "type": "shelly-plug-s",
            "suppressPeaks": {"power": {"max": 3600}},
            "mapDatapoints": {"power": {"id": "house-power", "name": "House power"}},
        },
        "clock": {"id": "clock", "ipAddress": "", "api": "", "type": "sim-seconds"},
        "broker": {"id": "broker", "ipAddress": "192.168.0.5", "api": "mqtt", "type": "mqtt"},
    },
    "engines": {"house": {"id": "house", "autoStart": True}},
}


def _write(path: Path, content: dict) -> Path:
    path.write_text(json.dumps(content), encoding="utf-8")
    return path


def test_load_configuration_from_path(tmp_path: Path) -> None:
    configuration = load_configuration(_write(tmp_path / "castle.json", CONFIGURATION))

    assert configuration.system.certs.host_cert == "certs/host.crt"
    assert configuration.persistence["main-db"].is_default is True
    assert configuration.mail["alerts"].default_receivers == ["me@example.org"]
    assert configuration.devices["plug"].type is PhysicalDeviceTypeId.SHELLY_PLUG_S
    assert configuration.devices["plug"].suppress_peaks["power"].max == 3600
    assert is_simulation_type(configuration.devices["clock"].type)
    assert configuration.devices["clock"].type is SimulationDeviceTypeId.SECONDS
    assert configuration.devices["broker"].type == "mqtt"
    assert configuration.engines["house"].auto_start is True


def test_load_configuration_uses_settings_path(tmp_path: Path, monkeypatch) -> None:
    path = _write(tmp_path / "elsewhere.json", CONFIGURATION)
    monkeypatch.setenv("CASTLE_CONFIG_PATH", str(path))

    assert set(load_configuration().devices) == {"plug", "clock", "broker"}


def test_missing_configuration_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationLoadError) as exc_info:
        load_configuration(tmp_path / "missing.json")

    assert exc_info.value.path == tmp_path / "missing.json"


@pytest.mark.parametrize(
    "content",
    [
        {**CONFIGURATION, "devices": {"x": {"id": "x", "ipAddress": "", "api": "", "type": "toaster"}}},
        {key: value for key, value in CONFIGURATION.items() if key != "engines"},
        {
            **CONFIGURATION,
            "devices": {
                "x": {
                    "id": "x",
                    "ipAddress": "",
                    "api": "",
                    "type": "mqtt",
                    "mapDatapoints": {"a": {"id": "g", "localId": "l"}},
                }
            },
        },
    ],
)
def test_invalid_configuration_content(tmp_path: Path, content: dict) -> None:
    with pytest.raises(ConfigurationLoadError):
        load_configuration(_write(tmp_path / "castle.json", content))


def test_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "castle.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigurationLoadError):
        load_configuration(path)


def test_system_status_bundles_configurations() -> None:
    checked = CheckedConfiguration.model_validate({**CONFIGURATION, "isValid": True})
    status = SystemStatus.model_validate(
        {
            "startedAt": 1_700_000_000_000,
            "configuration": {
                "content": CONFIGURATION,
                "errors": None,
                "valid": checked.model_dump(by_alias=True),
            },
        }
    )

    assert status.configuration.valid.is_valid is True
    assert status.configuration.content.is_valid is None
    assert isinstance(status.configuration.content, Configuration)
