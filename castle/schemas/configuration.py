"""
Configuration

The root aggregate a castle server is started from: persistence backends,
mail senders, devices, engines and the system block. Validation and
default-filling are done by the server; this module only defines the shape
and reads it from disk.
"""

import logging
from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import Field, ValidationError

from .base import CastleModel
from .config import get_settings
from .devices import Device
from .engines import EngineSpec
from .errors import ConfigurationLoadError

logger = logging.getLogger(__name__)


# ============================================================================
# Backends
# ============================================================================

class MariaDatabaseSpec(CastleModel):
    type: Literal["maria-db"] = "maria-db"
    database: str
    host: str
    port: int
    user: str
    password: str


class PersistenceSpec(MariaDatabaseSpec):
    """Named persistence backend."""
    is_default: Optional[bool] = None


class MailingSMTPSpec(CastleModel):
    type: Literal["smtp"] = "smtp"
    host: str
    port: int
    user: str
    password: str


class MailingSpec(MailingSMTPSpec):
    """Named mail sender."""
    is_default: Optional[bool] = None
    default_receivers: Optional[list[str]] = None


# ============================================================================
# System
# ============================================================================

class CertsSpec(CastleModel):
    """TLS certificate paths."""
    ca: Optional[str] = None
    host_cert: str
    host_key: str


class ClientSpec(CastleModel):
    path: str = Field(..., description="Path to the client assets")


class SystemSpec(CastleModel):
    name: Optional[str] = None
    host: str
    port: int
    certs: CertsSpec
    client: Optional[ClientSpec] = None


# ============================================================================
# Configuration aggregate
# ============================================================================

class Configuration(CastleModel):
    """Unvalidated configuration as written by the user."""
    system: Optional[SystemSpec] = None
    persistence: dict[str, PersistenceSpec]
    mail: dict[str, MailingSpec]
    devices: dict[str, Device]
    engines: dict[str, EngineSpec]


class CheckedConfiguration(Configuration):
    """Configuration with the validator's verdict."""
    is_valid: Optional[bool] = None


class ConfigurationStatus(CastleModel):
    content: CheckedConfiguration
    errors: Optional[list[str]] = None
    valid: CheckedConfiguration


class SystemStatus(CastleModel):
    """Process start time and the configuration it runs with."""
    started_at: int
    configuration: ConfigurationStatus


def load_configuration(path: Union[str, Path, None] = None) -> Configuration:
    """
    Read a configuration file.

    Reads JSON from `path`, or from the configured CASTLE_CONFIG_PATH when
    no path is given.

    Raises:
        ConfigurationLoadError: the file is missing or does not match the
            configuration shape.
    """
    settings = get_settings()
    config_path = Path(path) if path is not None else settings.config_path

    try:
        content = config_path.read_text(encoding=settings.config_encoding)
    except OSError as e:
        logger.warning(f"Cannot read configuration {config_path}: {e}")
        raise ConfigurationLoadError(config_path, str(e)) from e

    try:
        configuration = Configuration.model_validate_json(content)
    except ValidationError as e:
        logger.warning(
            f"Invalid configuration {config_path}: {e.error_count()} error(s)"
        )
        raise ConfigurationLoadError(config_path, str(e)) from e

    logger.debug(
        f"Loaded configuration {config_path}: "
        f"{len(configuration.devices)} devices, {len(configuration.engines)} engines"
    )
    return configuration
