"""Exceptions raised by the castle shared schemas."""

from pathlib import Path


class CastleSchemaError(Exception):
    """Base class for castle schema errors."""


class UnknownMethodError(CastleSchemaError):
    """A websocket envelope is well-formed but names no known method."""

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"Unknown websocket method: {method!r}")


class ConfigurationLoadError(CastleSchemaError):
    """The configuration file could not be read or parsed."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load configuration from {path}: {reason}")
