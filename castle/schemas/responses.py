"""
Response Envelopes

Fallible operations answer with a success/failure envelope instead of
raising. Callers branch on `error`: present means failure.
"""

from typing import Any, Generic, Optional, TypeVar

from pydantic import Field, model_validator

from .base import CastleModel
from .datapoints import DatapointState, UniqueDatapoint


R = TypeVar("R")


# ============================================================================
# Control responses
# ============================================================================

class ControlResponse(CastleModel):
    """`{success: true}` or `{success: false, error}`."""
    success: bool
    error: Optional[str] = None

    @model_validator(mode="after")
    def _check_error(self) -> "ControlResponse":
        if self.success and self.error is not None:
            raise ValueError("a successful response carries no error")
        if not self.success and not self.error:
            raise ValueError("a failed response requires an error")
        return self


DeviceControlResponse = ControlResponse
EngineControlResponse = ControlResponse
SystemControlResponse = ControlResponse


def ok() -> ControlResponse:
    """Create a successful control response."""
    return ControlResponse(success=True)


def failed(error: str) -> ControlResponse:
    """Create a failed control response."""
    return ControlResponse(success=False, error=error)


# ============================================================================
# Result responses
# ============================================================================

def _check_result_or_error(result: Any, error: Optional[str]) -> None:
    if (result is None) == (error is None):
        raise ValueError("exactly one of result and error must be set")


class InsertResponse(CastleModel):
    """Outcome of a database insert."""
    result: Optional[dict[str, Any]] = None
    error: Optional[str] = None
    error_details: Optional[dict[str, Any]] = None

    @model_validator(mode="after")
    def _check_envelope(self) -> "InsertResponse":
        _check_result_or_error(self.result, self.error)
        return self

    @property
    def is_error(self) -> bool:
        return self.error is not None


class SelectResult(CastleModel, Generic[R]):
    rows: list[R] = Field(default_factory=list)


class SelectResponse(CastleModel, Generic[R]):
    """Outcome of a database select, with typed rows."""
    result: Optional[SelectResult[R]] = None
    error: Optional[str] = None
    error_details: Optional[dict[str, Any]] = None

    @model_validator(mode="after")
    def _check_envelope(self) -> "SelectResponse[R]":
        _check_result_or_error(self.result, self.error)
        return self

    @property
    def is_error(self) -> bool:
        return self.error is not None


class SimulationPreviewResult(CastleModel):
    datapoints: dict[str, UniqueDatapoint] = Field(default_factory=dict)
    data: dict[str, list[DatapointState]] = Field(default_factory=dict)


class SimulationPreviewResponse(CastleModel):
    """Preview of the states a simulated device would produce."""
    result: Optional[SimulationPreviewResult] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def _check_envelope(self) -> "SimulationPreviewResponse":
        _check_result_or_error(self.result, self.error)
        return self

    @property
    def is_error(self) -> bool:
        return self.error is not None
