"""
Control Protocol

Requests for device control issued by engines, and the audit trail of one
control cycle.
"""

from enum import Enum
from typing import Optional

from pydantic import Field

from .base import CastleModel
from .datapoints import DatapointState
from .responses import ControlResponse


DeviceId = str


class ControlExecutionTime(str, Enum):
    """When a requested control is executed."""
    LAP_END = "lap-end"
    PART_END = "part-end"
    NEVER = "never"


class DatapointTargetSpec(CastleModel):
    """Control destination: a datapoint of a device."""
    device: DeviceId
    datapoint: str = Field(..., description="Local or public datapoint id")


class DeviceControlRequestEntry(CastleModel):
    target: DatapointTargetSpec
    state: DatapointState
    when: ControlExecutionTime


# request key -> requested control
DeviceControlRequest = dict[str, DeviceControlRequestEntry]

DatapointTargets = dict[DeviceId, DeviceControlRequest]


class ExecutedRequest(CastleModel):
    """Outcome of one executed device control request."""
    device_id: DeviceId
    request: DeviceControlRequest
    success: bool
    error: Optional[str] = None


class SerializableControlContext(CastleModel):
    """
    Audit trail of one control cycle of an engine.

    Holds every requested target and the executed requests with their
    per-request outcome.
    """
    engine_id: str
    datapoint_targets: DatapointTargets = Field(default_factory=dict)
    executed_requests: list[ExecutedRequest] = Field(default_factory=list)

    def record(
        self,
        device_id: DeviceId,
        request: DeviceControlRequest,
        response: ControlResponse,
    ) -> "SerializableControlContext":
        """Create a new context with one more executed request."""
        executed = ExecutedRequest(
            device_id=device_id,
            request=request,
            success=response.success,
            error=response.error,
        )
        return self.model_copy(
            update={"executed_requests": [*self.executed_requests, executed]},
            deep=True,
        )

    @property
    def failed_requests(self) -> list[ExecutedRequest]:
        return [req for req in self.executed_requests if not req.success]


class ControlContextEntry(CastleModel):
    context: SerializableControlContext


class ControlstateContent(CastleModel):
    """Latest control context per control part."""
    controls: dict[str, ControlContextEntry] = Field(default_factory=dict)
