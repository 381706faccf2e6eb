"""
Persistence Rows

Flat records mirroring the append-only log tables. Keys are the column
names, so rows are not aliased to camelCase.
"""

from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict

from .datapoints import DatapointState


class RowModel(BaseModel):
    """Base for persistent rows."""

    model_config = ConfigDict(frozen=True, extra="forbid")


# ============================================================================
# Datapoint catalog & samples
# ============================================================================

class DatapointRow(RowModel):
    datapoint_id: str
    name: str
    value_unit: Optional[str] = None
    value_type: str
    description: Optional[str] = None
    meaning: Optional[str] = None


class SampleRow(RowModel):
    sample_id: str
    name: str
    description: Optional[str] = None
    length_in_ms: int


class SampleDatapointRow(DatapointRow):
    sample_id: str


class SampleDataLogRow(RowModel):
    sample_id: str
    datapoint_id: str
    value_num: Optional[float] = None
    value_string: Optional[str] = None
    changed_at: int
    changed_at_ms: int


# ============================================================================
# Logs
# ============================================================================

class DatapointLogRow(RowModel):
    """One datapoint state transition."""
    datapoint_id: str
    value_num: Optional[float] = None
    value_string: Optional[str] = None
    logged_at: int
    logged_at_ms: int
    changed_at: int
    changed_at_ms: int


class DatapointControlLogRow(RowModel):
    """One control attempt; `executed` and `success` are stored as 0/1."""
    device_id: str
    datapoint_id: str
    value_num: Optional[float] = None
    value_string: Optional[str] = None
    executed: int
    success: int
    logged_at: int
    logged_at_ms: int


AnyLogRow = Union[DatapointControlLogRow, DatapointLogRow]


def parse_log_row(row: Mapping[str, Any]) -> AnyLogRow:
    """Parse a raw log row, choosing the variant by its control columns."""
    if "executed" in row or "success" in row:
        return DatapointControlLogRow.model_validate(dict(row))
    return DatapointLogRow.model_validate(dict(row))


def datapoint_log_row(
    state: DatapointState,
    logged_at_ms: int,
    changed_at_ms: Optional[int] = None,
) -> DatapointLogRow:
    """
    Build a datapoint log row from a state.

    `changed_at_ms` defaults to the state's own timestamp.
    """
    if changed_at_ms is None:
        changed_at_ms = state.at
    return DatapointLogRow(
        datapoint_id=state.id,
        value_num=state.value_num,
        value_string=state.value_string,
        logged_at=logged_at_ms // 1000,
        logged_at_ms=logged_at_ms,
        changed_at=changed_at_ms // 1000,
        changed_at_ms=changed_at_ms,
    )


def control_log_row(
    device_id: str,
    state: DatapointState,
    executed: bool,
    success: bool,
    logged_at_ms: int,
) -> DatapointControlLogRow:
    """Build a control log row for one control attempt on a device."""
    return DatapointControlLogRow(
        device_id=device_id,
        datapoint_id=state.id,
        value_num=state.value_num,
        value_string=state.value_string,
        executed=int(executed),
        success=int(success),
        logged_at=logged_at_ms // 1000,
        logged_at_ms=logged_at_ms,
    )
