"""
Datapoint Sequences

A sequence is a bounded, ordered history buffer of states for one
datapoint. New states are appended only when they satisfy the sequence
condition, then the buffer is truncated by its limit.
"""

from datetime import timedelta
from enum import Enum
from typing import Optional

from pydantic import Field, model_validator

from .base import CastleModel
from .datapoints import DatapointState, UniqueDatapoint
from .value_types import DurationUnit, duration_to_timedelta


class SequenceConditionChange(str, Enum):
    """Aspect of a state that must change for it to be appended."""
    VALUE = "value"
    AT = "at"


SEQUENCE_CONDITION_CHANGE_ASPECTS: dict[SequenceConditionChange, str] = {
    SequenceConditionChange.VALUE: (
        "Add the new state, if the value of the new state is different to "
        "the value of the latest state in the sequence."
    ),
    SequenceConditionChange.AT: (
        "Add the new state, if the date ('at' property) of the new state is "
        "different to the date of the latest state in the sequence."
    ),
}


class SequenceCondition(CastleModel):
    change: SequenceConditionChange


class MaxAge(CastleModel):
    """Age limit expressed in duration units."""
    count: int = Field(..., ge=0)
    unit: DurationUnit

    def as_timedelta(self) -> timedelta:
        return duration_to_timedelta(self.count, self.unit)


class SequenceLimit(CastleModel):
    """Either a maximum entry count or a maximum entry age."""
    max_count: Optional[int] = Field(None, ge=1)
    max_age: Optional[MaxAge] = None

    @model_validator(mode="after")
    def _check_single_limit(self) -> "SequenceLimit":
        if (self.max_count is None) == (self.max_age is None):
            raise ValueError("exactly one of maxCount and maxAge must be set")
        return self


class DatapointSequence(CastleModel):
    id: str
    point: UniqueDatapoint


class DatapointSequenceSpec(CastleModel):
    """Rule accumulating states of a datapoint into a sequence."""
    sequence_id: str
    datapoint_id: str
    limit: SequenceLimit
    condition: SequenceCondition


class SequenceState(CastleModel):
    """Recent states of one sequence, oldest first."""
    id: str
    at: int = Field(..., description="Epoch ms of the latest appended state")
    data: list[DatapointState] = Field(default_factory=list)

    @property
    def latest(self) -> Optional[DatapointState]:
        return self.data[-1] if self.data else None

    def accepts(self, state: DatapointState, condition: SequenceCondition) -> bool:
        """Check if a state satisfies the condition against the latest entry."""
        latest = self.latest
        if latest is None:
            return True
        if condition.change is SequenceConditionChange.VALUE:
            return not state.value_matches(latest)
        return state.at != latest.at

    def append(
        self,
        state: DatapointState,
        condition: SequenceCondition,
        limit: SequenceLimit,
    ) -> "SequenceState":
        """
        Append a state and truncate to the limit.

        Returns a new SequenceState; returns self unchanged when the
        condition rejects the state.
        """
        if not self.accepts(state, condition):
            return self

        data = [*self.data, state]
        if limit.max_count is not None:
            data = data[-limit.max_count:]
        else:
            max_age_ms = limit.max_age.as_timedelta() // timedelta(milliseconds=1)
            oldest_at = state.at - max_age_ms
            data = [entry for entry in data if entry.at >= oldest_at]

        return SequenceState(id=self.id, at=state.at, data=data)


class DatastateContent(CastleModel):
    """Snapshot of all datapoint and sequence states of an engine."""
    datapoints: dict[str, UniqueDatapoint] = Field(default_factory=dict)
    datapoint_states: dict[str, DatapointState] = Field(default_factory=dict)
    sequences: dict[str, DatapointSequence] = Field(default_factory=dict)
    sequence_states: dict[str, SequenceState] = Field(default_factory=dict)
