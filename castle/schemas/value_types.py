"""
Value Types & Units

Catalog of datapoint value types and physical units.
VALUE_UNITS is the single source of truth: categories and duration
granularities are derived from it.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Annotated, Optional, Union

from pydantic import AfterValidator


class ValueType(str, Enum):
    """Value types a datapoint can carry."""
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    DATE = "date"


VALUE_TYPES: dict[ValueType, str] = {
    ValueType.NUMBER: "Numeric value, stored in the numeric slot",
    ValueType.STRING: "Text value, stored in the string slot",
    ValueType.BOOLEAN: "Boolean value, stored as 'true' or 'false' in the string slot",
    ValueType.DATE: "Date value, stored as ISO text in the string slot",
}


class UnitCategory(str, Enum):
    """Physical quantity a unit measures."""
    DURATION = "duration"
    TEMPERATURE = "temperature"
    POWER = "power"
    ENERGY = "energy"
    VOLTAGE = "voltage"


class LuxonKey(str, Enum):
    """Calendar granularity used for age-based retention."""
    MILLISECOND = "millisecond"
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"


class ValueUnit(str, Enum):
    """Physical units a numeric datapoint may declare."""
    MS = "ms"
    S = "s"
    MIN = "min"
    H = "h"
    D = "d"
    CELSIUS = "°C"
    W = "W"
    WMIN = "Wmin"
    WH = "Wh"
    KWH = "kWh"
    V = "V"


@dataclass(frozen=True)
class UnitSpec:
    """Metadata attached to a value unit."""
    category: UnitCategory
    description: str
    luxon_key: Optional[LuxonKey] = None


VALUE_UNITS: dict[ValueUnit, UnitSpec] = {
    ValueUnit.MS: UnitSpec(UnitCategory.DURATION, "milliseconds", LuxonKey.MILLISECOND),
    ValueUnit.S: UnitSpec(UnitCategory.DURATION, "seconds", LuxonKey.SECOND),
    ValueUnit.MIN: UnitSpec(UnitCategory.DURATION, "minutes", LuxonKey.MINUTE),
    ValueUnit.H: UnitSpec(UnitCategory.DURATION, "hours", LuxonKey.HOUR),
    ValueUnit.D: UnitSpec(UnitCategory.DURATION, "days", LuxonKey.DAY),
    ValueUnit.CELSIUS: UnitSpec(UnitCategory.TEMPERATURE, "degrees Celsius"),
    ValueUnit.W: UnitSpec(UnitCategory.POWER, "watt"),
    ValueUnit.WMIN: UnitSpec(UnitCategory.ENERGY, "watt minutes"),
    ValueUnit.WH: UnitSpec(UnitCategory.ENERGY, "watt hours"),
    ValueUnit.KWH: UnitSpec(UnitCategory.ENERGY, "kilowatt hours"),
    ValueUnit.V: UnitSpec(UnitCategory.VOLTAGE, "volt"),
}

DURATION_UNITS: dict[ValueUnit, LuxonKey] = {
    unit: spec.luxon_key
    for unit, spec in VALUE_UNITS.items()
    if spec.category is UnitCategory.DURATION and spec.luxon_key is not None
}


AnyDataValue = Union[str, datetime, float, int, bool, None]


def _as_unit(unit_id: Union[ValueUnit, str, None]) -> Optional[ValueUnit]:
    try:
        return ValueUnit(unit_id)
    except ValueError:
        return None


def is_duration_unit(unit_id: Union[ValueUnit, str, None]) -> bool:
    """Check if a unit id names a duration unit."""
    return _as_unit(unit_id) in DURATION_UNITS


def get_category_of_unit(unit_id: Union[ValueUnit, str, None]) -> Optional[str]:
    """Get the category of a unit id, or None for an unknown id."""
    unit = _as_unit(unit_id)
    if unit is None:
        return None
    return VALUE_UNITS[unit].category.value


def duration_to_timedelta(count: int, unit: Union[ValueUnit, str]) -> timedelta:
    """Convert a count of duration units to a timedelta."""
    resolved = _as_unit(unit)
    if resolved not in DURATION_UNITS:
        raise ValueError(f"Not a duration unit: {unit!r}")
    # timedelta keywords are the plural granularity names
    return timedelta(**{f"{DURATION_UNITS[resolved].value}s": count})


def _require_duration(unit: ValueUnit) -> ValueUnit:
    if not is_duration_unit(unit):
        raise ValueError(f"Expected a duration unit, got {unit.value!r}")
    return unit


DurationUnit = Annotated[ValueUnit, AfterValidator(_require_duration)]


def check_unit_for_type(
    value_type: ValueType, value_unit: Optional[ValueUnit]
) -> None:
    """Reject a unit declared on a non-numeric value type."""
    if value_unit is not None and value_type is not ValueType.NUMBER:
        raise ValueError(
            f"valueUnit {value_unit.value!r} requires valueType 'number', "
            f"got {value_type.value!r}"
        )
