"""Time units and nanosecond conversions.

All durations are carried internally as an ``int`` count of nanoseconds.
Coarser units are derived from a single conversion function parameterized by
the unit's nanoseconds-per-unit factor, so callers pick the return granularity
without any per-unit branching.
"""

from datetime import timedelta
from enum import Enum
from typing import Dict, Union


class TimeUnit(Enum):
    """Supported time units, keyed by symbol and nanoseconds per unit."""

    NANOSECONDS = ("ns", 1)
    MICROSECONDS = ("us", 1_000)
    MILLISECONDS = ("ms", 1_000_000)
    SECONDS = ("s", 1_000_000_000)
    MINUTES = ("min", 60 * 1_000_000_000)
    HOURS = ("h", 3600 * 1_000_000_000)

    def __init__(self, symbol: str, nanoseconds_per_unit: int) -> None:
        self.symbol = symbol
        self.nanoseconds_per_unit = nanoseconds_per_unit

    @classmethod
    def parse(cls, value: Union["TimeUnit", str]) -> "TimeUnit":
        """Resolve a unit from a ``TimeUnit`` or a string.

        Accepts the symbol (``"ms"``) or the member name in any case
        (``"milliseconds"``).

        Raises:
            ValueError: If the string names no known unit.
        """
        if isinstance(value, cls):
            return value

        key = str(value).strip()
        for unit in cls:
            if key == unit.symbol or key.upper() == unit.name:
                return unit

        valid = ", ".join(unit.symbol for unit in cls)
        raise ValueError(f"Unknown time unit: {value!r}. Must be one of: {valid}")


UnitLike = Union[TimeUnit, str]

# Anything not listed here is reported in seconds.
_UNIT_SUFFIXES: Dict[TimeUnit, str] = {
    TimeUnit.NANOSECONDS: "ns",
    TimeUnit.MICROSECONDS: "us",
    TimeUnit.MILLISECONDS: "ms",
    TimeUnit.SECONDS: "s",
}


def stringify_unit(unit: UnitLike) -> str:
    """Return the report suffix for ``unit``."""
    return _UNIT_SUFFIXES.get(TimeUnit.parse(unit), "s")


def collapse_to_seconds(unit: UnitLike) -> TimeUnit:
    """Downgrade any unit coarser than seconds to seconds."""
    unit = TimeUnit.parse(unit)
    if unit.nanoseconds_per_unit > TimeUnit.SECONDS.nanoseconds_per_unit:
        return TimeUnit.SECONDS
    return unit


def truncating_divide(dividend: int, divisor: int) -> int:
    """Integer division rounding toward zero instead of toward minus infinity."""
    quotient = abs(dividend) // divisor
    return quotient if dividend >= 0 else -quotient


def convert(nanoseconds: int, unit: UnitLike) -> int:
    """Convert a nanosecond count into ``unit``, truncating toward zero."""
    return truncating_divide(nanoseconds, TimeUnit.parse(unit).nanoseconds_per_unit)


def to_nanoseconds(value: Union[int, float, timedelta]) -> int:
    """Coerce an elapsed value into an ``int`` nanosecond count.

    ``timedelta`` values are converted exactly; other numbers are treated as
    nanoseconds and truncated.
    """
    if isinstance(value, timedelta):
        whole_seconds = value.days * 86_400 + value.seconds
        return whole_seconds * 1_000_000_000 + value.microseconds * 1_000
    return int(value)
