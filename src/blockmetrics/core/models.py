"""Data models for recorded metric statistics."""

from dataclasses import dataclass
from typing import Dict

from .units import UnitLike, convert


@dataclass(frozen=True)
class MetricSnapshot:
    """Statistics of one metric's history, read at a single instant."""
    
    name: str
    times_entered: int = 0
    window_length: int = 0
    
    # Durations over the current window (nanoseconds)
    total_ns: int = 0
    min_ns: int = 0
    max_ns: int = 0
    average_ns: int = 0
    
    def in_unit(self, unit: UnitLike) -> Dict[str, int]:
        """Return the window durations converted to ``unit``."""
        return {
            "total": convert(self.total_ns, unit),
            "average": convert(self.average_ns, unit),
            "min": convert(self.min_ns, unit),
            "max": convert(self.max_ns, unit),
        }
