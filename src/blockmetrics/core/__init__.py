"""Core recording engine: units, sample history and snapshots."""

from .history import MAX_RECORDINGS, History
from .models import MetricSnapshot
from .units import TimeUnit, collapse_to_seconds, convert, stringify_unit, to_nanoseconds

__all__ = [
    "MAX_RECORDINGS",
    "History",
    "MetricSnapshot",
    "TimeUnit",
    "collapse_to_seconds",
    "convert",
    "stringify_unit",
    "to_nanoseconds",
]
