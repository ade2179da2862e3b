"""Block timers and instrumentation probes."""

from .timer import (
    COLLECT_METRICS,
    HighResolutionTimer,
    ScopedTimer,
    build_probes,
    record_block,
    timed,
)

__all__ = [
    "COLLECT_METRICS",
    "HighResolutionTimer",
    "ScopedTimer",
    "build_probes",
    "record_block",
    "timed",
]
