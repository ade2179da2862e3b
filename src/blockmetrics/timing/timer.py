"""Block timers and the probes that instrument code with them.

Instrumented code uses one of two probes::

    with record_block("parse"):
        ...

    @timed("load")
    def load(): ...

Whether probes are materialized is decided once, at import time, from the
``enabled`` configuration flag. When collection is disabled the probes are
bound to no-op versions: no timer is created and the registry stays empty.
"""

import functools
import logging
import time
from contextlib import nullcontext
from typing import Any, Callable, Optional, Tuple

from ..metrics.registry import MetricRegistry, get_registry
from ..utils.config import get_config

logger = logging.getLogger(__name__)


class HighResolutionTimer:
    """Monotonic nanosecond stopwatch started on construction."""
    
    def __init__(self, clock: Callable[[], int] = time.perf_counter_ns) -> None:
        self._clock = clock
        self.start_time = self._take_time_stamp()
    
    def restart(self) -> None:
        self.start_time = self._take_time_stamp()
    
    def elapsed(self) -> int:
        """Nanoseconds since construction or the last ``restart``."""
        now = self._take_time_stamp()
        if now is None or self.start_time is None:
            return 0
        return now - self.start_time
    
    def _take_time_stamp(self) -> Optional[int]:
        try:
            return self._clock()
        except Exception as e:
            logger.warning(f"Clock read failed, recording zero elapsed time: {e}")
            return None


class ScopedTimer:
    """Records the time spent inside a ``with`` block under a metric name.
    
    The start timestamp is taken when the timer is constructed. On every exit
    path, including exceptions, the elapsed time is recorded exactly once.
    Exceptions raised by the block are never suppressed.
    """
    
    def __init__(
        self,
        name: str,
        registry: Optional[MetricRegistry] = None,
        clock: Callable[[], int] = time.perf_counter_ns,
    ) -> None:
        self.name = name
        self.registry = registry if registry is not None else get_registry()
        self._timer = HighResolutionTimer(clock)
        self._recorded = False
    
    def __enter__(self) -> "ScopedTimer":
        return self
    
    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        self.stop()
        return False
    
    def stop(self) -> int:
        """Record the elapsed time if not already recorded, and return it."""
        elapsed = self._timer.elapsed()
        if not self._recorded:
            self._recorded = True
            self.registry.record(self.name, elapsed)
        return elapsed


_NULL_BLOCK = nullcontext()


def build_probes(enabled: bool) -> Tuple[Callable[..., Any], Callable[..., Any]]:
    """Build the ``(record_block, timed)`` probe pair.
    
    Args:
        enabled: Whether probes create timers at all
        
    Returns:
        Tuple of (record_block, timed)
    """
    if not enabled:
        def record_block(name: str, registry: Optional[MetricRegistry] = None):
            return _NULL_BLOCK
        
        def timed(name: Optional[str] = None, registry: Optional[MetricRegistry] = None):
            def decorator(func):
                return func
            return decorator
        
        return record_block, timed
    
    def record_block(name: str, registry: Optional[MetricRegistry] = None) -> ScopedTimer:
        """Time the enclosing ``with`` block under ``name``."""
        return ScopedTimer(name, registry)
    
    def timed(name: Optional[str] = None, registry: Optional[MetricRegistry] = None):
        """Decorator timing every call of a function.
        
        The metric name defaults to the function's qualified name.
        """
        def decorator(func):
            metric_name = name or func.__qualname__
            
            @functools.wraps(func)
            def wrapper(*args, **kwargs):
                with ScopedTimer(metric_name, registry):
                    return func(*args, **kwargs)
            return wrapper
        return decorator
    
    return record_block, timed


COLLECT_METRICS: bool = get_config()["enabled"]

record_block, timed = build_probes(COLLECT_METRICS)

if not COLLECT_METRICS:
    logger.info("Metric collection disabled, probes are no-ops")
