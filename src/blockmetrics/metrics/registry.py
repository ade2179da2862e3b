"""Registry mapping metric names to their sample histories."""

import logging
import threading
from datetime import timedelta
from typing import Dict, List, Optional, Tuple, Union

import pandas as pd

from ..core.history import MAX_RECORDINGS, History
from ..core.models import MetricSnapshot
from ..core.units import TimeUnit, UnitLike, convert
from ..utils.config import get_config

logger = logging.getLogger(__name__)


class MetricRegistry:
    """Central aggregator for block timing metrics.
    
    Each metric name owns one ``History``. Inserting a new name takes the
    registry's structural lock; recording into an existing history only takes
    that history's own lock, so unrelated metrics never contend.
    
    Unknown names are never an error: every query returns zero for them.
    """
    
    def __init__(self, capacity: int = MAX_RECORDINGS):
        """Initialize an empty registry.
        
        Args:
            capacity: Window size of every history created by this registry
        """
        if capacity <= 0:
            raise ValueError(f"Registry capacity must be positive, got {capacity}")
        
        self.capacity = capacity
        self.metrics: Dict[str, History] = {}
        self._structure_lock = threading.Lock()
    
    def record(self, name: str, elapsed: Union[int, float, timedelta]) -> None:
        """Record one elapsed duration (nanoseconds) under ``name``."""
        history = self.metrics.get(name)
        if history is None:
            history = self._create_history(name)
        history.update(elapsed)
    
    def _create_history(self, name: str) -> History:
        with self._structure_lock:
            history = self.metrics.get(name)
            if history is None:
                history = History(self.capacity)
                self.metrics[name] = history
                logger.debug(f"Created metric '{name}' (capacity={self.capacity})")
        return history
    
    def snapshot(self, name: str) -> MetricSnapshot:
        """Return a consistent snapshot of ``name``, all zero if unknown."""
        history = self.metrics.get(name)
        if history is None:
            return MetricSnapshot(name=name)
        return history.snapshot(name)
    
    def times_entered(self, name: str) -> int:
        history = self.metrics.get(name)
        if history is None:
            return 0
        return history.times_entered()
    
    def min(self, name: str, unit: UnitLike = TimeUnit.NANOSECONDS) -> int:
        return convert(self.snapshot(name).min_ns, unit)
    
    def max(self, name: str, unit: UnitLike = TimeUnit.NANOSECONDS) -> int:
        return convert(self.snapshot(name).max_ns, unit)
    
    def min_max(self, name: str, unit: UnitLike = TimeUnit.NANOSECONDS) -> Tuple[int, int]:
        """Return ``(min, max)`` for ``name`` from a single snapshot."""
        snapshot = self.snapshot(name)
        return convert(snapshot.min_ns, unit), convert(snapshot.max_ns, unit)
    
    def average(self, name: str, unit: UnitLike = TimeUnit.NANOSECONDS) -> int:
        return convert(self.snapshot(name).average_ns, unit)
    
    def total(self, name: str, unit: UnitLike = TimeUnit.NANOSECONDS) -> int:
        return convert(self.snapshot(name).total_ns, unit)
    
    def samples(self, name: str, unit: UnitLike = TimeUnit.NANOSECONDS) -> List[int]:
        """Return the current window of ``name`` converted to ``unit``, oldest first."""
        history = self.metrics.get(name)
        if history is None:
            return []
        return [convert(value, unit) for value in history.samples()]
    
    def names(self) -> List[str]:
        with self._structure_lock:
            return list(self.metrics)
    
    def to_dataframe(self, unit: UnitLike = TimeUnit.NANOSECONDS) -> pd.DataFrame:
        """Get statistics for every metric as a pandas DataFrame."""
        unit = TimeUnit.parse(unit)
        rows = []
        for name in self.names():
            snapshot = self.snapshot(name)
            rows.append({
                "name": name,
                "times_entered": snapshot.times_entered,
                **snapshot.in_unit(unit),
                "unit": unit.symbol,
            })
        
        if not rows:
            return pd.DataFrame(
                columns=["name", "times_entered", "total", "average", "min", "max", "unit"]
            )
        return pd.DataFrame(rows)
    
    def __contains__(self, name: str) -> bool:
        return name in self.metrics
    
    def __len__(self) -> int:
        return len(self.metrics)
    
    def __repr__(self) -> str:
        return f"MetricRegistry(metrics={len(self)}, capacity={self.capacity})"


_default_registry: Optional[MetricRegistry] = None
_default_registry_lock = threading.Lock()


def get_registry() -> MetricRegistry:
    """Return the process-wide registry, creating it on first use."""
    global _default_registry
    if _default_registry is None:
        with _default_registry_lock:
            if _default_registry is None:
                capacity = get_config()["capacity"]
                _default_registry = MetricRegistry(capacity=capacity)
                logger.info(f"Default metric registry initialized (capacity={capacity})")
    return _default_registry
