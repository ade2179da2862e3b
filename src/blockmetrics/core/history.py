"""Bounded wrap-around history of timing samples for a single metric."""

import threading
from datetime import timedelta
from typing import Iterator, List, Union

import numpy as np

from .models import MetricSnapshot
from .units import to_nanoseconds, truncating_divide

# Default number of samples kept per metric
MAX_RECORDINGS = 1000

# Samples outside the int64 range (about 292 years) are saturated
_SAMPLE_BOUNDS = np.iinfo(np.int64)


class History:
    """Fixed-capacity ring buffer of nanosecond durations.
    
    The buffer keeps the most recent ``capacity`` samples. Once it is full,
    every new sample overwrites the oldest one, so ``min``/``max``/``total``
    and ``average`` describe a sliding window. ``times_entered`` keeps counting
    every update ever made and is not clipped to the window.
    
    All reads and writes go through a per-instance lock.
    """
    
    def __init__(self, capacity: int = MAX_RECORDINGS) -> None:
        """Initialize an empty history.
        
        Args:
            capacity: Number of samples kept in the window
            
        Raises:
            ValueError: If capacity is not a positive integer
        """
        if int(capacity) <= 0:
            raise ValueError(f"History capacity must be positive, got {capacity}")
        
        self._capacity = int(capacity)
        self._samples = np.zeros(self._capacity, dtype=np.int64)
        self._entries_recorded = 0
        self._lock = threading.Lock()
    
    @property
    def capacity(self) -> int:
        return self._capacity
    
    def update(self, elapsed: Union[int, float, timedelta]) -> None:
        """Record one elapsed duration (nanoseconds or ``timedelta``).
        
        Values beyond the int64 range are clamped to it.
        """
        nanoseconds = to_nanoseconds(elapsed)
        nanoseconds = min(max(nanoseconds, int(_SAMPLE_BOUNDS.min)), int(_SAMPLE_BOUNDS.max))
        with self._lock:
            self._samples[self._entries_recorded % self._capacity] = nanoseconds
            self._entries_recorded += 1
    
    def times_entered(self) -> int:
        with self._lock:
            return self._entries_recorded
    
    def window_length(self) -> int:
        with self._lock:
            return min(self._entries_recorded, self._capacity)
    
    def min(self) -> int:
        return self.snapshot().min_ns
    
    def max(self) -> int:
        return self.snapshot().max_ns
    
    def total(self) -> int:
        return self.snapshot().total_ns
    
    def average(self) -> int:
        return self.snapshot().average_ns
    
    def samples(self) -> List[int]:
        """Return the current window, oldest sample first."""
        window, _ = self._copy_window()
        return [int(value) for value in window]
    
    def snapshot(self, name: str = "") -> MetricSnapshot:
        """Compute every statistic from one consistent copy of the window."""
        window, entries = self._copy_window()
        length = len(window)
        if length == 0:
            return MetricSnapshot(name=name, times_entered=entries)
        
        # Python ints so the sum cannot wrap
        total = sum(window.tolist())
        return MetricSnapshot(
            name=name,
            times_entered=entries,
            window_length=length,
            total_ns=total,
            min_ns=int(window.min()),
            max_ns=int(window.max()),
            average_ns=truncating_divide(total, length),
        )
    
    def _copy_window(self):
        """Copy the valid window in chronological order under the lock."""
        with self._lock:
            entries = self._entries_recorded
            if entries <= self._capacity:
                window = self._samples[:entries].copy()
            else:
                oldest = entries % self._capacity
                window = np.concatenate((self._samples[oldest:], self._samples[:oldest]))
        return window, entries
    
    def __len__(self) -> int:
        return self.window_length()
    
    def __iter__(self) -> Iterator[int]:
        return iter(self.samples())
    
    def __repr__(self) -> str:
        return (
            f"History(capacity={self._capacity}, "
            f"entries_recorded={self.times_entered()})"
        )
