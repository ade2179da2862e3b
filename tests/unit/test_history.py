"""
Unit tests for the bounded sample history.
"""

from datetime import timedelta

import pytest
from blockmetrics.core.history import MAX_RECORDINGS, History


class TestHistoryBasics:
    """Test statistics before the buffer wraps."""
    
    def test_empty_history_reports_zero(self):
        history = History()
        assert history.times_entered() == 0
        assert len(history) == 0
        assert history.min() == 0
        assert history.max() == 0
        assert history.total() == 0
        assert history.average() == 0
        assert history.samples() == []
    
    def test_default_capacity(self):
        assert History().capacity == MAX_RECORDINGS == 1000
    
    def test_three_samples(self):
        history = History()
        for elapsed in (10, 20, 30):
            history.update(elapsed)
        
        assert history.times_entered() == 3
        assert history.total() == 60
        assert history.min() == 10
        assert history.max() == 30
        assert history.average() == 20
    
    def test_average_truncates(self):
        history = History()
        for elapsed in (1, 2, 2):
            history.update(elapsed)
        assert history.average() == 1
    
    def test_few_recordings_window(self):
        history = History()
        for i in range(10):
            history.update(i)
        
        assert len(history) == 10
        assert list(history) == list(range(10))
    
    def test_fill_to_capacity(self):
        history = History()
        for i in range(MAX_RECORDINGS):
            history.update(i)
        
        assert history.samples() == list(range(MAX_RECORDINGS))
        assert history.times_entered() == MAX_RECORDINGS
    
    @pytest.mark.parametrize("capacity", [0, -5])
    def test_invalid_capacity(self, capacity):
        with pytest.raises(ValueError):
            History(capacity)


class TestHistoryWrapAround:
    """Test ring buffer overwrite behaviour."""
    
    def test_window_holds_latest_values(self):
        capacity = 100
        extra = 9
        history = History(capacity)
        for i in range(capacity + extra):
            history.update(i)
        
        assert history.samples() == list(range(extra, capacity + extra))
        assert len(history) == capacity
    
    def test_times_entered_is_not_clipped(self):
        history = History(capacity=5)
        for i in range(12):
            history.update(i)
        
        # Count since creation, while statistics cover the window only
        assert history.times_entered() == 12
        assert history.window_length() == 5
        assert history.total() == sum(range(7, 12))
        assert history.average() == sum(range(7, 12)) // 5
        assert history.min() == 7
        assert history.max() == 11
    
    def test_evicted_extremes_are_forgotten(self):
        history = History(capacity=3)
        history.update(1_000_000)
        for elapsed in (5, 6, 7):
            history.update(elapsed)
        
        assert history.max() == 7
    
    def test_wrap_after_skipped_value(self):
        history = History()
        for i in range(MAX_RECORDINGS):
            history.update(i)
        for i in range(MAX_RECORDINGS + 1, MAX_RECORDINGS + 10):
            history.update(i)
        
        expected = list(range(9, MAX_RECORDINGS)) + list(range(MAX_RECORDINGS + 1, MAX_RECORDINGS + 10))
        assert history.samples() == expected
        assert history.times_entered() == MAX_RECORDINGS + 9


class TestHistorySnapshot:
    """Test consistent snapshots."""
    
    def test_snapshot_fields(self):
        history = History(capacity=4)
        for elapsed in (4, 8, 12):
            history.update(elapsed)
        
        snapshot = history.snapshot("x")
        assert snapshot.name == "x"
        assert snapshot.times_entered == 3
        assert snapshot.window_length == 3
        assert snapshot.total_ns == 24
        assert snapshot.min_ns == 4
        assert snapshot.max_ns == 12
        assert snapshot.average_ns == 8
    
    def test_snapshot_in_unit(self):
        history = History()
        history.update(1_500_000)
        history.update(2_500_000)
        
        values = history.snapshot().in_unit("ms")
        assert values == {"total": 4, "average": 2, "min": 1, "max": 2}
    
    def test_large_totals_do_not_overflow(self):
        history = History(capacity=4)
        big = 2**62
        for _ in range(4):
            history.update(big)
        
        assert history.total() == 4 * big
        assert history.average() == big
    
    def test_out_of_range_samples_are_clamped(self):
        history = History(capacity=4)
        history.update(2**63)
        history.update(timedelta(days=300 * 365))
        history.update(-(2**70))
        
        int64_max = 2**63 - 1
        assert history.times_entered() == 3
        assert history.samples() == [int64_max, int64_max, -(2**63)]
        assert history.max() == int64_max
        assert history.total() == 2 * int64_max - 2**63
