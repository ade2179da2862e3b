"""
Unit tests for timers and probes.
"""

import pytest
from blockmetrics.metrics.registry import MetricRegistry
from blockmetrics.timing.timer import HighResolutionTimer, ScopedTimer, build_probes


class FakeClock:
    """Clock returning scripted nanosecond timestamps."""
    
    def __init__(self, *stamps):
        self.stamps = list(stamps)
    
    def __call__(self):
        return self.stamps.pop(0)


def broken_clock():
    raise OSError("clock unavailable")


def misbehaving_clock():
    raise RuntimeError("clock returned garbage")


@pytest.fixture
def registry():
    return MetricRegistry()


class TestHighResolutionTimer:
    """Test the stopwatch."""
    
    def test_elapsed(self):
        timer = HighResolutionTimer(FakeClock(100, 350))
        assert timer.elapsed() == 250
    
    def test_restart(self):
        timer = HighResolutionTimer(FakeClock(0, 1_000, 1_500))
        timer.restart()
        assert timer.elapsed() == 500
    
    def test_real_clock_is_monotonic(self):
        timer = HighResolutionTimer()
        assert timer.elapsed() >= 0
    
    def test_failing_clock_reports_zero(self):
        timer = HighResolutionTimer(broken_clock)
        assert timer.elapsed() == 0
    
    def test_any_clock_error_reports_zero(self):
        timer = HighResolutionTimer(misbehaving_clock)
        assert timer.elapsed() == 0


class TestScopedTimer:
    """Test block recording."""
    
    def test_records_on_exit(self, registry):
        with ScopedTimer("block", registry, clock=FakeClock(10, 40)):
            pass
        
        assert registry.times_entered("block") == 1
        assert registry.total("block") == 30
    
    def test_start_captured_at_construction(self, registry):
        clock = FakeClock(5, 25)
        timer = ScopedTimer("block", registry, clock=clock)
        with timer:
            pass
        assert registry.max("block") == 20
    
    def test_records_when_block_raises(self, registry):
        with pytest.raises(RuntimeError):
            with ScopedTimer("failing", registry, clock=FakeClock(0, 7)):
                raise RuntimeError("boom")
        
        assert registry.times_entered("failing") == 1
        assert registry.total("failing") == 7
    
    def test_records_on_early_return(self, registry):
        def work():
            with ScopedTimer("early", registry):
                return 42
        
        assert work() == 42
        assert registry.times_entered("early") == 1
    
    def test_records_exactly_once(self, registry):
        with ScopedTimer("once", registry, clock=FakeClock(0, 3, 9)) as timer:
            assert timer.stop() == 3
        
        assert registry.times_entered("once") == 1
        assert registry.total("once") == 3
    
    def test_failing_clock_records_zero(self, registry):
        with ScopedTimer("no_clock", registry, clock=broken_clock):
            pass
        
        assert registry.times_entered("no_clock") == 1
        assert registry.max("no_clock") == 0
    
    def test_clock_error_does_not_replace_block_exception(self, registry):
        with pytest.raises(KeyError):
            with ScopedTimer("bad_clock", registry, clock=misbehaving_clock):
                raise KeyError("from the block")
        
        assert registry.times_entered("bad_clock") == 1
        assert registry.max("bad_clock") == 0


class TestProbes:
    """Test enabled and disabled probe pairs."""
    
    def test_enabled_record_block(self, registry):
        record_block, _ = build_probes(True)
        for _ in range(3):
            with record_block("loop", registry):
                pass
        
        assert registry.times_entered("loop") == 3
    
    def test_enabled_timed_uses_qualname(self, registry):
        _, timed = build_probes(True)
        
        @timed(registry=registry)
        def compute(x):
            return x * 2
        
        assert compute(21) == 42
        assert registry.times_entered(compute.__qualname__) == 1
        assert compute.__name__ == "compute"
    
    def test_enabled_timed_with_name(self, registry):
        _, timed = build_probes(True)
        
        @timed("custom", registry)
        def compute():
            raise ValueError("bad input")
        
        with pytest.raises(ValueError):
            compute()
        assert registry.times_entered("custom") == 1
    
    def test_disabled_probes_record_nothing(self, registry):
        record_block, timed = build_probes(False)
        
        def compute():
            return "done"
        
        assert timed("compute", registry)(compute) is compute
        with record_block("loop", registry):
            compute()
        
        assert len(registry) == 0
        assert registry.times_entered("loop") == 0
