#!/usr/bin/env python3
"""Time a small loop with block probes and print the collected metrics."""

import logging
import os
import sys
import time

sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from blockmetrics import MetricsReporter, TimeUnit, get_registry, record_block

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def foo():
    with record_block("foo"):
        vals = []
        for i in range(100):
            with record_block("foo_loop"):
                vals.append(i)
                time.sleep(1e-8)
        return vals


def main():
    foo()
    
    registry = get_registry()
    assert registry.times_entered("foo") == 1
    assert registry.times_entered("foo_loop") == 100
    assert registry.total("foo", TimeUnit.MICROSECONDS) > 1
    assert registry.min("foo_loop", TimeUnit.NANOSECONDS) > 10
    
    reporter = MetricsReporter(registry)
    reporter.dump("foo_loop", sys.stdout, TimeUnit.NANOSECONDS)
    # foo_loop metrics:
    #     Entered: 100
    #     Total: 5355843ns
    #     Average: 53558ns
    #     Min: 26478ns
    #     Max: 85410ns
    
    print()
    reporter.log_summary(TimeUnit.MICROSECONDS)
    print(registry.to_dataframe(TimeUnit.MICROSECONDS).to_string(index=False))


if __name__ == "__main__":
    main()
