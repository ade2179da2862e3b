"""blockmetrics: lightweight block timing and aggregation.

Typical use::

    from blockmetrics import get_registry, record_block, dump_all

    for item in items:
        with record_block("process_item"):
            process(item)

    print(get_registry().average("process_item", "us"))
    dump_all(unit="us")
"""

from .core import MAX_RECORDINGS, History, MetricSnapshot, TimeUnit, convert, stringify_unit
from .metrics import MetricRegistry, get_registry
from .reporting import MetricsReporter, dump_all, dump_metrics
from .timing import COLLECT_METRICS, HighResolutionTimer, ScopedTimer, record_block, timed
from .utils import ConfigurationError, load_config

__version__ = "0.1.0"

__all__ = [
    "COLLECT_METRICS",
    "ConfigurationError",
    "HighResolutionTimer",
    "History",
    "MAX_RECORDINGS",
    "MetricRegistry",
    "MetricSnapshot",
    "MetricsReporter",
    "ScopedTimer",
    "TimeUnit",
    "convert",
    "dump_all",
    "dump_metrics",
    "get_registry",
    "load_config",
    "record_block",
    "stringify_unit",
    "timed",
]
