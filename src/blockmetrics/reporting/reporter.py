"""Unit-scaled text reports of recorded metrics."""

import logging
import sys
from typing import Optional, TextIO

from ..core.units import UnitLike, collapse_to_seconds, stringify_unit
from ..metrics.registry import MetricRegistry, get_registry
from ..utils.config import get_config

logger = logging.getLogger(__name__)


class MetricsReporter:
    """Formats registry statistics as human-readable text.
    
    Report layout for one metric::
    
        <name> metrics:
        \\tEntered: <count>
        \\tTotal: <value><unit>
        \\tAverage: <value><unit>
        \\tMin: <value><unit>
        \\tMax: <value><unit>
    
    Units coarser than seconds are reported in seconds.
    """
    
    def __init__(self, registry: Optional[MetricRegistry] = None):
        self.registry = registry if registry is not None else get_registry()
    
    def format(self, name: str, unit: Optional[UnitLike] = None) -> str:
        """Render the report block for ``name``; unknown names report zeros."""
        unit = collapse_to_seconds(self._resolve_unit(unit))
        suffix = stringify_unit(unit)
        snapshot = self.registry.snapshot(name)
        values = snapshot.in_unit(unit)
        
        lines = [
            f"{name} metrics:",
            f"\tEntered: {snapshot.times_entered}",
            f"\tTotal: {values['total']}{suffix}",
            f"\tAverage: {values['average']}{suffix}",
            f"\tMin: {values['min']}{suffix}",
            f"\tMax: {values['max']}{suffix}",
        ]
        return "\n".join(lines) + "\n"
    
    def format_all(self, unit: Optional[UnitLike] = None) -> str:
        """Render every known metric, each block followed by a blank line."""
        return "".join(self.format(name, unit) + "\n" for name in self.registry.names())
    
    def dump(self, name: str, stream: Optional[TextIO] = None, unit: Optional[UnitLike] = None) -> None:
        stream = stream if stream is not None else sys.stdout
        stream.write(self.format(name, unit))
    
    def dump_all(self, stream: Optional[TextIO] = None, unit: Optional[UnitLike] = None) -> None:
        stream = stream if stream is not None else sys.stdout
        stream.write(self.format_all(unit))
    
    def log_summary(self, unit: Optional[UnitLike] = None, level: int = logging.INFO) -> None:
        """Write every metric report to the package logger."""
        names = self.registry.names()
        logger.log(level, "=" * 60)
        logger.log(level, f"BLOCK METRICS SUMMARY ({len(names)} metrics)")
        logger.log(level, "=" * 60)
        for name in names:
            for line in self.format(name, unit).splitlines():
                logger.log(level, line.replace("\t", "    "))
        logger.log(level, "=" * 60)
    
    @staticmethod
    def _resolve_unit(unit: Optional[UnitLike]) -> UnitLike:
        if unit is None:
            return get_config()["report_unit"]
        return unit


def dump_metrics(name: str, stream: Optional[TextIO] = None, unit: Optional[UnitLike] = None) -> None:
    """Write the report for ``name`` from the default registry."""
    MetricsReporter().dump(name, stream, unit)


def dump_all(stream: Optional[TextIO] = None, unit: Optional[UnitLike] = None) -> None:
    """Write reports for every metric in the default registry."""
    MetricsReporter().dump_all(stream, unit)
