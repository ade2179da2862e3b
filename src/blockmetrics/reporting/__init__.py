"""Metric reporting module."""

from .reporter import MetricsReporter, dump_all, dump_metrics

__all__ = ["MetricsReporter", "dump_all", "dump_metrics"]
