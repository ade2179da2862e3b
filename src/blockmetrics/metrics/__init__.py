"""Metric registry module."""

from .registry import MetricRegistry, get_registry

__all__ = ["MetricRegistry", "get_registry"]
