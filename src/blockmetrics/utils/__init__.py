"""Configuration utilities."""

from .config import (
    ConfigurationError,
    MetricsConfigValidator,
    get_config,
    load_config,
    validate_config,
)

__all__ = [
    "ConfigurationError",
    "MetricsConfigValidator",
    "get_config",
    "load_config",
    "validate_config",
]
