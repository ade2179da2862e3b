"""
Configuration for metric collection.

Settings are plain dictionaries with three keys:
- enabled: whether block probes are materialized at all
- capacity: number of samples kept per metric
- report_unit: default unit used by the reporter

Values are read from ``BLOCKMETRICS_*`` environment variables and checked by
``MetricsConfigValidator``.
"""

import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..core.history import MAX_RECORDINGS
from ..core.units import TimeUnit

logger = logging.getLogger(__name__)

ENV_PREFIX = "BLOCKMETRICS_"

DEFAULT_CONFIG: Dict[str, Any] = {
    "enabled": True,
    "capacity": MAX_RECORDINGS,
    "report_unit": TimeUnit.NANOSECONDS,
}

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


class ConfigurationError(Exception):
    """Raised when configuration validation fails."""
    pass


class MetricsConfigValidator:
    """Validates and normalizes metrics configuration values."""
    
    KNOWN_KEYS = set(DEFAULT_CONFIG)
    
    @classmethod
    def validate(cls, config: Dict[str, Any]) -> List[str]:
        """Validate a configuration dict, normalizing valid values in place.
        
        Invalid values are left untouched.
        
        Args:
            config: Raw configuration values, typically strings from the
                environment
                
        Returns:
            List of error messages, empty if the configuration is valid
        """
        errors = []
        
        unknown = set(config) - cls.KNOWN_KEYS
        if unknown:
            errors.append(f"Unknown configuration keys: {sorted(unknown)}")
        
        for key in sorted(cls.KNOWN_KEYS & set(config)):
            value, error = cls.normalize(key, config[key])
            if error:
                errors.append(error)
            else:
                config[key] = value
        
        return errors
    
    @classmethod
    def normalize(cls, key: str, value: Any) -> Tuple[Any, Optional[str]]:
        """Normalize a single value.
        
        Returns:
            Tuple of (normalized_value, error); error is None when valid
        """
        if key == "enabled":
            enabled = cls._parse_bool(value)
            if enabled is None:
                return value, f"Invalid enabled flag: {value!r} (expected true/false)"
            return enabled, None
        
        if key == "capacity":
            try:
                capacity = int(value)
            except (TypeError, ValueError):
                return value, f"Invalid capacity: {value!r} (expected an integer)"
            if capacity <= 0:
                return value, f"Invalid capacity: {capacity} (must be positive)"
            return capacity, None
        
        if key == "report_unit":
            try:
                return TimeUnit.parse(value), None
            except ValueError as e:
                return value, f"Invalid report_unit: {e}"
        
        return value, f"Unknown configuration key: {key}"
    
    @staticmethod
    def _parse_bool(value: Any) -> Optional[bool]:
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
        return None


def read_env_config(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Collect the ``BLOCKMETRICS_*`` variables that are set."""
    environ = os.environ if environ is None else environ
    config = {}
    for key in DEFAULT_CONFIG:
        env_name = f"{ENV_PREFIX}{key.upper()}"
        if env_name in environ:
            config[key] = environ[env_name]
    return config


def validate_config(config: Dict[str, Any]) -> Tuple[bool, List[str], Dict[str, Any]]:
    """Validate ``config`` and merge its valid values over the defaults.
    
    Returns:
        Tuple of (is_valid, errors, merged_config)
    """
    config = dict(config)
    errors = MetricsConfigValidator.validate(config)
    
    merged = dict(DEFAULT_CONFIG)
    for key in MetricsConfigValidator.KNOWN_KEYS & set(config):
        value, error = MetricsConfigValidator.normalize(key, config[key])
        if error is None:
            merged[key] = value
    
    return len(errors) == 0, errors, merged


def load_config(environ: Optional[Mapping[str, str]] = None, strict: bool = False) -> Dict[str, Any]:
    """Load metrics configuration from the environment.
    
    Args:
        environ: Mapping to read from, defaults to ``os.environ``
        strict: Raise on invalid values instead of falling back to defaults
        
    Returns:
        Complete configuration dict
        
    Raises:
        ConfigurationError: If strict and any value is invalid
    """
    is_valid, errors, config = validate_config(read_env_config(environ))
    
    if not is_valid:
        if strict:
            raise ConfigurationError("; ".join(errors))
        for error in errors:
            logger.warning(f"Ignoring invalid metrics configuration: {error}")
    
    return config


_active_config: Optional[Dict[str, Any]] = None


def get_config() -> Dict[str, Any]:
    """Return the process-wide configuration, loading it on first use."""
    global _active_config
    if _active_config is None:
        _active_config = load_config()
    return _active_config
