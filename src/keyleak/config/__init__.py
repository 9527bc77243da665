"""Configuration loading, schema, and defaults."""

from keyleak.config.defaults import DEFAULT_EXCLUDE_DIRS
from keyleak.config.loader import ConfigError, load_config
from keyleak.config.schema import KeyleakConfig, OutputConfig, ScanConfig

__all__ = [
    "ConfigError",
    "DEFAULT_EXCLUDE_DIRS",
    "KeyleakConfig",
    "OutputConfig",
    "ScanConfig",
    "load_config",
]
