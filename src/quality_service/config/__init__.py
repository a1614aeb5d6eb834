"""Configuration snapshot, file loading and project metadata resolution."""

from .resolver import detect_base_package, resolve_configuration
from .settings import (
    ConfigurationError,
    QaConfiguration,
    discover_configuration,
    find_configuration_file,
    load_configuration,
)

__all__ = [
    "ConfigurationError",
    "QaConfiguration",
    "detect_base_package",
    "discover_configuration",
    "find_configuration_file",
    "load_configuration",
    "resolve_configuration",
]
