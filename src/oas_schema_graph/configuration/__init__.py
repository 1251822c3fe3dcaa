"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import DEFAULT_LOG_LEVEL, LOG_LEVELS, ConfigurationError, load_configuration
from .runtime_settings import Configuration, DocumentSettings, LoggingSettings, OutputSettings

__all__ = [
    "Configuration",
    "DocumentSettings",
    "LoggingSettings",
    "OutputSettings",
    "ConfigurationError",
    "DEFAULT_LOG_LEVEL",
    "LOG_LEVELS",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
