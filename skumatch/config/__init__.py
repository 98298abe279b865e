"""Configuration management module for the SKU matcher."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, validate_config_file
from .models import (
    AppConfig,
    CatalogSourceConfig,
    CatalogType,
    ExportConfig,
    ExportField,
    ExportFormat,
    LogFormat,
    LogLevel,
    LoggingConfig,
    MatchingConfig,
    ScoringRules,
)

__all__ = [
    # Main loader functions
    "load_config",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "CatalogSourceConfig",
    "MatchingConfig",
    "ScoringRules",
    "ExportConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "CatalogType",
    "ExportField",
    "ExportFormat",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
