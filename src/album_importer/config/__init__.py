"""Configuration management module."""

from .config_manager import ConfigManager
from .models import (
    AppConfig,
    CatalogConfig,
    Config,
    ImportConfig,
    LoggingConfig,
    ParsingConfig,
    PathsConfig,
    TierConfig,
)

__all__ = [
    "ConfigManager",
    "Config",
    "AppConfig",
    "CatalogConfig",
    "ImportConfig",
    "LoggingConfig",
    "ParsingConfig",
    "PathsConfig",
    "TierConfig",
]
