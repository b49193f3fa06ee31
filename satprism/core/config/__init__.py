"""Configuration management module."""

from satprism.core.config.settings import (
    ConfigManager,
    DisplayConfig,
    HttpSettings,
    IndexConfig,
    LoggingConfig,
    PriceHistoryConfig,
    SatPrismConfig,
    WebConfig,
    get_default_config,
    load_config_from_env,
)

__all__ = [
    "ConfigManager",
    "SatPrismConfig",
    "IndexConfig",
    "PriceHistoryConfig",
    "HttpSettings",
    "DisplayConfig",
    "LoggingConfig",
    "WebConfig",
    "get_default_config",
    "load_config_from_env",
]
