"""Configuration management module."""

from .config_manager import ConfigManager
from .models import Config, LoggingConfig, RatingConfig, TMDbConfig, WatchHistoryConfig

__all__ = [
    "ConfigManager",
    "Config",
    "TMDbConfig",
    "RatingConfig",
    "WatchHistoryConfig",
    "LoggingConfig",
]
