"""Configuration module for smartapp-core."""

from .settings import SmartAppSettings, get_settings
from .logging_config import (
    setup_logging,
    LogLevel,
    LogVerbosity,
    LogFormat,
    LoggingConfig,
)

__all__ = [
    "SmartAppSettings",
    "get_settings",
    "setup_logging",
    "LogLevel",
    "LogVerbosity",
    "LogFormat",
    "LoggingConfig",
]
