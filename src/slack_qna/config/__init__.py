"""Configuration loading and validation."""

from .loader import load_config
from .schema import (
    FileLoggingConfig,
    ListenConfig,
    LoggingConfig,
    ReactionsConfig,
    SlackConfig,
    SlackQnaConfig,
)

__all__ = [
    # Loader
    "load_config",
    # Root config
    "SlackQnaConfig",
    # Sections
    "FileLoggingConfig",
    "ListenConfig",
    "LoggingConfig",
    "ReactionsConfig",
    "SlackConfig",
]
