"""Utility functions and helpers.

This module provides utilities for slack-qna:
- security: Secret redaction
- logging: Structured logging with secret sanitization
"""

from slack_qna.utils.logging import (
    LogEventNames,
    LogFormat,
    LogLevel,
    bind_context,
    clear_context,
    configure_logging,
    configure_logging_from,
    get_logger,
    unbind_context,
)
from slack_qna.utils.security import (
    RedactionError,
    SecretRedactor,
    SecurityError,
    mask_config_value,
)

__all__ = [
    "LogEventNames",
    "LogFormat",
    "LogLevel",
    "RedactionError",
    "SecretRedactor",
    "SecurityError",
    "bind_context",
    "clear_context",
    "configure_logging",
    "configure_logging_from",
    "get_logger",
    "mask_config_value",
    "unbind_context",
]
