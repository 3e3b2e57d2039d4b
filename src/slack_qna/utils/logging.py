"""Structured logging configuration with secret sanitization.

This module configures structlog for slack-qna:
- Configurable log levels and output formats (line/JSON/console)
- Automatic secret sanitization in log output
  (message text included; token-like substrings are redacted)
- Context injection for correlation
- File and console output support

The default ``line`` format renders each entry as::

    [2024-01-15T10:30:00.000000Z] SLACK_PROCESS_MESSAGE {"message_id": "..."}
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import MutableMapping
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import structlog
from structlog.typing import WrappedLogger

from slack_qna.utils.security import SecretRedactor

if TYPE_CHECKING:
    from slack_qna.config.schema import LoggingConfig


class LogFormat(StrEnum):
    """Log output format options."""

    LINE = "line"
    JSON = "json"
    CONSOLE = "console"


class LogLevel(StrEnum):
    """Log level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# Keys added by processors that the line renderer keeps out of the payload
_LINE_METADATA_KEYS = frozenset({"level", "logger", "service", "version"})

_redactor: SecretRedactor | None = None


def _get_redactor() -> SecretRedactor:
    """Get or create the global secret redactor."""
    global _redactor
    if _redactor is None:
        _redactor = SecretRedactor(placeholder="[REDACTED]")
    return _redactor


def sanitize_log_value(value: Any) -> Any:
    """Recursively sanitize secrets from log values.

    Args:
        value: Value to sanitize (can be nested dict/list/str)

    Returns:
        Sanitized value with secrets redacted
    """
    redactor = _get_redactor()

    if isinstance(value, str):
        return redactor.redact(value)
    elif isinstance(value, dict):
        return {k: sanitize_log_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return type(value)(sanitize_log_value(v) for v in value)
    else:
        return value


def secret_sanitizer(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Structlog processor to sanitize secrets from log entries.

    Applies to every value, including user-supplied message text: a logged
    message containing something token-like (``xoxb-...``, ``token=...``)
    appears redacted in the output, not verbatim.
    """
    result = sanitize_log_value(event_dict)
    return cast(MutableMapping[str, Any], result)


def add_context_processor(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Add service name and version to all log entries."""
    event_dict["service"] = "slack-qna"

    try:
        from slack_qna._version import __version__

        event_dict["version"] = __version__
    except (ImportError, RuntimeError):
        pass

    return event_dict


def event_line_renderer(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> str:
    """Render ``[<timestamp>] <EVENT> <JSON payload>``.

    Formatted exceptions are appended verbatim on the following lines.
    """
    timestamp = event_dict.pop("timestamp", "")
    event = event_dict.pop("event", "")
    exception = event_dict.pop("exception", None)

    payload = {k: v for k, v in event_dict.items() if k not in _LINE_METADATA_KEYS}
    line = f"[{timestamp}] {event} {json.dumps(payload, default=str, ensure_ascii=False)}"

    if exception:
        line = f"{line}\n{exception}"
    return line


def configure_logging(
    level: LogLevel | str = LogLevel.INFO,
    log_format: LogFormat | str = LogFormat.LINE,
    file_path: Path | str | None = None,
    file_enabled: bool = False,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format (line, json or console)
        file_path: Path to log file (if file logging enabled)
        file_enabled: Whether to enable file logging

    Example:
        # Human-readable event lines (default)
        configure_logging(level="INFO")

        # JSON for log aggregation
        configure_logging(level="INFO", log_format="json")
    """
    if isinstance(level, str):
        level = LogLevel(level.upper())
    if isinstance(log_format, str):
        log_format = LogFormat(log_format.lower())

    numeric_level = getattr(logging, level.value)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        add_context_processor,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        secret_sanitizer,
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == LogFormat.LINE:
        shared_processors.append(event_line_renderer)
    elif log_format == LogFormat.JSON:
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True, exception_formatter=structlog.dev.plain_traceback
            )
        )

    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    handlers.append(console_handler)

    if file_enabled and file_path:
        try:
            file_path = Path(file_path)
            file_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(file_path)
            file_handler.setLevel(numeric_level)
            handlers.append(file_handler)
        except OSError as e:
            # Continue with console only
            console_logger = logging.getLogger("slack_qna.logging")
            console_logger.warning(f"Could not create log file {file_path}: {e}")

    logging.basicConfig(
        format="%(message)s",
        level=numeric_level,
        handlers=handlers,
        force=True,
    )


def configure_logging_from(config: LoggingConfig) -> None:
    """Configure logging from the ``logging`` section of a loaded config."""
    configure_logging(
        level=config.level,
        log_format=config.format,
        file_path=config.file.path,
        file_enabled=config.file.enabled,
    )


def get_logger(name: str | None = None) -> WrappedLogger:
    """Get a structured logger instance."""
    return cast(WrappedLogger, structlog.get_logger(name))


def bind_context(**kwargs: Any) -> None:
    """Bind contextual variables for all subsequent log calls.

    Example:
        bind_context(channel_id="C123", message_id="1700000000.000100")
        log.info("reaction_added")  # Includes channel_id and message_id
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove contextual variables."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound contextual variables."""
    structlog.contextvars.clear_contextvars()


class LogEventNames:
    """Standard log event names for consistency."""

    SLACK_START_LISTENING = "SLACK_START_LISTENING"
    SLACK_RECEIVED_DIRECT_MESSAGE = "SLACK_RECEIVED_DIRECT_MESSAGE"
    SLACK_RECEIVED_MENTION = "SLACK_RECEIVED_MENTION"
    SLACK_PROCESS_MESSAGE = "SLACK_PROCESS_MESSAGE"
    SLACK_PROCESS_MESSAGE_FAILED = "SLACK_PROCESS_MESSAGE_FAILED"
