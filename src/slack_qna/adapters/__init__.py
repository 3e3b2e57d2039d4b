"""Concrete implementations of provider interfaces."""

from .chat.slack import (
    ReactionError,
    SendError,
    SlackAdapter,
    SlackAdapterError,
    UploadError,
)

__all__ = [
    "ReactionError",
    "SendError",
    "SlackAdapter",
    "SlackAdapterError",
    "UploadError",
]
