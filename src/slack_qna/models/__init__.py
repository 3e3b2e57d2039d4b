"""Data models and transfer objects."""

from .message import (
    BlockKind,
    CommandHook,
    DataType,
    EventKind,
    HookHandler,
    HookResult,
    IncomingMessage,
    ListenOptions,
    OutgoingMessage,
    Reactions,
)

__all__ = [
    "BlockKind",
    "CommandHook",
    "DataType",
    "EventKind",
    "HookHandler",
    "HookResult",
    "IncomingMessage",
    "ListenOptions",
    "OutgoingMessage",
    "Reactions",
]
