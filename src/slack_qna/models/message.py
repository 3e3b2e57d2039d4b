"""Data models for incoming and outgoing chat messages."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Any


class DataType(StrEnum):
    """Kind of content carried by an outgoing message."""

    TEXT = "text"
    MRKDWN = "mrkdwn"
    MARKDOWN = "markdown"
    IMAGE = "image"
    FILE = "file"


class BlockKind(StrEnum):
    """Block Kit layout used to render mrkdwn content."""

    SECTION = "section"
    CONTEXT = "context"


class EventKind(StrEnum):
    """Inbound Slack event kinds the bot can subscribe to."""

    DIRECT_MESSAGE = "direct_message"
    MENTION = "mention"


@dataclass(frozen=True)
class IncomingMessage:
    """A normalized message received from Slack."""

    message_id: str  # Slack ts of the source message
    channel_id: str
    raw: str  # untouched event text
    message: str  # text with the bot mention stripped
    thread_id: str | None = None  # None if not in a thread

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class OutgoingMessage:
    """A message to post back to Slack."""

    channel_id: str
    data: str | bytes
    data_type: DataType | str
    thread_id: str | None = None
    block: BlockKind | str | None = None


@dataclass(frozen=True)
class Reactions:
    """Emoji names used to signal processing state.

    A reaction set to None (or an empty string) disables that step.
    """

    loading: str | None = "thinking_face"
    success: str | None = "white_check_mark"
    failed: str | None = "x"


HookResult = str | bytes | None
HookHandler = Callable[[IncomingMessage], Awaitable[HookResult] | HookResult]


@dataclass
class CommandHook:
    """The single handler that turns an incoming message into reply content.

    Synchronous hooks (``is_sync=True``) have their return value posted back
    using ``data_type``/``block`` and get a success reaction. Other hooks are
    awaited and their result is discarded.
    """

    is_sync: bool
    data_type: DataType | str
    handler: HookHandler
    block: BlockKind | str | None = None


@dataclass(frozen=True)
class ListenOptions:
    """Which inbound event kinds to subscribe to."""

    command: bool = False
    mention: bool = False
    direct_message: bool = False

    def as_dict(self) -> dict[str, bool]:
        return asdict(self)
