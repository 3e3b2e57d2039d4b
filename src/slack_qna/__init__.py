"""Slack Q&A bot adapter: receive DMs and mentions, reply through one hook."""

from slack_qna.core.qna import SlackQna, SlackQnaError
from slack_qna.models.message import (
    BlockKind,
    CommandHook,
    DataType,
    IncomingMessage,
    ListenOptions,
    OutgoingMessage,
    Reactions,
)

__all__ = [
    "BlockKind",
    "CommandHook",
    "DataType",
    "IncomingMessage",
    "ListenOptions",
    "OutgoingMessage",
    "Reactions",
    "SlackQna",
    "SlackQnaError",
]
