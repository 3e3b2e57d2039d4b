"""Core components.

This module exports:
- SlackQna: Entry point that wires the components together
- MessageProcessor: Per-message reaction/dispatch/recovery lifecycle
- OutboundDispatcher: Sends text, mrkdwn, markdown and file replies
- EventNormalizer: Maps Slack events to IncomingMessages
- markdown_to_mrkdwn: Markdown to Slack mrkdwn conversion
"""

from slack_qna.core.dispatcher import OutboundDispatcher, build_mrkdwn_block
from slack_qna.core.formatting import markdown_to_mrkdwn
from slack_qna.core.lifecycle import APOLOGY_TEMPLATE, MessageProcessor
from slack_qna.core.normalizer import EventNormalizer, EventRoute
from slack_qna.core.qna import SlackQna, SlackQnaError

__all__ = [
    "APOLOGY_TEMPLATE",
    "EventNormalizer",
    "EventRoute",
    "MessageProcessor",
    "OutboundDispatcher",
    "SlackQna",
    "SlackQnaError",
    "build_mrkdwn_block",
    "markdown_to_mrkdwn",
]
