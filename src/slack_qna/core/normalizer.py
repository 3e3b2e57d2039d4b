"""Inbound event normalization.

Maps raw Slack events (direct messages and app mentions) to
IncomingMessage records and forwards them to the MessageProcessor. Each
event kind is described by an EventRoute; only routes enabled by the
ListenOptions are subscribed.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog

from slack_qna.models.message import EventKind, IncomingMessage, ListenOptions
from slack_qna.utils.logging import LogEventNames

if TYPE_CHECKING:
    from slack_qna.core.lifecycle import MessageProcessor
    from slack_qna.interfaces.chat import EventCallback, MessagingClient

log = structlog.get_logger()


@dataclass(frozen=True)
class EventRoute:
    """How one inbound event kind is enabled, logged and normalized."""

    kind: EventKind
    log_event: str
    enabled: Callable[[ListenOptions], bool]
    normalize: Callable[[dict[str, Any]], IncomingMessage | None]


class EventNormalizer:
    """Turns raw Slack events into IncomingMessages for the processor.

    Example:
        normalizer = EventNormalizer("U0BOT", processor)
        normalizer.attach(client, ListenOptions(mention=True))
    """

    def __init__(self, bot_user_id: str, processor: MessageProcessor) -> None:
        self._bot_user_id = bot_user_id
        self._processor = processor

    @property
    def mention_tag(self) -> str:
        """The ``<@U...>`` tag Slack inserts when the bot is mentioned."""
        return f"<@{self._bot_user_id}>"

    def normalize_direct_message(self, event: dict[str, Any]) -> IncomingMessage | None:
        """Normalize a ``message`` event; None when it carries no text."""
        text = event.get("text")
        if not text:
            return None

        return IncomingMessage(
            message_id=event.get("ts", ""),
            channel_id=event.get("channel", ""),
            thread_id=event.get("thread_ts"),
            raw=text,
            message=text,
        )

    def normalize_mention(self, event: dict[str, Any]) -> IncomingMessage | None:
        """Normalize an ``app_mention`` event; None unless it mentions this bot.

        The first mention tag is stripped from ``message``; ``raw`` keeps
        the original text.
        """
        text = event.get("text") or ""
        tag = self.mention_tag
        if tag not in text:
            return None

        return IncomingMessage(
            message_id=event.get("ts", ""),
            channel_id=event.get("channel", ""),
            thread_id=event.get("thread_ts"),
            raw=text,
            message=text.replace(tag, "", 1).strip(),
        )

    def routes(self) -> tuple[EventRoute, ...]:
        """All known event routes, enabled or not."""
        return (
            EventRoute(
                kind=EventKind.DIRECT_MESSAGE,
                log_event=LogEventNames.SLACK_RECEIVED_DIRECT_MESSAGE,
                enabled=lambda options: options.direct_message,
                normalize=self.normalize_direct_message,
            ),
            EventRoute(
                kind=EventKind.MENTION,
                log_event=LogEventNames.SLACK_RECEIVED_MENTION,
                enabled=lambda options: options.mention,
                normalize=self.normalize_mention,
            ),
        )

    def attach(self, client: MessagingClient, options: ListenOptions) -> list[EventKind]:
        """Subscribe the enabled routes on ``client``.

        Returns:
            The event kinds that were subscribed
        """
        subscribed: list[EventKind] = []
        for route in self.routes():
            if not route.enabled(options):
                continue
            client.subscribe(route.kind, self._make_callback(route))
            subscribed.append(route.kind)
        return subscribed

    def _make_callback(self, route: EventRoute) -> EventCallback:
        async def on_event(event: dict[str, Any]) -> None:
            incoming = route.normalize(event)
            if incoming is None:
                return
            log.info(route.log_event, slack_event=event)
            await self._processor.process_message(incoming)

        return on_event
