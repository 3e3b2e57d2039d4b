"""SlackQna: the entry point embedding applications talk to.

This module wires the components together:
- SlackAdapter (or any MessagingClient) for the realtime session
- OutboundDispatcher for replies
- MessageProcessor for the per-message lifecycle
- EventNormalizer for inbound direct messages and mentions

Example:
    qna = SlackQna(
        slack_bot_token="xoxb-...",
        slack_app_token="xapp-...",
        bot_user_id="U0123456",
    )

    async def answer(message: IncomingMessage) -> str:
        return f"You asked: {message.message}"

    qna.register_handler(CommandHook(is_sync=True, data_type="markdown", handler=answer))
    await qna.listen(mention=True, direct_message=True)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from slack_qna.adapters.chat.slack import SlackAdapter
from slack_qna.core.dispatcher import OutboundDispatcher
from slack_qna.core.formatting import markdown_to_mrkdwn
from slack_qna.core.lifecycle import MessageProcessor
from slack_qna.core.normalizer import EventNormalizer
from slack_qna.models.message import (
    CommandHook,
    IncomingMessage,
    ListenOptions,
    OutgoingMessage,
    Reactions,
)
from slack_qna.utils.logging import LogEventNames, configure_logging_from
from slack_qna.utils.security import mask_config_value

if TYPE_CHECKING:
    from slack_qna.config.schema import SlackQnaConfig
    from slack_qna.interfaces.chat import MessagingClient

log = structlog.get_logger()


class SlackQnaError(Exception):
    """Base exception for SlackQna errors."""


class SlackQna:
    """Receives Slack messages, runs the registered hook and posts replies.

    Reactions on the source message show progress: loading while the hook
    runs, then success or failed.
    """

    def __init__(
        self,
        slack_bot_token: str,
        slack_app_token: str,
        bot_user_id: str,
        reactions: Reactions | None = None,
        client: MessagingClient | None = None,
        listen_options: ListenOptions | None = None,
    ) -> None:
        """Initialize SlackQna.

        Args:
            slack_bot_token: Bot user OAuth token (xoxb-...)
            slack_app_token: App-level Socket Mode token (xapp-...)
            bot_user_id: The bot's own Slack user ID, used to detect mentions
            reactions: Reaction emoji overrides (defaults if omitted)
            client: Messaging client to use instead of the Slack adapter
            listen_options: Event kinds ``listen()`` uses when called without
                options or flags (nothing is subscribed if omitted)
        """
        if not bot_user_id:
            raise SlackQnaError("bot_user_id is required")

        self._client: MessagingClient = (
            client if client is not None else SlackAdapter(slack_bot_token, slack_app_token)
        )
        self._dispatcher = OutboundDispatcher(self._client)
        self._processor = MessageProcessor(self._client, self._dispatcher, reactions)
        self._normalizer = EventNormalizer(bot_user_id, self._processor)
        self._listen_options = listen_options if listen_options is not None else ListenOptions()

        log.debug(
            "slack_qna_initialized",
            bot_token=mask_config_value("bot_token", slack_bot_token),
            app_token=mask_config_value("app_token", slack_app_token),
            bot_user_id=bot_user_id,
        )

    @classmethod
    def from_config(
        cls,
        config: SlackQnaConfig,
        client: MessagingClient | None = None,
        setup_logging: bool = True,
    ) -> SlackQna:
        """Build a SlackQna from a loaded configuration.

        The ``listen`` section becomes the default for ``listen()`` and, unless
        ``setup_logging`` is False, the ``logging`` section configures logging.
        """
        if setup_logging:
            configure_logging_from(config.logging)

        return cls(
            slack_bot_token=config.slack.bot_token,
            slack_app_token=config.slack.app_token,
            bot_user_id=config.slack.bot_user_id,
            reactions=config.slack.reactions.to_reactions(),
            client=client,
            listen_options=config.listen.to_options(),
        )

    @property
    def client(self) -> MessagingClient:
        return self._client

    @property
    def reactions(self) -> Reactions:
        return self._processor.reactions

    def register_handler(self, hook: CommandHook) -> None:
        """Register the hook that answers messages, replacing any previous one."""
        self._processor.register_handler(hook)

    async def post_message(self, message: OutgoingMessage) -> None:
        """Send an outgoing message (see OutboundDispatcher)."""
        await self._dispatcher.post_message(message)

    async def process_message(self, incoming: IncomingMessage) -> None:
        """Run one incoming message through the hook lifecycle."""
        await self._processor.process_message(incoming)

    def markdown_to_mrkdwn(self, markdown: str) -> str:
        return markdown_to_mrkdwn(markdown)

    async def listen(
        self,
        options: ListenOptions | None = None,
        *,
        command: bool | None = None,
        mention: bool | None = None,
        direct_message: bool | None = None,
    ) -> None:
        """Subscribe the enabled event kinds and run the realtime session.

        Does not return until the session ends. ``command`` is accepted for
        compatibility; slash commands are not subscribed. With neither
        ``options`` nor any flag given, the options set at construction
        (or from config) are used.

        Args:
            options: Event kinds to listen for; overrides the keyword flags
            command: Listen for slash commands (no-op)
            mention: Listen for @-mentions of the bot
            direct_message: Listen for direct messages
        """
        if options is None:
            if command is None and mention is None and direct_message is None:
                options = self._listen_options
            else:
                options = ListenOptions(
                    command=bool(command),
                    mention=bool(mention),
                    direct_message=bool(direct_message),
                )

        log.info(LogEventNames.SLACK_START_LISTENING, **options.as_dict())

        subscribed = self._normalizer.attach(self._client, options)
        if not subscribed:
            log.warning("no_event_kinds_subscribed", **options.as_dict())

        await self._client.start()

    async def close(self) -> None:
        """Close the realtime session."""
        await self._client.close()
