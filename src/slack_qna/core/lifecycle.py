"""Per-message processing lifecycle.

This module implements the MessageProcessor that runs every incoming
message through the registered hook:
1. Log the incoming message
2. Add the loading reaction
3. Invoke the hook, post its reply and add the success reaction
4. On failure, add the failed reaction and post an apology
5. Always remove the loading reaction
"""

from __future__ import annotations

import inspect
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog

from slack_qna.models.message import (
    CommandHook,
    DataType,
    HookResult,
    IncomingMessage,
    OutgoingMessage,
    Reactions,
)
from slack_qna.utils.logging import LogEventNames, bind_context, unbind_context

if TYPE_CHECKING:
    from slack_qna.core.dispatcher import OutboundDispatcher
    from slack_qna.interfaces.chat import MessagingClient

log = structlog.get_logger()

APOLOGY_TEMPLATE = "Sorry, something went wrong. ({error})"


class MessageProcessor:
    """Runs the reaction/dispatch/recovery lifecycle for incoming messages.

    Holds at most one CommandHook; registering a new one replaces it.
    Hook and reactions are set up once and only read while processing, so
    concurrent ``process_message`` calls share no mutable state.

    Example:
        processor = MessageProcessor(client, OutboundDispatcher(client), Reactions())
        processor.register_handler(CommandHook(is_sync=True, data_type="text", handler=echo))
        await processor.process_message(incoming)
    """

    def __init__(
        self,
        client: MessagingClient,
        dispatcher: OutboundDispatcher,
        reactions: Reactions | None = None,
    ) -> None:
        """Initialize the MessageProcessor.

        Args:
            client: Messaging client used for reactions
            dispatcher: Dispatcher used for replies and apologies
            reactions: Reaction emoji configuration (defaults if omitted)
        """
        self._client = client
        self._dispatcher = dispatcher
        self._reactions = reactions if reactions is not None else Reactions()
        self._hook: CommandHook | None = None

    @property
    def hook(self) -> CommandHook | None:
        """The currently registered hook, if any."""
        return self._hook

    @property
    def reactions(self) -> Reactions:
        return self._reactions

    def register_handler(self, hook: CommandHook) -> None:
        """Register ``hook``, replacing any previously registered one."""
        self._hook = hook

    async def process_message(self, incoming: IncomingMessage) -> None:
        """Process one incoming message through the registered hook.

        Hook failures are reported in the thread and never raised. Failures
        adding the loading reaction, or sending the apology itself, propagate.

        The incoming message is logged in full under SLACK_PROCESS_MESSAGE,
        after secret sanitization: token-like substrings in the user's text
        are redacted in the log line.
        """
        log.info(LogEventNames.SLACK_PROCESS_MESSAGE, **incoming.as_dict())

        hook = self._hook
        if hook is None:
            return

        bind_context(channel_id=incoming.channel_id, message_id=incoming.message_id)
        try:
            async with self.loading_reaction(incoming):
                try:
                    await self._run_hook(hook, incoming)
                except Exception as e:
                    await self._report_failure(incoming, e)
        finally:
            unbind_context("channel_id", "message_id")

    @asynccontextmanager
    async def loading_reaction(self, incoming: IncomingMessage) -> AsyncIterator[None]:
        """Hold the loading reaction on ``incoming`` for the duration of the block.

        The reaction is added on entry and removed on exit, whether or not
        the block raised. Disabled when no loading reaction is configured.
        """
        emoji = self._reactions.loading
        if emoji:
            await self._client.add_reaction(
                channel=incoming.channel_id,
                message_id=incoming.message_id,
                emoji=emoji,
            )
        try:
            yield
        finally:
            if emoji:
                await self._client.remove_reaction(
                    channel=incoming.channel_id,
                    message_id=incoming.message_id,
                    emoji=emoji,
                )

    async def _run_hook(self, hook: CommandHook, incoming: IncomingMessage) -> None:
        result = await _call_handler(hook, incoming)

        if not hook.is_sync:
            return

        if result:
            await self._dispatcher.post_message(
                OutgoingMessage(
                    channel_id=incoming.channel_id,
                    thread_id=_reply_thread(incoming),
                    data=result,
                    data_type=hook.data_type,
                    block=hook.block,
                )
            )

        if self._reactions.success:
            await self._client.add_reaction(
                channel=incoming.channel_id,
                message_id=incoming.message_id,
                emoji=self._reactions.success,
            )

    async def _report_failure(self, incoming: IncomingMessage, error: Exception) -> None:
        log.exception(LogEventNames.SLACK_PROCESS_MESSAGE_FAILED, error=str(error))

        if self._reactions.failed:
            await self._client.add_reaction(
                channel=incoming.channel_id,
                message_id=incoming.message_id,
                emoji=self._reactions.failed,
            )

        await self._dispatcher.post_message(
            OutgoingMessage(
                channel_id=incoming.channel_id,
                thread_id=_reply_thread(incoming),
                data=APOLOGY_TEMPLATE.format(error=str(error)),
                data_type=DataType.TEXT,
            )
        )


async def _call_handler(hook: CommandHook, incoming: IncomingMessage) -> HookResult:
    """Invoke the hook handler, awaiting its result when it is awaitable."""
    result = hook.handler(incoming)
    if inspect.isawaitable(result):
        result = await result
    return result


def _reply_thread(incoming: IncomingMessage) -> str:
    """Replies go into the source thread, or start one under the source message."""
    return incoming.thread_id or incoming.message_id
