"""Slack messaging client using slack-bolt.

This module implements the MessagingClient protocol for Slack using the
slack-bolt library with Socket Mode for real-time events.

Features:
- Socket Mode session for direct messages and app mentions
- Thread support for replies and file uploads
- Reaction add/remove on source messages
"""

from __future__ import annotations

from typing import Any

import structlog
from slack_bolt.adapter.socket_mode.async_handler import AsyncSocketModeHandler
from slack_bolt.app.async_app import AsyncApp
from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from ...interfaces.chat import EventCallback
from ...models.message import EventKind

log = structlog.get_logger()


class SlackAdapterError(Exception):
    """Base exception for Slack adapter errors."""


class SendError(SlackAdapterError):
    """Raised when sending a message fails."""


class UploadError(SlackAdapterError):
    """Raised when uploading a file fails."""


class ReactionError(SlackAdapterError):
    """Raised when adding/removing a reaction fails."""


def _slack_error(e: SlackApiError) -> str:
    """Return the Slack error code from an API error, falling back to its text."""
    try:
        return str(e.response["error"])
    except (KeyError, TypeError):
        return str(e)


class SlackAdapter:
    """Slack client implementing the MessagingClient protocol.

    Example:
        adapter = SlackAdapter(bot_token="xoxb-...", app_token="xapp-...")
        adapter.subscribe(EventKind.MENTION, on_mention)
        await adapter.start()  # blocks for the session lifetime
    """

    def __init__(self, bot_token: str, app_token: str) -> None:
        """Initialize the Slack adapter.

        Args:
            bot_token: Bot user OAuth token (xoxb-...)
            app_token: App-level token used for Socket Mode (xapp-...)
        """
        self._app_token = app_token
        self._app = AsyncApp(token=bot_token)
        self._client: AsyncWebClient = self._app.client
        self._socket_handler: AsyncSocketModeHandler | None = None

    @property
    def app(self) -> AsyncApp:
        """The underlying ``slack_bolt`` AsyncApp."""
        return self._app

    def subscribe(self, kind: EventKind, callback: EventCallback) -> None:
        """Register a listener for an inbound event kind.

        Args:
            kind: Event kind to listen for
            callback: Coroutine receiving the raw event dict
        """
        if kind == EventKind.DIRECT_MESSAGE:

            @self._app.message()
            async def handle_message(message: dict[str, Any]) -> None:
                await callback(message)

        elif kind == EventKind.MENTION:

            @self._app.event("app_mention")
            async def handle_mention(event: dict[str, Any]) -> None:
                await callback(event)

        else:
            raise SlackAdapterError(f"Unsupported event kind: {kind}")

        log.debug("slack_subscribed", kind=str(kind))

    async def start(self) -> None:
        """Open the Socket Mode session and block until it ends."""
        self._socket_handler = AsyncSocketModeHandler(
            app=self._app,
            app_token=self._app_token,
        )
        log.info("slack_connecting")
        await self._socket_handler.start_async()  # type: ignore[no-untyped-call]

    async def close(self) -> None:
        """Close the Socket Mode session if one is open."""
        if self._socket_handler is None:
            return
        await self._socket_handler.close_async()  # type: ignore[no-untyped-call]
        self._socket_handler = None
        log.info("slack_disconnected")

    async def send_message(
        self,
        channel: str,
        text: str,
        thread: str | None = None,
        blocks: list[dict[str, Any]] | None = None,
    ) -> str:
        """Post a message to a channel, optionally in a thread.

        Args:
            channel: Target channel identifier.
            text: Plain text message (fallback for rich formatting).
            thread: Parent message ts for threading (optional).
            blocks: Optional rich content blocks (Slack Block Kit).

        Returns:
            Message ID (ts) of the sent message.

        Raises:
            SendError: If message delivery fails.
        """
        kwargs: dict[str, Any] = {
            "channel": channel,
            "text": text,
        }
        if thread:
            kwargs["thread_ts"] = thread
        if blocks:
            kwargs["blocks"] = blocks

        try:
            result = await self._client.chat_postMessage(**kwargs)
        except SlackApiError as e:
            log.error("send_message_failed", channel_id=channel, error=str(e))
            raise SendError(_slack_error(e)) from e

        message_ts: str = result.get("ts", "")
        log.debug(
            "message_sent",
            channel_id=channel,
            message_ts=message_ts,
            thread_id=thread,
        )
        return message_ts

    async def upload_file(
        self,
        channel: str,
        file: bytes,
        filename: str,
        thread: str | None = None,
    ) -> None:
        """Upload a binary payload to a channel, optionally in a thread.

        Raises:
            UploadError: If the upload fails.
        """
        kwargs: dict[str, Any] = {
            "channel": channel,
            "file": file,
            "filename": filename,
        }
        if thread:
            kwargs["thread_ts"] = thread

        try:
            await self._client.files_upload_v2(**kwargs)
        except SlackApiError as e:
            log.error("upload_file_failed", channel_id=channel, filename=filename, error=str(e))
            raise UploadError(_slack_error(e)) from e

        log.debug("file_uploaded", channel_id=channel, filename=filename, size=len(file))

    async def add_reaction(self, channel: str, message_id: str, emoji: str) -> None:
        """Add a reaction/emoji to a message.

        Raises:
            ReactionError: If adding reaction fails.
        """
        try:
            await self._client.reactions_add(
                channel=channel,
                timestamp=message_id,
                name=emoji,
            )
        except SlackApiError as e:
            log.error(
                "add_reaction_failed",
                channel_id=channel,
                message_id=message_id,
                reaction=emoji,
                error=str(e),
            )
            raise ReactionError(_slack_error(e)) from e

        log.debug("reaction_added", channel_id=channel, message_id=message_id, reaction=emoji)

    async def remove_reaction(self, channel: str, message_id: str, emoji: str) -> None:
        """Remove a previously added reaction.

        Raises:
            ReactionError: If removing reaction fails.
        """
        try:
            await self._client.reactions_remove(
                channel=channel,
                timestamp=message_id,
                name=emoji,
            )
        except SlackApiError as e:
            log.error(
                "remove_reaction_failed",
                channel_id=channel,
                message_id=message_id,
                reaction=emoji,
                error=str(e),
            )
            raise ReactionError(_slack_error(e)) from e

        log.debug("reaction_removed", channel_id=channel, message_id=message_id, reaction=emoji)
