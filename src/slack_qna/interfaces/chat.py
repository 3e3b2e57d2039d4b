"""Abstract interface for the messaging platform client."""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from ..models.message import EventKind

EventCallback = Callable[[dict[str, Any]], Awaitable[None]]


class MessagingClient(Protocol):
    """Contract for the realtime messaging platform the bot talks to.

    The Slack adapter implements this; tests substitute an ``AsyncMock``.
    """

    async def send_message(
        self,
        channel: str,
        text: str,
        thread: str | None = None,
        blocks: list[dict[str, Any]] | None = None,
    ) -> str:
        """
        Post a message to a channel, optionally in a thread.

        Args:
            channel: Target channel identifier
            text: Plain text (also the fallback when blocks are given)
            thread: Parent message ts for threading (optional)
            blocks: Optional Block Kit blocks

        Returns:
            Message ID (ts) of the sent message

        Raises:
            SendError: If message delivery fails
        """
        ...

    async def upload_file(
        self,
        channel: str,
        file: bytes,
        filename: str,
        thread: str | None = None,
    ) -> None:
        """
        Upload a binary payload as a file attachment.

        Raises:
            UploadError: If the upload fails
        """
        ...

    async def add_reaction(self, channel: str, message_id: str, emoji: str) -> None:
        """
        Add a reaction to a message.

        Args:
            channel: Channel containing the message
            message_id: Target message identifier (ts)
            emoji: Reaction name without colons, e.g. "thinking_face"

        Raises:
            ReactionError: If adding the reaction fails
        """
        ...

    async def remove_reaction(self, channel: str, message_id: str, emoji: str) -> None:
        """
        Remove a previously added reaction.

        Raises:
            ReactionError: If removing the reaction fails
        """
        ...

    def subscribe(self, kind: EventKind, callback: EventCallback) -> None:
        """Register ``callback`` to receive raw events of ``kind``."""
        ...

    async def start(self) -> None:
        """Open the realtime session. Suspends until the session ends."""
        ...

    async def close(self) -> None:
        """Close the realtime session."""
        ...
