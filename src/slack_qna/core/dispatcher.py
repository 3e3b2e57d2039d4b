"""Outbound message dispatch.

Formats an OutgoingMessage according to its data type and hands it to the
messaging client: plain text, mrkdwn blocks, converted Markdown blocks or
file uploads.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from slack_qna.core.formatting import markdown_to_mrkdwn
from slack_qna.models.message import BlockKind, DataType, OutgoingMessage

if TYPE_CHECKING:
    from slack_qna.interfaces.chat import MessagingClient

log = structlog.get_logger()

IMAGE_FILENAME = "data.png"
FILE_FILENAME = "data.txt"


def build_mrkdwn_block(text: str, block: BlockKind | str | None = None) -> dict[str, Any]:
    """Wrap mrkdwn text in a single Block Kit block.

    Args:
        text: mrkdwn text to render
        block: ``section`` for a full-width text block; anything else
            (including None) renders a compact ``context`` block

    Returns:
        Block Kit block dict
    """
    if block == BlockKind.SECTION:
        return {
            "type": "section",
            "text": {"type": "mrkdwn", "text": text},
        }
    return {
        "type": "context",
        "elements": [{"type": "mrkdwn", "text": text}],
    }


class OutboundDispatcher:
    """Sends OutgoingMessages through a MessagingClient.

    Dispatch by ``data_type``:
    - text: plain ``send_message``
    - mrkdwn: one section/context block, raw text as fallback
    - markdown: as mrkdwn, after ``markdown_to_mrkdwn``
    - image/file: ``upload_file`` as data.png / data.txt

    Any other type/payload combination is dropped without sending or
    raising. Client failures propagate to the caller.
    """

    def __init__(self, client: MessagingClient) -> None:
        self._client = client

    async def post_message(self, message: OutgoingMessage) -> None:
        """Send ``message`` to its channel and thread."""
        data_type = message.data_type
        data = message.data

        if data_type == DataType.TEXT and isinstance(data, str):
            await self._client.send_message(
                channel=message.channel_id,
                text=data,
                thread=message.thread_id,
            )
        elif data_type == DataType.MRKDWN and isinstance(data, str):
            await self._client.send_message(
                channel=message.channel_id,
                text=data,
                thread=message.thread_id,
                blocks=[build_mrkdwn_block(data, message.block)],
            )
        elif data_type == DataType.MARKDOWN and isinstance(data, str):
            await self._client.send_message(
                channel=message.channel_id,
                text=data,
                thread=message.thread_id,
                blocks=[build_mrkdwn_block(markdown_to_mrkdwn(data), message.block)],
            )
        elif data_type == DataType.IMAGE and isinstance(data, (bytes, bytearray)):
            await self._client.upload_file(
                channel=message.channel_id,
                file=bytes(data),
                filename=IMAGE_FILENAME,
                thread=message.thread_id,
            )
        elif data_type == DataType.FILE and isinstance(data, (bytes, bytearray)):
            await self._client.upload_file(
                channel=message.channel_id,
                file=bytes(data),
                filename=FILE_FILENAME,
                thread=message.thread_id,
            )
        else:
            log.debug(
                "outgoing_message_dropped",
                channel_id=message.channel_id,
                data_type=str(data_type),
                payload_type=type(data).__name__,
            )
