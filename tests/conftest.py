"""Shared test fixtures for slack-qna."""

from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from slack_qna.core.dispatcher import OutboundDispatcher
from slack_qna.core.lifecycle import MessageProcessor
from slack_qna.models.message import IncomingMessage, Reactions

BOT_USER_ID = "U0BOT1234"


@pytest.fixture
def mock_client() -> MagicMock:
    """Create a mock messaging client.

    Async methods are AsyncMocks attached to one parent so that
    ``mock_client.mock_calls`` records the order of every platform call.
    """
    client = MagicMock()
    client.send_message = AsyncMock(return_value="1700000000.999999")
    client.upload_file = AsyncMock(return_value=None)
    client.add_reaction = AsyncMock(return_value=None)
    client.remove_reaction = AsyncMock(return_value=None)
    client.start = AsyncMock(return_value=None)
    client.close = AsyncMock(return_value=None)
    client.subscribe = MagicMock(return_value=None)
    return client


@pytest.fixture
def dispatcher(mock_client: MagicMock) -> OutboundDispatcher:
    """Create an OutboundDispatcher over the mock client."""
    return OutboundDispatcher(mock_client)


@pytest.fixture
def processor(mock_client: MagicMock, dispatcher: OutboundDispatcher) -> MessageProcessor:
    """Create a MessageProcessor with default reactions."""
    return MessageProcessor(mock_client, dispatcher, Reactions())


@pytest.fixture
def incoming() -> IncomingMessage:
    """A top-level message (not in a thread)."""
    return IncomingMessage(
        message_id="1700000000.000100",
        channel_id="C0CHAN01",
        raw=f"<@{BOT_USER_ID}> what is the status?",
        message="what is the status?",
    )


@pytest.fixture
def threaded_incoming() -> IncomingMessage:
    """A reply inside an existing thread."""
    return IncomingMessage(
        message_id="1700000000.000200",
        channel_id="C0CHAN01",
        thread_id="1700000000.000050",
        raw="and now?",
        message="and now?",
    )


@pytest.fixture
def call_names(mock_client: MagicMock) -> Callable[[], list[str]]:
    """Return a function listing the platform calls made so far, in order."""
    return lambda: [c[0] for c in mock_client.mock_calls]
