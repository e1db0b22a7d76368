"""Client facade over the gateway and the listener stream."""

import asyncio
from typing import Protocol

from ..errors import ProtocolError
from ..gateway import (
    IGateway,
    IListener,
    list_command,
    parse_response,
    read_command,
    send_command,
)
from ..logging_config import get_logger
from ..models import (
    Channel,
    Conversation,
    ConversationList,
    ListenerEvent,
    Message,
    MessageList,
)

logger = get_logger(__name__)


class IClient(Protocol):
    """Typed async API of the chat backend."""

    async def fetch_conversations(self) -> list[Conversation]:
        """List all conversations."""
        ...

    async def fetch_messages(
        self, conversation: Conversation, count: int
    ) -> list[Message]:
        """Read the latest `count` messages, newest first."""
        ...

    async def send_message(self, channel: Channel, text: str) -> None:
        """Send a text message."""
        ...

    async def subscribe(self) -> "asyncio.Queue[ListenerEvent]":
        """Start the listener and return its event queue."""
        ...

    async def close(self) -> None:
        """Stop the listener."""
        ...


class Client:
    """Validates gateway responses and hands out the listener subscription.

    Only one subscriber is supported.
    """

    def __init__(self, gateway: IGateway, listener: IListener):
        self._gateway = gateway
        self._listener = listener
        self._subscribed = False

    async def fetch_conversations(self) -> list[Conversation]:
        """List all conversations. Any other response shape is an error."""
        response = parse_response(await self._gateway.submit(list_command()))
        if not isinstance(response, ConversationList):
            raise ProtocolError(
                f"Expected a conversation list, got {type(response).__name__}"
            )
        logger.info("Fetched %s conversations", len(response.conversations))
        return response.conversations

    async def fetch_messages(
        self, conversation: Conversation, count: int
    ) -> list[Message]:
        """Read the latest `count` messages; an unexpected shape yields []."""
        document = await self._gateway.submit(
            read_command(conversation.channel, count)
        )
        response = parse_response(document)
        if not isinstance(response, MessageList):
            logger.warning(
                "Expected a message list for %s, got %s",
                conversation.id,
                type(response).__name__,
            )
            return []
        logger.info(
            "Fetched %s messages for %s", len(response.messages), conversation.id
        )
        return response.messages

    async def send_message(self, channel: Channel, text: str) -> None:
        """Send a text message; the response body is not used."""
        parse_response(await self._gateway.submit(send_command(channel, text)))
        logger.info("Sent message to %s", channel.display_name)

    async def subscribe(self) -> "asyncio.Queue[ListenerEvent]":
        """Start the listener and return its event queue. Only once."""
        if self._subscribed:
            raise RuntimeError("Client already has a subscriber")
        await self._listener.start()
        self._subscribed = True
        return self._listener.events

    async def close(self) -> None:
        """Stop the listener."""
        await self._listener.stop()
