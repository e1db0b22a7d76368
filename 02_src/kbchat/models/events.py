"""Values exchanged between the client, the controller and the UI."""

from dataclasses import dataclass, field
from typing import Union

from .conversation import Conversation
from .messages import Message


# Gateway responses


@dataclass
class ConversationList:
    conversations: list[Conversation]


@dataclass
class MessageList:
    messages: list[Message]


@dataclass
class MessageSent:
    raw: dict = field(default_factory=dict)


ApiResponse = Union[ConversationList, MessageList, MessageSent]


# Listener events


@dataclass
class ChatMessage:
    """A message pushed by the backend, not requested by us."""

    message: Message


@dataclass
class ListenerClosed:
    """The listener process stopped producing output."""

    returncode: int | None = None


ListenerEvent = Union[ChatMessage, ListenerClosed]


# UI commands


@dataclass
class SendMessage:
    text: str


@dataclass
class SwitchConversation:
    conversation_id: str


UiCommand = Union[SendMessage, SwitchConversation]
