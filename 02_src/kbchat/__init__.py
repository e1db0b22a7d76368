"""kbchat: concurrency core of a terminal chat client for the keybase CLI."""

from .app import Application, IApplication
from .client import Client, IClient
from .controller import Controller, ControllerStatus
from .errors import ChatError, ProtocolError, StateError, TransportError
from .gateway import Gateway, IGateway, IListener, ListenerStream
from .models import (
    Channel,
    ChatMessage,
    Conversation,
    ListenerClosed,
    MemberType,
    Message,
    SendMessage,
    Sender,
    SwitchConversation,
)
from .state import ApplicationState, IStateObserver

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Models
    "Channel",
    "MemberType",
    "Sender",
    "Message",
    "Conversation",
    "ChatMessage",
    "ListenerClosed",
    "SendMessage",
    "SwitchConversation",
    # Errors
    "ChatError",
    "TransportError",
    "ProtocolError",
    "StateError",
    # Components
    "IGateway",
    "Gateway",
    "IListener",
    "ListenerStream",
    "IClient",
    "Client",
    "ApplicationState",
    "IStateObserver",
    "Controller",
    "ControllerStatus",
]
