"""Core data models for kbchat."""

from .channel import Channel, MemberType
from .conversation import Conversation, ConversationSummary
from .events import (
    ApiResponse,
    ChatMessage,
    ConversationList,
    ListenerClosed,
    ListenerEvent,
    MessageList,
    MessageSent,
    SendMessage,
    SwitchConversation,
    UiCommand,
)
from .messages import (
    AttachmentContent,
    JoinContent,
    Message,
    MessageBody,
    MessageContent,
    MetadataContent,
    ReactionContent,
    Sender,
    SystemContent,
    TextContent,
    UnfurlContent,
)

__all__ = [
    # Channels
    "Channel",
    "MemberType",
    # Messages
    "Sender",
    "Message",
    "MessageBody",
    "MessageContent",
    "JoinContent",
    "AttachmentContent",
    "MetadataContent",
    "SystemContent",
    "TextContent",
    "UnfurlContent",
    "ReactionContent",
    # Conversations
    "Conversation",
    "ConversationSummary",
    # Responses
    "ApiResponse",
    "ConversationList",
    "MessageList",
    "MessageSent",
    # Listener events
    "ListenerEvent",
    "ChatMessage",
    "ListenerClosed",
    # UI commands
    "UiCommand",
    "SendMessage",
    "SwitchConversation",
]
