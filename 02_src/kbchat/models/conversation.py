"""Conversation models."""

from dataclasses import dataclass, field

from pydantic import BaseModel

from .channel import Channel
from .messages import Message


class ConversationSummary(BaseModel):
    """A conversation entry as returned by the backend's list call."""

    id: str
    channel: Channel
    unread: bool = False


@dataclass
class Conversation:
    """An addressable chat thread and the messages fetched for it so far."""

    id: str
    channel: Channel
    unread: bool = False
    fetched: bool = False  # only ever goes False -> True
    messages: list[Message] = field(default_factory=list)  # newest first

    @classmethod
    def from_summary(cls, summary: ConversationSummary) -> "Conversation":
        return cls(id=summary.id, channel=summary.channel, unread=summary.unread)

    @property
    def name(self) -> str:
        return self.channel.display_name

    def mark_fetched(self) -> None:
        self.fetched = True

    def insert_message(self, message: Message) -> None:
        """Prepend a message newer than everything already held."""
        self.messages.insert(0, message)

    def insert_messages(self, messages: list[Message]) -> None:
        """Merge a newest-first batch that is older than what is already held."""
        self.messages.extend(messages)
