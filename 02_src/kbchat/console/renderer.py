"""Line-oriented renderer implementing the state observer interface."""

import sys
from typing import TextIO

from ..errors import ChatError
from ..models import Conversation, Message, TextContent, UnfurlContent


def format_message(message: Message) -> str | None:
    """Render one message as a line, or None if it has nothing to show."""
    username = message.sender.username
    content = message.content
    if isinstance(content, TextContent):
        return f"{username}: {content.body}"
    if isinstance(content, UnfurlContent):
        return f"{username} sent an unfurl"
    return None


class ConsoleRenderer:
    """Writes conversation lists, history and live messages to a stream."""

    def __init__(self, out: TextIO | None = None):
        self._out = out if out is not None else sys.stdout
        self._order: list[str] = []
        self._names: dict[str, str] = {}
        self._unread: set[str] = set()

    @property
    def unread(self) -> set[str]:
        return set(self._unread)

    def resolve(self, target: str) -> str | None:
        """Map a 1-based list index to a conversation id; ids pass through.

        Returns None for a number that is neither a listed id nor in range.
        """
        if target.isdigit() and target not in self._names:
            index = int(target)
            if 1 <= index <= len(self._order):
                return self._order[index - 1]
            return None
        return target

    def render_list(self) -> None:
        self._write("Conversations:")
        for index, conversation_id in enumerate(self._order, start=1):
            marker = " *" if conversation_id in self._unread else ""
            self._write(f"  {index}. {self._names[conversation_id]}{marker}")

    # Observer interface

    def on_conversations_added(self, conversations: list[Conversation]) -> None:
        for conversation in conversations:
            if conversation.id not in self._names:
                self._order.append(conversation.id)
            self._names[conversation.id] = conversation.name
            if conversation.unread:
                self._unread.add(conversation.id)
        self.render_list()

    def on_conversation_change(self, conversation: Conversation) -> None:
        self._names.setdefault(conversation.id, conversation.name)
        self._unread.discard(conversation.id)
        self._write(f"== {conversation.name} ==")
        for message in reversed(conversation.messages):
            line = format_message(message)
            if line is not None:
                self._write(line)

    def on_message(self, message: Message, conversation_id: str, active: bool) -> None:
        if active:
            line = format_message(message)
            if line is not None:
                self._write(line)
            return
        self._unread.add(conversation_id)
        name = self._names.get(conversation_id, message.channel.display_name)
        self._write(f"(new message in {name})")

    def on_error(self, error: Exception) -> None:
        text = error.message if isinstance(error, ChatError) else str(error)
        self._write(f"! {text}")

    def _write(self, line: str) -> None:
        self._out.write(line + "\n")
        self._out.flush()
