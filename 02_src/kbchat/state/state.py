"""Application state: the canonical conversation map and its observers.

The state is owned by the controller task. Everything else learns about
changes through observers, which are called synchronously and in
registration order on every mutation.
"""

from typing import Protocol

from ..errors import StateError
from ..logging_config import get_logger
from ..models import Conversation, Message

logger = get_logger(__name__)


class IStateObserver(Protocol):
    """Receives state change notifications (implemented by the renderer)."""

    def on_conversation_change(self, conversation: Conversation) -> None:
        """The current conversation changed."""
        ...

    def on_conversations_added(self, conversations: list[Conversation]) -> None:
        """A batch of conversations was loaded."""
        ...

    def on_message(self, message: Message, conversation_id: str, active: bool) -> None:
        """A message arrived; `active` is True if its conversation is current."""
        ...

    def on_error(self, error: Exception) -> None:
        """A request or event failed; the session keeps running."""
        ...


class ApplicationState:
    """Conversations by id, the current conversation and the observer list."""

    def __init__(self):
        self._conversations: dict[str, Conversation] = {}
        self._current: str | None = None
        self._observers: list[IStateObserver] = []

    def register_observer(self, observer: IStateObserver) -> None:
        self._observers.append(observer)

    # Read accessors

    @property
    def conversations(self) -> list[Conversation]:
        return list(self._conversations.values())

    @property
    def current_conversation_id(self) -> str | None:
        return self._current

    def get_conversation(self, conversation_id: str) -> Conversation | None:
        return self._conversations.get(conversation_id)

    def get_current_conversation(self) -> Conversation | None:
        if self._current is None:
            return None
        return self._conversations.get(self._current)

    def require_conversation(self, conversation_id: str) -> Conversation:
        """Like get_conversation, but an unknown id raises StateError."""
        conversation = self._conversations.get(conversation_id)
        if conversation is None:
            raise StateError(
                f"Unknown conversation {conversation_id}",
                conversation_id=conversation_id,
            )
        return conversation

    # Mutators

    def insert_conversation(self, conversation: Conversation) -> None:
        self._conversations[conversation.id] = conversation

    def set_conversations(self, conversations: list[Conversation]) -> None:
        """Insert or overwrite each conversation, then notify once."""
        for conversation in conversations:
            self._conversations[conversation.id] = conversation
        self._notify("on_conversations_added", conversations)

    def insert_message(self, conversation_id: str, message: Message) -> bool:
        """Prepend a message. Returns False if the conversation is unknown."""
        conversation = self._conversations.get(conversation_id)
        if conversation is None:
            logger.warning("Dropping message for unknown conversation %s", conversation_id)
            return False

        active = conversation_id == self._current
        self._notify("on_message", message, conversation_id, active)
        conversation.insert_message(message)
        return True

    def set_current_conversation(self, conversation_id: str) -> bool:
        """Point at an existing conversation. Returns False if unknown."""
        conversation = self._conversations.get(conversation_id)
        if conversation is None:
            logger.warning("Cannot switch to unknown conversation %s", conversation_id)
            return False

        self._current = conversation_id
        self._notify("on_conversation_change", conversation)
        return True

    def report_error(self, error: Exception) -> None:
        """Surface a failure to the observers."""
        self._notify("on_error", error)

    def _notify(self, method: str, *args) -> None:
        for observer in self._observers:
            try:
                getattr(observer, method)(*args)
            except Exception as e:
                logger.error(
                    "Error in observer %s.%s: %s",
                    type(observer).__name__,
                    method,
                    e,
                    exc_info=True,
                )
