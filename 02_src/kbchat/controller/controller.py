"""Controller: the single task that owns ApplicationState.

It bootstraps the state, then multiplexes listener events and UI commands
into one ordered stream of state mutations.
"""

import asyncio
from enum import Enum

from ..client import IClient
from ..config import DEFAULT_PAGE_SIZE
from ..errors import ChatError, StateError, TransportError
from ..logging_config import get_logger
from ..models import (
    ChatMessage,
    ListenerClosed,
    ListenerEvent,
    SendMessage,
    SwitchConversation,
    UiCommand,
)
from ..state import ApplicationState

logger = get_logger(__name__)


class ControllerStatus(str, Enum):
    UNINITIALIZED = "uninitialized"
    RUNNING = "running"


class Controller:
    """Drives the client and mutates the state in response to events.

    Gateway calls are awaited inline, so at most one request is in flight
    at a time. Responses carry no correlation id, so two concurrent requests
    of the same shape could not be told apart.
    """

    def __init__(
        self,
        client: IClient,
        state: ApplicationState,
        commands: "asyncio.Queue[UiCommand]",
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self._client = client
        self._state = state
        self._commands = commands
        self._page_size = page_size
        self._events: asyncio.Queue[ListenerEvent] | None = None
        self._status = ControllerStatus.UNINITIALIZED

    @property
    def status(self) -> ControllerStatus:
        return self._status

    async def init(self) -> None:
        """Subscribe to pushed events and load the conversation list.

        Messages are not fetched here; they are loaded on first switch.
        """
        if self._status is ControllerStatus.RUNNING:
            raise RuntimeError("Controller already initialized")

        self._events = await self._client.subscribe()
        self._status = ControllerStatus.RUNNING

        try:
            conversations = await self._client.fetch_conversations()
        except ChatError as e:
            logger.error("Failed to load conversations: %s", e.message)
            self._state.report_error(e)
            return

        if not conversations:
            logger.info("No conversations to show")
            return

        self._state.set_conversations(conversations)
        self._state.set_current_conversation(conversations[0].id)

    async def process_events(self) -> None:
        """Serve listener events and UI commands until cancelled.

        Whichever source is ready first is handled first. A pending read
        on the other source is kept for the next iteration, so nothing is
        dropped.
        """
        if self._events is None:
            raise RuntimeError("Controller not initialized")

        event_get: asyncio.Task | None = None
        command_get: asyncio.Task | None = None
        try:
            while True:
                if event_get is None:
                    event_get = asyncio.create_task(self._events.get())
                if command_get is None:
                    command_get = asyncio.create_task(self._commands.get())

                done, _ = await asyncio.wait(
                    {event_get, command_get},
                    return_when=asyncio.FIRST_COMPLETED,
                )

                if event_get in done:
                    event = event_get.result()
                    event_get = None
                    await self._guarded(self.handle_listener_event, event)

                if command_get in done:
                    command = command_get.result()
                    command_get = None
                    await self._guarded(self.handle_command, command)
        finally:
            for task in (event_get, command_get):
                if task is not None:
                    task.cancel()

    async def handle_listener_event(self, event: ListenerEvent) -> None:
        if isinstance(event, ChatMessage):
            message = event.message
            self._state.insert_message(message.conversation_id, message)
        elif isinstance(event, ListenerClosed):
            raise TransportError(
                f"Event stream stopped (exit code {event.returncode}), "
                "incoming messages will not be shown",
                returncode=event.returncode,
            )
        else:
            logger.warning("Unhandled listener event: %r", event)

    async def handle_command(self, command: UiCommand) -> None:
        if isinstance(command, SendMessage):
            conversation = self._state.get_current_conversation()
            if conversation is None:
                raise StateError("No conversation selected")
            await self._client.send_message(conversation.channel, command.text)
        elif isinstance(command, SwitchConversation):
            await self.switch_conversation(command.conversation_id)
        else:
            logger.warning("Unhandled UI command: %r", command)

    async def switch_conversation(self, conversation_id: str) -> bool:
        """Make a conversation current, fetching its messages the first time.

        Returns False (and does nothing) for an unknown id.
        """
        conversation = self._state.get_conversation(conversation_id)
        if conversation is None:
            logger.warning("Switch to unknown conversation %s ignored", conversation_id)
            return False

        try:
            if not conversation.fetched:
                conversation.mark_fetched()
                messages = await self._client.fetch_messages(
                    conversation, self._page_size
                )
                # Anything pushed while fetching is newer and stays in front.
                conversation.insert_messages(messages)
        finally:
            self._state.set_current_conversation(conversation_id)
        return True

    async def _guarded(self, handler, item) -> None:
        """Run one handler; a failure is reported, never propagated."""
        try:
            await handler(item)
        except ChatError as e:
            logger.error("Handling %r failed: %s", item, e.message)
            self._state.report_error(e)
        except Exception as e:
            logger.error("Unexpected error handling %r: %s", item, e, exc_info=True)
            self._state.report_error(e)
