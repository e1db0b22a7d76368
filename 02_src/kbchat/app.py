"""Application bootstrap and lifecycle management."""

import asyncio
from typing import Protocol

from .client import Client, IClient
from .config import Settings
from .controller import Controller
from .gateway import Gateway, ListenerStream
from .logging_config import get_logger
from .models import SendMessage, SwitchConversation, UiCommand
from .state import ApplicationState, IStateObserver

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def send_message(self, text: str) -> None:
        """Queue a message for the current conversation."""
        ...

    async def switch_conversation(self, conversation_id: str) -> None:
        """Queue a switch to another conversation."""
        ...


class Application:
    """Wires the client, state and controller together.

    The UI side only ever talks to the application through the command queue
    (send_message / switch_conversation) and the observers it registers.
    """

    def __init__(self, settings: Settings | None = None, client: IClient | None = None):
        self._settings = settings or Settings()
        self._client = client
        self._state = ApplicationState()
        self._commands: asyncio.Queue[UiCommand] = asyncio.Queue()
        self._controller: Controller | None = None
        self._loop_task: asyncio.Task | None = None

    def register_observer(self, observer: IStateObserver) -> None:
        """Register an observer; call before start() to see the initial load."""
        self._state.register_observer(observer)

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Client (gateway + listener)
        if self._client is None:
            self._client = Client(
                Gateway(self._settings.api_command),
                ListenerStream(self._settings.listen_command),
            )

        # 2. Controller (owns the state from here on)
        self._controller = Controller(
            client=self._client,
            state=self._state,
            commands=self._commands,
            page_size=self._settings.page_size,
        )

        try:
            await self._controller.init()
        except BaseException:
            await self._client.close()
            raise
        logger.info("Controller initialized")

        # 3. Event loop
        self._loop_task = asyncio.create_task(self._controller.process_events())
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order. The listener is always killed."""
        try:
            if self._loop_task:
                self._loop_task.cancel()
                try:
                    await self._loop_task
                except asyncio.CancelledError:
                    pass
                logger.info("Event loop stopped")
        finally:
            if self._client:
                await self._client.close()
                logger.info("Client closed")

    async def send_message(self, text: str) -> None:
        await self._commands.put(SendMessage(text))

    async def switch_conversation(self, conversation_id: str) -> None:
        await self._commands.put(SwitchConversation(conversation_id))

    @property
    def state(self) -> ApplicationState:
        """Read-only use only; mutations belong to the controller."""
        return self._state

    @property
    def controller(self) -> Controller:
        """Get controller instance."""
        if not self._controller:
            raise RuntimeError("Application not started")
        return self._controller
