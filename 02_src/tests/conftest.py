"""Pytest configuration and fixtures."""

import asyncio
import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from kbchat.models import Channel, Conversation, MemberType, Message  # noqa: E402
from kbchat.state import ApplicationState  # noqa: E402


def message_json(conversation_id="conv1", text="hello", username="alice"):
    """Backend JSON for a text message."""
    return {
        "conversation_id": conversation_id,
        "channel": {"name": "chan", "members_type": "team", "topic_name": "general"},
        "sender": {"username": username, "device_name": "laptop"},
        "content": {"type": "text", "text": {"body": text}},
    }


class FakeGateway:
    """Gateway returning scripted responses (or raising scripted errors)."""

    def __init__(self, responses=None):
        self.commands: list[dict] = []
        self.responses = list(responses or [])

    async def submit(self, command: dict) -> dict:
        self.commands.append(command)
        if not self.responses:
            raise AssertionError(f"Unexpected command: {command}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeListener:
    """Listener with a queue the test can push into."""

    def __init__(self):
        self.events: asyncio.Queue = asyncio.Queue()
        self.started = False
        self.stopped = False

    async def start(self) -> None:
        self.started = True

    async def stop(self) -> None:
        self.stopped = True


class FakeClient:
    """Client recording every call made by the controller."""

    def __init__(self, conversations=None, messages=None):
        self.conversations = conversations or []
        self.messages = messages or {}
        self.events: asyncio.Queue = asyncio.Queue()
        self.fetch_calls: list[tuple[str, int, bool]] = []
        self.sent: list[tuple[Channel, str]] = []
        self.subscribed = False
        self.closed = False
        self.list_error: Exception | None = None
        self.fetch_error: Exception | None = None
        self.send_error: Exception | None = None
        self.subscribe_error: Exception | None = None

    async def fetch_conversations(self):
        if self.list_error:
            raise self.list_error
        return list(self.conversations)

    async def fetch_messages(self, conversation, count):
        # Record the fetched flag as seen while the request is in flight
        self.fetch_calls.append((conversation.id, count, conversation.fetched))
        if self.fetch_error:
            raise self.fetch_error
        return list(self.messages.get(conversation.id, []))

    async def send_message(self, channel, text):
        if self.send_error:
            raise self.send_error
        self.sent.append((channel, text))

    async def subscribe(self):
        if self.subscribe_error:
            raise self.subscribe_error
        self.subscribed = True
        return self.events

    async def close(self):
        self.closed = True


class RecordingObserver:
    """Observer storing every notification it receives."""

    def __init__(self):
        self.calls: list[tuple] = []

    def on_conversation_change(self, conversation):
        self.calls.append(("conversation_change", conversation.id))

    def on_conversations_added(self, conversations):
        self.calls.append(("conversations_added", conversations))

    def on_message(self, message, conversation_id, active):
        self.calls.append(("message", message, conversation_id, active))

    def on_error(self, error):
        self.calls.append(("error", error))

    def of(self, kind):
        return [call for call in self.calls if call[0] == kind]


@pytest.fixture
def channel():
    """A team channel."""
    return Channel(name="chan", topic_name="general", members_type=MemberType.TEAM)


@pytest.fixture
def make_message():
    """Factory for text messages."""

    def _make(conversation_id="conv1", text="hello", username="alice"):
        return Message.model_validate(message_json(conversation_id, text, username))

    return _make


@pytest.fixture
def make_conversation():
    """Factory for conversations."""

    def _make(conversation_id, name="chan", members_type=MemberType.TEAM):
        return Conversation(
            id=conversation_id,
            channel=Channel(name=name, members_type=members_type),
        )

    return _make


@pytest.fixture
def state():
    """Empty application state."""
    return ApplicationState()


@pytest.fixture
def observer(state):
    """Observer registered on the state fixture."""
    obs = RecordingObserver()
    state.register_observer(obs)
    return obs


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def fake_listener():
    return FakeListener()


@pytest.fixture
def fake_client(make_conversation):
    """Client knowing conversations A and B."""
    return FakeClient(conversations=[make_conversation("A"), make_conversation("B")])


@pytest.fixture
def wait_until():
    """Poll a predicate until it holds, yielding to the event loop."""

    async def _wait(predicate, timeout=2.0):
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while not predicate():
            if loop.time() > deadline:
                raise AssertionError("Condition not met in time")
            await asyncio.sleep(0.01)

    return _wait
