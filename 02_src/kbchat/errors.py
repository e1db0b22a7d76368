"""Error hierarchy for the chat core.

Everything the core raises on purpose derives from ChatError so the
controller can isolate a failed request or event without ending the session.
"""


class ChatError(Exception):
    """Base class for chat core errors.

    Attributes:
        message: Human readable description, shown to the user as-is.
        extra: Additional details (exit code, stderr, conversation id, ...).
    """

    def __init__(self, message: str, **extra):
        self.message = message
        self.extra = extra
        super().__init__(message)


class TransportError(ChatError):
    """The backend process could not be spawned or exited abnormally."""


class ProtocolError(ChatError):
    """Backend output is not valid JSON or has an unexpected shape."""


class StateError(ChatError):
    """An operation referenced a conversation that does not exist."""
