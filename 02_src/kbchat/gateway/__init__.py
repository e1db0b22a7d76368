"""Gateway module: subprocess transport to the chat backend."""

from .gateway import Gateway, IGateway
from .listener import IListener, ListenerStream
from .protocol import (
    list_command,
    parse_listener_line,
    parse_response,
    read_command,
    send_command,
)

__all__ = [
    "Gateway",
    "IGateway",
    "IListener",
    "ListenerStream",
    "list_command",
    "read_command",
    "send_command",
    "parse_response",
    "parse_listener_line",
]
