"""Console front end."""

from .input import ConsoleInput, ThreadedLineReader, open_stdin
from .renderer import ConsoleRenderer, format_message

__all__ = [
    "ConsoleInput",
    "ConsoleRenderer",
    "ThreadedLineReader",
    "format_message",
    "open_stdin",
]
