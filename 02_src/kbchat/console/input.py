"""Reads user input lines and turns them into UI commands."""

import asyncio
import sys
from typing import Protocol, TextIO

from ..app import IApplication
from ..logging_config import get_logger
from .renderer import ConsoleRenderer

logger = get_logger(__name__)

HELP = "Commands: /list, /switch <number|id>, /quit. Anything else is sent."


class LineReader(Protocol):
    async def readline(self) -> bytes:
        """Next line including the newline, b"" at end of input."""
        ...


class ThreadedLineReader:
    """Reads lines in a worker thread, for stdin redirected from a file."""

    def __init__(self, stream: TextIO):
        self._stream = getattr(stream, "buffer", stream)

    async def readline(self) -> bytes:
        return await asyncio.to_thread(self._stream.readline)


async def open_stdin(stream: TextIO | None = None) -> LineReader:
    """Wrap stdin so reads never block the event loop.

    Pipes and terminals get a StreamReader; regular files, which the pipe
    transport refuses, are read in a worker thread.
    """
    stream = stream if stream is not None else sys.stdin
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader()
    try:
        await loop.connect_read_pipe(
            lambda: asyncio.StreamReaderProtocol(reader), stream
        )
    except ValueError:
        logger.info("Input is not a pipe or terminal, reading in a thread")
        return ThreadedLineReader(stream)
    return reader


class ConsoleInput:
    """Parses input lines into commands for the application."""

    def __init__(
        self,
        app: IApplication,
        renderer: ConsoleRenderer,
        reader: LineReader,
    ):
        self._app = app
        self._renderer = renderer
        self._reader = reader

    async def run(self) -> None:
        """Read lines until EOF or /quit."""
        while True:
            raw = await self._reader.readline()
            if not raw:
                logger.info("Input closed")
                return
            line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
            if not await self.handle_line(line):
                return

    async def handle_line(self, line: str) -> bool:
        """Handle one line. Returns False when the user asked to quit."""
        if not line.strip():
            return True

        if line.startswith("/"):
            command, _, argument = line[1:].partition(" ")
            argument = argument.strip()
            if command == "quit":
                return False
            if command == "list":
                self._renderer.render_list()
            elif command == "switch" and argument:
                conversation_id = self._renderer.resolve(argument)
                if conversation_id is None:
                    self._renderer.on_error(ValueError(f"No conversation number {argument}"))
                else:
                    await self._app.switch_conversation(conversation_id)
            else:
                self._renderer.on_error(ValueError(HELP))
            return True

        await self._app.send_message(line)
        return True
