"""Listener stream: the long-lived backend process pushing chat events."""

import asyncio
from typing import Protocol

from ..errors import ProtocolError, TransportError
from ..logging_config import get_logger
from ..models import ListenerClosed, ListenerEvent
from .protocol import parse_listener_line

logger = get_logger(__name__)

# Chat events can carry large unfurls; the asyncio default is 64 KiB.
LINE_LIMIT = 4 * 1024 * 1024


class IListener(Protocol):
    """Supervises the event-stream process for the session's lifetime."""

    @property
    def events(self) -> "asyncio.Queue[ListenerEvent]":
        """Unbounded FIFO of parsed events, for a single consumer."""
        ...

    async def start(self) -> None:
        """Launch the process and the reader task."""
        ...

    async def stop(self) -> None:
        """Kill the process and stop reading."""
        ...


class ListenerStream:
    """Reads line-delimited JSON events from a backend process.

    A line that cannot be parsed is logged and skipped. When the output
    ends, a single ListenerClosed event is queued so the consumer can tell
    the stream is gone.
    """

    def __init__(self, argv: list[str]):
        if not argv:
            raise ValueError("Listener command must not be empty")
        self._argv = list(argv)
        self._events: asyncio.Queue[ListenerEvent] = asyncio.Queue()
        self._process: asyncio.subprocess.Process | None = None
        self._reader: asyncio.Task | None = None

    @property
    def events(self) -> "asyncio.Queue[ListenerEvent]":
        return self._events

    @property
    def running(self) -> bool:
        return self._process is not None and self._process.returncode is None

    async def start(self) -> None:
        """Launch the process and the reader task. Only allowed once."""
        if self._process is not None:
            raise RuntimeError("Listener already started")

        try:
            self._process = await asyncio.create_subprocess_exec(
                *self._argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                limit=LINE_LIMIT,
            )
        except OSError as e:
            raise TransportError(
                f"Failed to start listener {self._argv[0]}: {e}", argv=self._argv
            ) from e

        logger.info("Started listener process %s", self._process.pid)
        self._reader = asyncio.create_task(self._read_loop())

    async def stop(self) -> None:
        """Stop reading and kill the process. Safe to call more than once."""
        if self._reader is not None and not self._reader.done():
            self._reader.cancel()
            try:
                await self._reader
            except asyncio.CancelledError:
                pass

        process = self._process
        if process is not None and process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                pass
            await process.wait()
            logger.info("Killed listener process %s", process.pid)

    async def __aenter__(self) -> "ListenerStream":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()

    async def _read_loop(self) -> None:
        """Forward parsed events until the process output ends."""
        assert self._process is not None and self._process.stdout is not None
        stdout = self._process.stdout

        while True:
            try:
                raw = await stdout.readline()
            except ValueError as e:
                logger.warning("Skipping oversized listener line: %s", e)
                continue

            if not raw:
                break

            try:
                event = parse_listener_line(raw.decode("utf-8"))
            except UnicodeDecodeError as e:
                logger.warning("Skipping non UTF-8 listener line: %s", e)
                continue
            except ProtocolError as e:
                logger.warning("Skipping listener line: %s", e.message)
                continue

            if event is None:
                continue

            logger.debug("Listener event: %s", event)
            self._events.put_nowait(event)

        returncode = await self._process.wait()
        logger.error("Listener output ended, process exited with %s", returncode)
        self._events.put_nowait(ListenerClosed(returncode))
