"""Gateway adapter: one backend command per short-lived subprocess."""

import asyncio
import json
from typing import Protocol

from ..errors import ProtocolError, TransportError
from ..logging_config import get_logger

logger = get_logger(__name__)


class IGateway(Protocol):
    """Executes a single JSON command against the backend."""

    async def submit(self, command: dict) -> dict:
        """Run the command and return the parsed JSON response."""
        ...


class Gateway:
    """Runs each command in a fresh backend process.

    The command is written to the child's stdin, stdin is closed to mark the
    end of the command, and stdout is buffered until the child exits. There
    is no pooling and no retry.
    """

    def __init__(self, argv: list[str]):
        if not argv:
            raise ValueError("Gateway command must not be empty")
        self._argv = list(argv)

    @property
    def argv(self) -> list[str]:
        return list(self._argv)

    async def submit(self, command: dict) -> dict:
        """Run the command and return the parsed JSON response."""
        method = command.get("method", "?")
        payload = json.dumps(command, separators=(",", ":")).encode("utf-8")
        logger.debug("Gateway command: %s", json.dumps(command, indent=2))

        try:
            process = await asyncio.create_subprocess_exec(
                *self._argv,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise TransportError(
                f"Failed to start {self._argv[0]}: {e}", argv=self._argv
            ) from e

        logger.debug("Started gateway process %s for %s", process.pid, method)
        stdout, stderr = await process.communicate(payload)

        if process.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            raise TransportError(
                f"{method} failed with exit code {process.returncode}: {detail}",
                returncode=process.returncode,
                stderr=detail,
            )

        try:
            document = json.loads(stdout.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise ProtocolError(f"{method} response is not UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise ProtocolError(f"{method} response is not JSON: {e}") from e

        if not isinstance(document, dict):
            raise ProtocolError(f"{method} response is not a JSON object")

        logger.info("Gateway %s completed (%s bytes)", method, len(stdout))
        logger.debug("Gateway response: %s", json.dumps(document, indent=2))
        return document
