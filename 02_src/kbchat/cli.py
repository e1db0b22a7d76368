"""Command line entry point: bootstraps logging, config and the console UI."""

import argparse
import asyncio
import signal
import sys

from dotenv import load_dotenv

from .app import Application
from .config import DEFAULT_ENV_PATH, Settings, load_settings
from .console import ConsoleInput, ConsoleRenderer, open_stdin
from .console.input import HELP
from .errors import ChatError
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="kbchat", description="Terminal chat client for the keybase CLI."
    )
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR")
    parser.add_argument("--log-file", help="Path of the JSON log file")
    parser.add_argument(
        "--log-console", action="store_true", help="Also log to stderr"
    )
    return parser.parse_args(argv)


async def run(settings: Settings) -> None:
    """Run the chat session until /quit, end of input, SIGINT or SIGTERM."""
    renderer = ConsoleRenderer()
    app = Application(settings)
    app.register_observer(renderer)

    loop = asyncio.get_running_loop()
    stop = asyncio.Event()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)

    try:
        await app.start()
        print(HELP)

        console = ConsoleInput(app, renderer, await open_stdin())
        input_task = asyncio.create_task(console.run())
        stop_task = asyncio.create_task(stop.wait())
        await asyncio.wait(
            {input_task, stop_task}, return_when=asyncio.FIRST_COMPLETED
        )
        for task in (input_task, stop_task):
            task.cancel()
    finally:
        await app.stop()
        logger.info("Session ended")


def main(argv: list[str] | None = None) -> int:
    """Run the application."""
    args = parse_args(argv)
    load_dotenv(DEFAULT_ENV_PATH)

    try:
        settings = load_settings()
    except ValueError as e:
        print(f"kbchat: {e}", file=sys.stderr)
        return 2

    if args.log_level:
        settings.log_level = args.log_level.upper()
    if args.log_file:
        settings.log_file = args.log_file
    setup_logging(settings.log_level, settings.log_file, console=args.log_console)

    logger.info("Starting...")
    try:
        asyncio.run(run(settings))
    except ChatError as e:
        logger.error("Session aborted: %s", e.message)
        print(f"kbchat: {e.message}", file=sys.stderr)
        return 1
    return 0
