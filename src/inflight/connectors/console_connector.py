# src/inflight/connectors/console_connector.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def start_stdin_reader(loop: asyncio.AbstractEventLoop) -> asyncio.Queue[str | None]:
    """
    Read stdin lines in a daemon thread and hand them to the loop.

    Why a thread: input() is blocking and must never run on the event loop.
    A None item means EOF / Ctrl+C on the terminal.
    """
    lines: asyncio.Queue[str | None] = asyncio.Queue()

    def reader() -> None:
        while True:
            try:
                line: str | None = input()
            except (EOFError, KeyboardInterrupt):
                line = None

            try:
                loop.call_soon_threadsafe(lines.put_nowait, line)
            except RuntimeError:
                # Loop already closed.
                return

            if line is None:
                return

    threading.Thread(target=reader, name="console-stdin", daemon=True).start()
    return lines


async def run_console_loop(state: AppState, *, lines: asyncio.Queue[str | None] | None = None) -> None:
    """
    Interactive front end driving the scheduler like a request handler would.

    Commands run on the event loop, so a long /wait blocks the console (not the
    scheduler). Background tasks keep running meanwhile.
    """
    if lines is None:
        lines = start_stdin_reader(asyncio.get_running_loop())

    app_name = str(getattr(getattr(state, "settings", None), "app_name", "inflight"))
    logger.info("Console connector started (capacity=%d).", state.scheduler.capacity)
    _print_ts(f"[{app_name}] Use /help for commands. Use /exit to quit.\n")

    def emit(text: str) -> None:
        # Immediate user-visible feedback for long operations (e.g. /wait)
        _print_ts(text)

    while True:
        print(">>> ", end="", flush=True)
        raw = await lines.get()
        if raw is None:
            logger.info("Console EOF received, exiting.")
            print()
            break

        user_input = raw.strip()
        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            response = await command_registry.handle(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response is None:
            response = "Not a command. Use /help to list available commands."

        _print_ts(response)

    logger.info("Console connector finished.")


async def run_until_stopped(state: AppState, stop_event: asyncio.Event) -> None:
    """Run the console until it exits or `stop_event` is set (signal)."""
    console = asyncio.create_task(run_console_loop(state), name="console")
    stopper = asyncio.create_task(stop_event.wait(), name="console-stop")

    try:
        await asyncio.wait({console, stopper}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for t in (console, stopper):
            t.cancel()
        for t in (console, stopper):
            with contextlib.suppress(asyncio.CancelledError):
                await t
