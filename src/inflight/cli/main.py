# src/inflight/cli/main.py

"""
CLI entrypoint.

Initializes logging, runs the event loop, builds AppState inside it, then starts
the console front end. On exit (console /exit, EOF, SIGINT/SIGTERM) the
scheduler is drained before the loop closes.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal

from ..cli.bootstrap import create_initial_state
from ..config import Settings, get_settings
from ..connectors.console_connector import run_until_stopped
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _serve(settings: Settings) -> None:
    # Built here, not at import time: the scheduler must live in this loop.
    state = create_initial_state(settings=settings)

    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    def _handle_signal(signum: int) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_event.set()

    for signum in (signal.SIGINT, signal.SIGTERM):
        # Some platforms (Windows) do not support loop signal handlers.
        with contextlib.suppress(NotImplementedError, RuntimeError):
            loop.add_signal_handler(signum, _handle_signal, signum)

    try:
        if settings.console_enabled:
            await run_until_stopped(state, stop_event)
        else:
            logger.info("Console disabled. Running background scheduler only. Press Ctrl+C to stop.")
            await stop_event.wait()
    finally:
        await state.scheduler.shutdown(timeout_seconds=settings.shutdown_timeout_seconds)


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    console_level = getattr(logging, settings.log_level, logging.INFO)
    log_dir = settings.data_dir if settings.log_file_enabled else None
    listener = setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    try:
        asyncio.run(_serve(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    finally:
        logger.info("Bye.")
        listener.stop()


if __name__ == "__main__":
    main()
