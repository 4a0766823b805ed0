# src/inflight/logging_setup.py

from __future__ import annotations

import logging
import logging.handlers
import queue
import sys
from pathlib import Path


class _ConsoleNoiseFilter(logging.Filter):
    """
    Make interactive console usable:
    - allow inflight logs
    - suppress Python warnings (captured as 'py.warnings') unless ERROR+
    - suppress third-party noise unless ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name == "inflight" or name.startswith("inflight."):
            return True

        if name == "py.warnings":
            return record.levelno >= logging.ERROR

        # asyncio reports "Task exception was never retrieved" etc. at ERROR.
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path | None = ".local/inflight",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> logging.handlers.QueueListener:
    """
    Configure logging with:
    - Console handler: readable + filtered for interactive use
    - File handler: full logs for debugging (skipped when log_dir is None)

    Loggers only enqueue records (QueueHandler); a listener thread does the I/O,
    so logging from the event loop never blocks it.

    Call this ONCE, very early (before first logger.info). Stop the returned
    listener on exit to flush pending records.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handlers: list[logging.Handler] = []

    # Console (interactive)
    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    handlers.append(ch)

    # File (everything)
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_dir / "inflight.log"), encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(fmt)
        handlers.append(fh)

    records: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(logging.handlers.QueueHandler(records))

    listener = logging.handlers.QueueListener(records, *handlers, respect_handler_level=True)
    listener.start()

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)

    return listener
