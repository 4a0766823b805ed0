# src/inflight/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the BackgroundScheduler into AppState.

Must be called from inside the running event loop: the scheduler's admission
gate binds to the loop it is created in.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_scheduler import BackgroundScheduler

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    scheduler = BackgroundScheduler(
        max_concurrent_tasks=settings.max_concurrent_tasks,
        log=logging.getLogger("inflight.tasks"),
    )
    logger.info("Background scheduler ready (max_concurrent_tasks=%d)", scheduler.capacity)

    return AppState(settings=settings, scheduler=scheduler)
