# tests/conftest.py

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from types import SimpleNamespace

import pytest

from inflight.core.state import AppState
from inflight.tasks.task_scheduler import BackgroundScheduler

from .fakes import ConcurrencyProbe


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    We intentionally use a SimpleNamespace rather than reading real env config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="inflight-test",
        log_level="DEBUG",
        log_file_enabled=False,
        console_enabled=False,
        max_concurrent_tasks=1,
        wait_timeout_seconds=1.0,
        shutdown_timeout_seconds=1.0,
        data_dir=tmp_path / "data",
    )


@pytest.fixture()
def probe() -> ConcurrencyProbe:
    return ConcurrencyProbe()


@pytest.fixture()
def task_log() -> logging.Logger:
    """Logger injected into schedulers under test (captured by caplog via propagation)."""
    return logging.getLogger("inflight.tests")


@pytest.fixture()
def make_state(settings: SimpleNamespace, task_log: logging.Logger) -> Callable[..., AppState]:
    """
    AppState factory.

    The scheduler must be built inside the running loop, so async tests call this
    instead of receiving a ready-made state.
    """

    def _make(max_concurrent_tasks: int | None = None) -> AppState:
        capacity = max_concurrent_tasks or settings.max_concurrent_tasks
        return AppState(
            settings=settings,
            scheduler=BackgroundScheduler(capacity, log=task_log),
        )

    return _make
