# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from inflight.config import Settings

_VARS = (
    "INFLIGHT_APP_NAME",
    "INFLIGHT_LOG_LEVEL",
    "INFLIGHT_LOG_FILE_ENABLED",
    "INFLIGHT_CONSOLE_ENABLED",
    "INFLIGHT_MAX_CONCURRENT_TASKS",
    "INFLIGHT_WAIT_TIMEOUT_SECONDS",
    "INFLIGHT_SHUTDOWN_TIMEOUT_SECONDS",
    "INFLIGHT_DATA_DIR",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = Settings.from_env()

    assert s.app_name == "inflight"
    assert s.log_level == "INFO"
    assert s.log_file_enabled is True
    assert s.console_enabled is True
    assert s.max_concurrent_tasks == 1
    assert s.wait_timeout_seconds == 30.0
    assert s.shutdown_timeout_seconds == 10.0
    assert s.data_dir == Path(".local/inflight")


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("INFLIGHT_APP_NAME", "jobs")
    monkeypatch.setenv("INFLIGHT_LOG_LEVEL", "debug")
    monkeypatch.setenv("INFLIGHT_CONSOLE_ENABLED", "off")
    monkeypatch.setenv("INFLIGHT_MAX_CONCURRENT_TASKS", "4")
    monkeypatch.setenv("INFLIGHT_WAIT_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("INFLIGHT_DATA_DIR", str(tmp_path))

    s = Settings.from_env()

    assert s.app_name == "jobs"
    assert s.log_level == "DEBUG"
    assert s.console_enabled is False
    assert s.max_concurrent_tasks == 4
    assert s.wait_timeout_seconds == 2.5
    assert s.data_dir == tmp_path


def test_invalid_numbers_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INFLIGHT_MAX_CONCURRENT_TASKS", "many")
    monkeypatch.setenv("INFLIGHT_SHUTDOWN_TIMEOUT_SECONDS", "soon")

    s = Settings.from_env()

    assert s.max_concurrent_tasks == 1
    assert s.shutdown_timeout_seconds == 10.0


def test_capacity_is_clamped_to_one(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INFLIGHT_MAX_CONCURRENT_TASKS", "0")
    assert Settings.from_env().max_concurrent_tasks == 1

    monkeypatch.setenv("INFLIGHT_MAX_CONCURRENT_TASKS", "-3")
    assert Settings.from_env().max_concurrent_tasks == 1
