# src/inflight/tasks/errors.py

from __future__ import annotations


class SchedulerError(Exception):
    """Base class for scheduler errors."""


class TaskWaitTimeout(SchedulerError, TimeoutError):
    """A named task did not finish within the caller's wait budget."""

    def __init__(self, name: str, timeout_seconds: float) -> None:
        super().__init__(f"Task {name!r} still running after {timeout_seconds:g}s")
        self.name = name
        self.timeout_seconds = timeout_seconds


class SchedulerClosedError(SchedulerError, RuntimeError):
    """Work was submitted after shutdown started."""
