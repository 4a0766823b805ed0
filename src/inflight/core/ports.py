# src/inflight/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by front ends.

Request handlers depend on the TaskScheduler Protocol instead of the concrete
BackgroundScheduler, which keeps them easy to test with fakes.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

Work = Callable[[], Awaitable[Any]]
# Zero-argument coroutine function, e.g. `lambda: fetch_report(report_id)`.


class TaskScheduler(Protocol):
    """Fire-and-forget background work with lookup/wait by name."""

    @property
    def capacity(self) -> int: ...

    @property
    def running_count(self) -> int: ...

    @property
    def queued_count(self) -> int: ...

    def submit(self, work: Work, name: str) -> Any: ...

    def wait_for_task(self, name: str, timeout_seconds: float) -> Awaitable[None]: ...

    def cancel_task(self, name: str) -> int: ...

    def in_flight(self) -> list[Any]: ...

    def shutdown(self, timeout_seconds: float | None = None) -> Awaitable[None]: ...
