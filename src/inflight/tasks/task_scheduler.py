# src/inflight/tasks/task_scheduler.py

from __future__ import annotations

"""
Background task scheduler.

Lets a request-serving process launch long-running coroutines without an external
worker stack:
- submit() registers a named task and schedules it right away (never suspends),
- every task body runs behind an AdmissionGate, so at most `max_concurrent_tasks`
  bodies execute at the same time, admitted in submission order,
- two done-callbacks per task drop it from the registry and report the outcome;
  failures and cancellations end up in the log, never in the caller,
- wait_for_task() lets a later request wait (with a timeout) for same-named tasks.

Task status persistence and retries belong to the caller, not the scheduler.
"""

import asyncio
import functools
import itertools
import logging
import time

from ..core.ports import Work
from .errors import SchedulerClosedError, TaskWaitTimeout
from .gate import AdmissionGate
from .task_models import TaskOutcome, TaskResult, TaskState, TrackedTask
from .task_registry import TaskRegistry

logger = logging.getLogger(__name__)


class BackgroundScheduler:
    """
    In-process bounded-concurrency scheduler.

    Create exactly one per process, inside the running event loop, at startup,
    and pass it around (AppState) instead of reaching for a global.
    """

    def __init__(self, max_concurrent_tasks: int = 1, *, log: logging.Logger | None = None) -> None:
        self._gate = AdmissionGate(max_concurrent_tasks)
        self._registry = TaskRegistry()
        self._ids = itertools.count(1)
        self._log = log or logger
        self._closed = False

    # ---- introspection ----

    @property
    def capacity(self) -> int:
        return self._gate.capacity

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def running_count(self) -> int:
        return self._gate.in_use

    @property
    def queued_count(self) -> int:
        return sum(1 for t in self._registry.snapshot() if t.state == TaskState.QUEUED)

    def in_flight(self) -> list[TrackedTask]:
        return self._registry.snapshot()

    def find(self, name: str) -> list[TrackedTask]:
        return self._registry.find_by_name(name)

    # ---- public API ----

    def submit(self, work: Work, name: str) -> TrackedTask:
        """
        Schedule `work` (a zero-argument coroutine function) under `name`.

        Returns immediately; the returned handle may be ignored (fire-and-forget).
        """
        if self._closed:
            raise SchedulerClosedError(f"Scheduler is shut down; refusing task {name!r}")

        tracked = TrackedTask(id=next(self._ids), name=name, submitted_at=time.monotonic())
        tracked.handle = asyncio.create_task(
            self._run_guarded(tracked, work),
            name=f"inflight:{tracked.label}",
        )
        self._registry.register(tracked)

        # Order matters: unregister runs before any waiter attached later is woken.
        tracked.handle.add_done_callback(functools.partial(self._forget, tracked))
        tracked.handle.add_done_callback(functools.partial(self._report_outcome, tracked))

        self._log.debug("Task %s accepted (in_flight=%d)", tracked.label, len(self._registry))
        return tracked

    async def wait_for_task(self, name: str, timeout_seconds: float) -> None:
        """
        Wait for every in-flight task called `name`.

        The timeout applies to each matched task separately, one after another.
        Raises TaskWaitTimeout for the first task that is still running when its
        window elapses; that task is left running. No match -> returns at once.
        """
        if timeout_seconds < 0:
            raise ValueError("timeout_seconds must be >= 0")

        for tracked in self._registry.find_by_name(name):
            if tracked.handle.done():
                continue
            # asyncio.wait never cancels the task and never raises its outcome.
            _, pending = await asyncio.wait({tracked.handle}, timeout=timeout_seconds)
            if pending:
                self._log.info("Wait for task %s timed out after %.3fs", tracked.label, timeout_seconds)
                raise TaskWaitTimeout(name, timeout_seconds)

    def cancel_task(self, name: str) -> int:
        """Request cancellation of all in-flight tasks called `name`. Returns how many accepted it."""
        count = 0
        for tracked in self._registry.find_by_name(name):
            if tracked.handle.cancel():
                count += 1
        if count:
            self._log.info("Cancellation requested for %d task(s) named %r", count, name)
        return count

    async def shutdown(self, timeout_seconds: float | None = None) -> None:
        """
        Stop accepting work and drain.

        Waits up to `timeout_seconds` for in-flight tasks (None -> wait forever),
        then cancels the rest and waits for them to settle.
        """
        self._closed = True

        pending = {t.handle for t in self._registry.snapshot()}
        if not pending:
            return

        self._log.info("Draining %d background task(s) (timeout=%s)", len(pending), timeout_seconds)
        _, still_running = await asyncio.wait(pending, timeout=timeout_seconds)

        if still_running:
            self._log.warning("Cancelling %d background task(s) still running after drain", len(still_running))
            for handle in still_running:
                handle.cancel()
            await asyncio.wait(still_running)

    # ---- internals ----

    async def _run_guarded(self, tracked: TrackedTask, work: Work) -> TaskResult:
        """The only path task bodies run through: gate -> body -> release."""
        try:
            async with self._gate.hold():
                tracked.started_at = time.monotonic()
                self._log.debug(
                    "Task %s admitted (running=%d/%d, waited=%.3fs)",
                    tracked.label,
                    self._gate.in_use,
                    self._gate.capacity,
                    tracked.started_at - tracked.submitted_at,
                )
                value = await work()
        except asyncio.CancelledError as exc:
            tracked.result = TaskResult.cancelled(exc)
            raise
        except Exception as exc:
            return TaskResult.failed(exc)
        return TaskResult.succeeded(value)

    def _forget(self, tracked: TrackedTask, _handle: asyncio.Task[TaskResult]) -> None:
        self._registry.unregister(tracked)

    def _report_outcome(self, tracked: TrackedTask, handle: asyncio.Task[TaskResult]) -> None:
        tracked.finished_at = time.monotonic()
        tracked.result = _result_of(handle, tracked.result)
        result = tracked.result

        if result.outcome == TaskOutcome.SUCCEEDED:
            self._log.info(
                "Task %s completed in %.3fs",
                tracked.label,
                tracked.finished_at - (tracked.started_at or tracked.submitted_at),
            )
        elif result.outcome == TaskOutcome.CANCELLED:
            self._log.warning(
                "Task %s cancelled (state=%s)",
                tracked.label,
                "running" if tracked.started_at is not None else "queued",
                exc_info=result.error,
            )
        else:
            self._log.warning(
                "Task %s failed: %r",
                tracked.label,
                result.error,
                exc_info=result.error,
            )


def _result_of(handle: asyncio.Task[TaskResult], recorded: TaskResult | None) -> TaskResult:
    if handle.cancelled():
        if recorded is not None and recorded.outcome == TaskOutcome.CANCELLED:
            return recorded
        return TaskResult.cancelled()

    exc = handle.exception()
    if exc is not None:
        # Only BaseExceptions that are not Exception (KeyboardInterrupt, SystemExit) get here.
        return TaskResult.failed(exc)
    return handle.result()
