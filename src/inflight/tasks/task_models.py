# src/inflight/tasks/task_models.py

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class TaskOutcome(StrEnum):
    """Terminal outcome of a tracked task."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


class TaskState(StrEnum):
    QUEUED = "queued"  # waiting for an admission permit
    RUNNING = "running"
    FINISHED = "finished"


@dataclass(frozen=True, slots=True)
class TaskResult:
    """
    What the work-running path produced.

    `error` holds the raised exception for FAILED, and the CancelledError
    (when one was observed) for CANCELLED; its __traceback__ is kept for reporting.
    """

    outcome: TaskOutcome
    value: Any = None
    error: BaseException | None = None

    @classmethod
    def succeeded(cls, value: Any = None) -> TaskResult:
        return cls(TaskOutcome.SUCCEEDED, value=value)

    @classmethod
    def failed(cls, error: BaseException) -> TaskResult:
        return cls(TaskOutcome.FAILED, error=error)

    @classmethod
    def cancelled(cls, error: BaseException | None = None) -> TaskResult:
        return cls(TaskOutcome.CANCELLED, error=error)

    @property
    def ok(self) -> bool:
        return self.outcome == TaskOutcome.SUCCEEDED


@dataclass(slots=True, eq=False)
class TrackedTask:
    """
    One in-flight unit of work.

    Names are not unique: several tasks may share a name and are all found by it.
    The asyncio handle is attached right after construction by the scheduler.
    """

    id: int
    name: str
    submitted_at: float
    started_at: float | None = None
    finished_at: float | None = None
    result: TaskResult | None = None
    handle: asyncio.Task[TaskResult] = field(init=False, repr=False)

    @property
    def label(self) -> str:
        return f"{self.name}#{self.id}"

    @property
    def done(self) -> bool:
        return self.handle.done()

    @property
    def state(self) -> TaskState:
        if self.handle.done():
            return TaskState.FINISHED
        if self.started_at is None:
            return TaskState.QUEUED
        return TaskState.RUNNING
