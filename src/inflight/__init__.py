"""
inflight: bounded-concurrency background tasks for a single asyncio process.

Create one BackgroundScheduler at startup (inside the running loop), keep it on
your application state, then submit() named work and wait_for_task() by name.
"""

from .tasks.errors import SchedulerClosedError, SchedulerError, TaskWaitTimeout
from .tasks.task_models import TaskOutcome, TaskResult, TaskState, TrackedTask
from .tasks.task_scheduler import BackgroundScheduler

__all__ = [
    "BackgroundScheduler",
    "SchedulerClosedError",
    "SchedulerError",
    "TaskOutcome",
    "TaskResult",
    "TaskState",
    "TaskWaitTimeout",
    "TrackedTask",
]
