# src/inflight/tasks/task_registry.py

from __future__ import annotations

from collections.abc import Iterator

from .task_models import TrackedTask


class TaskRegistry:
    """
    Set of tasks that have not reached a terminal state yet.

    Single source of truth for "what is in flight".
    Mutated only from the owning event loop (submit + done-callbacks), so plain dict
    operations are atomic with respect to other tasks.
    Lookups return copies, never live views.
    """

    __slots__ = ("_tasks",)

    def __init__(self) -> None:
        self._tasks: dict[int, TrackedTask] = {}  # task id -> task, insertion ordered

    def register(self, task: TrackedTask) -> None:
        if task.id in self._tasks:
            raise RuntimeError(f"Task already registered: {task.label}")
        self._tasks[task.id] = task

    def unregister(self, task: TrackedTask) -> None:
        """Idempotent removal."""
        self._tasks.pop(task.id, None)

    def find_by_name(self, name: str) -> list[TrackedTask]:
        return [t for t in self._tasks.values() if t.name == name]

    def snapshot(self) -> list[TrackedTask]:
        return list(self._tasks.values())

    def names(self) -> set[str]:
        return {t.name for t in self._tasks.values()}

    def __contains__(self, task: object) -> bool:
        return isinstance(task, TrackedTask) and self._tasks.get(task.id) is task

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[TrackedTask]:
        return iter(self.snapshot())
