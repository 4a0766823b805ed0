# src/inflight/tasks/gate.py

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import AsyncIterator


class AdmissionGate:
    """
    Counting permit pool bounding how many task bodies run at once.

    The gate belongs to the event loop it was created in:
    construct it inside that running loop (at application startup) and only use it there.
    Waiters are resumed in the order they started waiting (asyncio.Semaphore FIFO).
    """

    __slots__ = ("_capacity", "_held", "_loop", "_sem")

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        # Raises RuntimeError when there is no running loop.
        self._loop = asyncio.get_running_loop()
        self._capacity = int(capacity)
        self._held = 0
        self._sem = asyncio.Semaphore(self._capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def in_use(self) -> int:
        return self._held

    @property
    def available(self) -> int:
        return self._capacity - self._held

    def locked(self) -> bool:
        return self._sem.locked()

    @contextlib.asynccontextmanager
    async def hold(self) -> AsyncIterator[None]:
        """
        Scoped acquisition: wait for a permit, hold it for the body of the `async with`.

        The permit is released on every exit path, including exceptions and cancellation.
        """
        if asyncio.get_running_loop() is not self._loop:
            raise RuntimeError("AdmissionGate used outside the event loop it was created in")

        await self._sem.acquire()
        self._held += 1
        try:
            yield
        finally:
            self._held -= 1
            self._sem.release()
