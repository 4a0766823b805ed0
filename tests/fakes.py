# tests/fakes.py

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any

from inflight.core.ports import Work


@dataclass(slots=True)
class ConcurrencyProbe:
    """
    Instrumented work bodies for scheduler tests.

    Records how many bodies run at the same time, the peak, and start/finish order.
    """

    active: int = 0
    max_active: int = 0
    started: list[str] = field(default_factory=list)
    finished: list[str] = field(default_factory=list)
    started_at: dict[str, float] = field(default_factory=dict)

    def job(self, label: str, seconds: float = 0.0, *, fail: bool = False, value: Any = None) -> Work:
        async def _body() -> Any:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
            self.started.append(label)
            self.started_at[label] = time.monotonic()
            try:
                await asyncio.sleep(seconds)
                if fail:
                    raise RuntimeError(f"{label} failed")
                return label if value is None else value
            finally:
                self.active -= 1
                self.finished.append(label)

        return _body
