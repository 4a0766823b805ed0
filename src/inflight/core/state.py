# src/inflight/core/state.py

from __future__ import annotations

import time
from dataclasses import dataclass, field

from .ports import TaskScheduler


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    # One scheduler per process, created at startup inside the running loop.
    scheduler: TaskScheduler

    started_at: float = field(default_factory=time.time)
