# src/inflight/cli/commands.py

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

from ..core.ports import Work
from ..core.state import AppState
from ..tasks.errors import SchedulerClosedError, TaskWaitTimeout

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppState, list[str], CommandEmitter | None], Awaitable[str]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by front ends (/help, /submit, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return await handler(state, args, emit)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def sleep_job(seconds: float, *, fail: bool = False) -> Work:
    """Demo work body: sleep, then return the elapsed time (or raise when `fail`)."""

    async def _job() -> float:
        t0 = time.monotonic()
        await asyncio.sleep(seconds)
        if fail:
            raise RuntimeError(f"job failed on purpose after {seconds:g}s")
        return time.monotonic() - t0

    return _job


def _parse_seconds(raw: str) -> float | None:
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if value >= 0 else None


async def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


async def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    sched = state.scheduler
    uptime = time.time() - state.started_at
    return (
        "Status:\n"
        f"  Capacity: {sched.capacity}\n"
        f"  Running: {sched.running_count}\n"
        f"  Queued: {sched.queued_count}\n"
        f"  Uptime: {uptime:.0f}s"
    )


async def cmd_submit(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /submit <name> <seconds>       -> sleep job
    /submit <name> <seconds> fail  -> sleep job that raises at the end
    """
    if len(args) < 2:
        return "Usage: /submit <name> <seconds> [fail]"

    name = args[0]
    seconds = _parse_seconds(args[1])
    if seconds is None:
        return f"Invalid duration: {args[1]!r} (expected a non-negative number)."

    fail = len(args) > 2 and args[2].lower() in ("fail", "error", "raise")

    try:
        state.scheduler.submit(sleep_job(seconds, fail=fail), name)
    except SchedulerClosedError:
        return "Scheduler is shutting down; task rejected."

    return f"Submitted {name!r} ({seconds:g}s{', will fail' if fail else ''})."


async def cmd_wait(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /wait <name>            -> wait with the configured default timeout
    /wait <name> <seconds>  -> wait with an explicit timeout
    """
    if not args:
        return "Usage: /wait <name> [timeout]"

    name = args[0]
    timeout = float(getattr(state.settings, "wait_timeout_seconds", 30.0))
    if len(args) > 1:
        parsed = _parse_seconds(args[1])
        if parsed is None:
            return f"Invalid timeout: {args[1]!r} (expected a non-negative number)."
        timeout = parsed

    if emit:
        emit(f"Waiting for {name!r} (timeout {timeout:g}s)...")

    t0 = time.monotonic()
    try:
        await state.scheduler.wait_for_task(name, timeout)
    except TaskWaitTimeout:
        return f"Timed out after {timeout:g}s; {name!r} is still running."

    return f"Nothing named {name!r} left in flight (waited {time.monotonic() - t0:.2f}s)."


async def cmd_tasks(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    tasks = state.scheduler.in_flight()
    if not tasks:
        return "No tasks in flight."

    now = time.monotonic()
    lines = [f"In flight ({len(tasks)}):"]
    for t in tasks:
        since = t.started_at if t.started_at is not None else t.submitted_at
        lines.append(f"  {t.label}: {t.state} for {now - since:.1f}s")
    return "\n".join(lines)


async def cmd_cancel(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return "Usage: /cancel <name>"

    count = state.scheduler.cancel_task(args[0])
    if not count:
        return f"No task named {args[0]!r} in flight."
    return f"Cancellation requested for {count} task(s) named {args[0]!r}."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show scheduler capacity and load.")
registry.register(
    "submit",
    cmd_submit,
    help_text="Start a background sleep job: /submit <name> <seconds> [fail].",
    aliases=["run"],
)
registry.register("wait", cmd_wait, help_text="Wait for tasks by name: /wait <name> [timeout].")
registry.register("tasks", cmd_tasks, help_text="List in-flight tasks.", aliases=["ls"])
registry.register("cancel", cmd_cancel, help_text="Cancel tasks by name: /cancel <name>.")
