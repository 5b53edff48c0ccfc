"""Deferred task scheduling for delayed session actions."""

import asyncio
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol


class ScheduledTask(Protocol):
    """Handle for a deferred callback."""

    def cancel(self) -> None:
        """Cancel the callback; safe to call after it ran or twice."""


class Scheduler(Protocol):
    """Interface for running a callback after a delay."""

    def call_later(
        self, delay_seconds: float, callback: Callable[[], None]
    ) -> ScheduledTask:
        """Schedule a fire-and-forget callback."""


@dataclass
class _LoopTask(ScheduledTask):
    handle: asyncio.TimerHandle

    def cancel(self) -> None:
        self.handle.cancel()


@dataclass
class _TimerTask(ScheduledTask):
    timer: threading.Timer

    def cancel(self) -> None:
        self.timer.cancel()


class AsyncioScheduler(Scheduler):
    """Scheduler that uses the running event loop, or a timer thread outside one."""

    def call_later(
        self, delay_seconds: float, callback: Callable[[], None]
    ) -> ScheduledTask:
        """Schedule ``callback`` after ``delay_seconds``."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            timer = threading.Timer(delay_seconds, callback)
            timer.daemon = True
            timer.start()
            return _TimerTask(timer)
        return _LoopTask(loop.call_later(delay_seconds, callback))
