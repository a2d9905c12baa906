"""Repeating tick sources for the focus timer.

The timer never owns a clock loop of its own. Whoever constructs a
``FocusTimer`` injects a ``TickScheduler``; every ``schedule_repeating`` call
returns a ``TickHandle`` the timer cancels as soon as it stops running.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Protocol


class TickHandle(Protocol):
    """Cancellation handle for a scheduled repeating tick."""

    @property
    def cancelled(self) -> bool: ...

    def cancel(self) -> None: ...


class TickScheduler(Protocol):
    """Creates repeating tick sources."""

    def schedule_repeating(
        self, interval: float, callback: Callable[[], None]
    ) -> TickHandle: ...


class RepeatingTick:
    """A repeating callback on an asyncio event loop.

    Deadlines are computed from the first scheduling time rather than from
    each callback, so slow callbacks do not make the countdown drift.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        interval: float,
        callback: Callable[[], None],
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._cancelled = False
        self._deadline = loop.time() + interval
        self._handle: asyncio.TimerHandle | None = loop.call_at(
            self._deadline, self._fire
        )

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def _fire(self) -> None:
        if self._cancelled:
            return
        self._deadline += self._interval
        self._handle = self._loop.call_at(self._deadline, self._fire)
        # The callback may cancel this tick; that drops the handle above.
        self._callback()

    def cancel(self) -> None:
        """Stop the tick. Safe to call more than once."""
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class AsyncioTickScheduler:
    """Schedules ticks on the running (or a given) asyncio loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def schedule_repeating(
        self, interval: float, callback: Callable[[], None]
    ) -> RepeatingTick:
        loop = self._loop or asyncio.get_running_loop()
        return RepeatingTick(loop, interval, callback)
