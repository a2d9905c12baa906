"""Focus timer state machine and its display helpers."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from numbers import Real
from typing import Any, Literal

from .ticker import TickHandle, TickScheduler

logger = logging.getLogger(__name__)

ColorTier = Literal["ample", "warning", "critical"]
TimerEventKind = Literal["expired", "ended_early"]

TICK_INTERVAL_SECONDS = 1.0
AMPLE_RATIO = 0.66
WARNING_RATIO = 0.33


class TimerPhase(str, Enum):
    """Observable phase of a focus timer."""

    IDLE = "idle"
    RUNNING = "running"
    EXPIRED = "expired"


@dataclass(frozen=True)
class SessionSnapshot:
    """Timer values captured at the moment a session ended."""

    start_time: datetime | None
    total_seconds: int
    remaining_seconds: int

    @property
    def elapsed_seconds(self) -> int:
        return self.total_seconds - self.remaining_seconds

    @property
    def elapsed_minutes(self) -> int:
        """Elapsed time rounded to the nearest minute, halves rounding up."""
        return (self.elapsed_seconds + 30) // 60


@dataclass(frozen=True)
class TimerEvent:
    """Published when a session ends, either naturally or through reset."""

    kind: TimerEventKind
    snapshot: SessionSnapshot


TimerListener = Callable[[TimerEvent], None]


def format_time(seconds: int) -> str:
    """Format seconds as zero-padded ``MM:SS``. Negative input shows as 00:00."""
    seconds = max(0, int(seconds))
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"


def color_tier(remaining_seconds: int, total_seconds: int) -> ColorTier:
    """Classify how much of the session is left."""
    if total_seconds <= 0:
        return "critical"
    ratio = remaining_seconds / total_seconds
    if ratio > AMPLE_RATIO:
        return "ample"
    if ratio > WARNING_RATIO:
        return "warning"
    return "critical"


def is_valid_minutes(value: Any) -> bool:
    """True for finite, positive real numbers (booleans excluded)."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value) and value > 0


def minutes_to_seconds(minutes: float) -> int:
    """Whole minutes in seconds, never less than one minute."""
    return max(1, math.floor(minutes)) * 60


class FocusTimer:
    """Countdown controller for a single focus session widget.

    ``remaining_seconds`` only moves while ``running`` and only by one per
    tick. Ticks come from the injected ``TickScheduler``; without one the
    owner calls :meth:`tick` itself. Session ends are published to
    subscribers as :class:`TimerEvent` values and can also be polled through
    :attr:`phase`.
    """

    def __init__(
        self,
        minutes: float = 5,
        scheduler: TickScheduler | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        if not is_valid_minutes(minutes):
            raise ValueError(f"minutes must be a positive number, got {minutes!r}")
        self.input_minutes = minutes
        self.total_seconds = minutes_to_seconds(minutes)
        self.remaining_seconds = self.total_seconds
        self.running = False
        self.session_start: datetime | None = None

        self._scheduler = scheduler
        self._clock = clock or (lambda: datetime.now().astimezone())
        self._tick_handle: TickHandle | None = None
        self._listeners: list[TimerListener] = []

    # -- observation ---------------------------------------------------------

    @property
    def phase(self) -> TimerPhase:
        if self.running:
            return TimerPhase.RUNNING
        if self.remaining_seconds == 0:
            return TimerPhase.EXPIRED
        return TimerPhase.IDLE

    @property
    def display(self) -> str:
        return format_time(self.remaining_seconds)

    def color_tier(self) -> ColorTier:
        return color_tier(self.remaining_seconds, self.total_seconds)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            start_time=self.session_start,
            total_seconds=self.total_seconds,
            remaining_seconds=self.remaining_seconds,
        )

    def subscribe(self, listener: TimerListener) -> Callable[[], None]:
        """Register *listener* for session-end events. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -- intents -------------------------------------------------------------

    def start_pause(self) -> TimerPhase:
        """Toggle between idle and running.

        An expired timer stays expired until it is reset or acknowledged.
        """
        if self.phase is TimerPhase.EXPIRED:
            logger.debug("start_pause ignored: timer expired")
            return self.phase

        if self.running:
            self.running = False
            self._cancel_tick()
            logger.debug("Paused with %ss remaining", self.remaining_seconds)
        else:
            self.session_start = self._clock()
            self.running = True
            self._schedule_tick()
            logger.debug("Started with %ss remaining", self.remaining_seconds)
        return self.phase

    def tick(self) -> None:
        """Advance the countdown by one second."""
        if not self.running:
            return

        self.remaining_seconds -= 1
        if self.remaining_seconds > 0:
            return

        self.remaining_seconds = 0
        self.running = False
        self._cancel_tick()
        logger.debug("Session expired after %ss", self.total_seconds)
        self._emit(TimerEvent("expired", self.snapshot()))

    def reset(self) -> None:
        """Stop and re-arm at the last configured duration.

        A run that was started or partially consumed is reported as
        ``ended_early`` first, using values captured before re-arming.
        """
        ended_early = self.running or 0 < self.remaining_seconds < self.total_seconds
        snapshot = self.snapshot()

        self.running = False
        self._cancel_tick()

        if ended_early:
            logger.debug(
                "Session ended early with %ss remaining", snapshot.remaining_seconds
            )
            self._emit(TimerEvent("ended_early", snapshot))

        self.total_seconds = minutes_to_seconds(self.input_minutes)
        self.remaining_seconds = self.total_seconds
        self.session_start = None

    def set_duration(self, minutes: Any) -> bool:
        """Configure the session length. Returns whether *minutes* was accepted.

        Non-numeric, non-finite and non-positive values are ignored, as is
        any change while the timer is running.
        """
        if self.running:
            logger.debug("set_duration(%r) ignored: timer running", minutes)
            return False
        if not is_valid_minutes(minutes):
            logger.debug("set_duration(%r) ignored: invalid value", minutes)
            return False

        self.input_minutes = minutes
        self.total_seconds = minutes_to_seconds(minutes)
        self.remaining_seconds = self.total_seconds
        return True

    def acknowledge(self, snapshot: SessionSnapshot | None = None) -> None:
        """Close out a finished session once its summary has been stored.

        Clears ``session_start`` and re-arms an expired timer at the last
        configured duration. Only the expired run is touched: a timer that
        was reset (and possibly started again) since *snapshot* was taken is
        left alone.
        """
        if self.phase is not TimerPhase.EXPIRED:
            return
        if snapshot is not None and (
            snapshot.remaining_seconds or snapshot.start_time != self.session_start
        ):
            return
        self.session_start = None
        self.total_seconds = minutes_to_seconds(self.input_minutes)
        self.remaining_seconds = self.total_seconds

    def dispose(self) -> None:
        """Tear down the tick source and drop all subscribers."""
        self.running = False
        self._cancel_tick()
        self._listeners.clear()

    # -- internals -----------------------------------------------------------

    def _schedule_tick(self) -> None:
        self._cancel_tick()
        if self._scheduler is not None:
            self._tick_handle = self._scheduler.schedule_repeating(
                TICK_INTERVAL_SECONDS, self.tick
            )

    def _cancel_tick(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None

    def _emit(self, event: TimerEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
