"""Tests for the asyncio tick source."""

import asyncio

import pytest

from focus_companion.models.focus import timer as timer_mod
from focus_companion.models.focus.ticker import AsyncioTickScheduler, RepeatingTick
from focus_companion.models.focus.timer import FocusTimer, TimerPhase


@pytest.mark.asyncio
async def test_repeating_tick_fires_until_cancelled():
    loop = asyncio.get_running_loop()
    done = loop.create_future()
    calls = []

    def callback():
        calls.append(loop.time())
        if len(calls) == 3:
            tick.cancel()
            done.set_result(None)

    tick = RepeatingTick(loop, 0.01, callback)
    await asyncio.wait_for(done, timeout=5)
    await asyncio.sleep(0.05)

    assert len(calls) == 3
    assert tick.cancelled is True


@pytest.mark.asyncio
async def test_cancel_is_idempotent():
    tick = RepeatingTick(asyncio.get_running_loop(), 0.01, lambda: None)
    tick.cancel()
    tick.cancel()
    assert tick.cancelled


@pytest.mark.asyncio
async def test_non_positive_interval_rejected():
    with pytest.raises(ValueError):
        RepeatingTick(asyncio.get_running_loop(), 0, lambda: None)


@pytest.mark.asyncio
async def test_scheduler_uses_running_loop():
    scheduler = AsyncioTickScheduler()
    tick = scheduler.schedule_repeating(1.0, lambda: None)
    assert isinstance(tick, RepeatingTick)
    tick.cancel()


@pytest.mark.asyncio
async def test_timer_counts_down_on_event_loop(monkeypatch):
    monkeypatch.setattr(timer_mod, "TICK_INTERVAL_SECONDS", 0.001)
    loop = asyncio.get_running_loop()
    expired = loop.create_future()

    timer = FocusTimer(1, scheduler=AsyncioTickScheduler())
    timer.subscribe(lambda event: expired.set_result(event))
    timer.start_pause()

    event = await asyncio.wait_for(expired, timeout=10)

    assert event.kind == "expired"
    assert timer.remaining_seconds == 0
    assert timer.phase is TimerPhase.EXPIRED
    assert timer._tick_handle is None


@pytest.mark.asyncio
async def test_pause_stops_event_loop_ticks(monkeypatch):
    monkeypatch.setattr(timer_mod, "TICK_INTERVAL_SECONDS", 0.001)
    timer = FocusTimer(1, scheduler=AsyncioTickScheduler())
    timer.start_pause()
    await asyncio.sleep(0.01)
    timer.start_pause()
    paused_at = timer.remaining_seconds

    await asyncio.sleep(0.02)

    assert timer.remaining_seconds == paused_at
    assert paused_at < 60
    timer.dispose()
