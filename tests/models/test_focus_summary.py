"""Tests for the session summary hand-off."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import httpx
import pytest
from pydantic import ValidationError

from focus_companion.api.errors import APIError, MissingCredentialsError
from focus_companion.models.focus.session import CompletedSession
from focus_companion.models.focus.summary import SessionSummaryManager
from focus_companion.models.focus.timer import FocusTimer, TimerPhase

END = datetime(2026, 3, 2, 9, 35, tzinfo=timezone.utc)


@pytest.fixture
def store():
    store = AsyncMock()
    store.create_session.return_value = {"id": 7}
    return store


@pytest.fixture
def timer(manual_scheduler, fixed_clock):
    return FocusTimer(5, scheduler=manual_scheduler, clock=fixed_clock)


@pytest.fixture
def summary(timer, store):
    return SessionSummaryManager(timer, store, clock=lambda: END)


def test_nothing_pending_initially(summary):
    assert summary.pending is None
    assert summary.awaiting_summary is False
    assert summary.status == "idle"


def test_expiry_opens_summary_request(summary, timer, manual_scheduler):
    timer.start_pause()
    manual_scheduler.advance(300)

    assert summary.awaiting_summary
    assert summary.pending.ended_early is False
    assert summary.pending.score == 3
    assert summary.pending.notes == ""
    assert summary.pending.elapsed_minutes == 5


def test_reset_opens_ended_early_request(summary, timer, manual_scheduler):
    timer.start_pause()
    manual_scheduler.advance(100)
    timer.reset()

    assert summary.pending.ended_early is True
    assert summary.pending.elapsed_minutes == 2


def test_build_session_without_pending_raises(summary):
    with pytest.raises(RuntimeError):
        summary.build_session()


@pytest.mark.asyncio
async def test_submit_without_pending_raises(summary):
    with pytest.raises(RuntimeError):
        await summary.submit(4)


@pytest.mark.asyncio
async def test_full_session_flow(summary, timer, store, manual_scheduler, fixed_clock):
    timer.start_pause()
    manual_scheduler.advance(300)
    assert timer.phase is TimerPhase.EXPIRED

    result = await summary.submit(4, "focused well")

    assert result.ok is True
    assert result.record == {"id": 7}
    store.create_session.assert_awaited_once()
    sent: CompletedSession = store.create_session.await_args.args[0]
    payload = sent.to_payload()
    assert payload["duration"] == 5
    assert payload["score"] == 4
    assert payload["notes"] == "focused well"
    assert sent.start_time == fixed_clock()
    assert sent.end_time == END

    assert summary.status == "success"
    assert summary.pending is None
    assert timer.phase is TimerPhase.IDLE
    assert timer.remaining_seconds == 300
    assert timer.session_start is None


@pytest.mark.asyncio
async def test_submit_uses_defaults(summary, timer, store, manual_scheduler):
    timer.start_pause()
    manual_scheduler.advance(60)
    timer.reset()

    await summary.submit()

    sent = store.create_session.await_args.args[0]
    assert sent.quality_score == 3
    assert sent.notes == ""
    assert sent.elapsed_minutes == 1


@pytest.mark.asyncio
async def test_invalid_score_rejected_before_request(summary, timer, store, manual_scheduler):
    timer.start_pause()
    manual_scheduler.advance(300)

    with pytest.raises(ValidationError):
        await summary.submit(9)

    store.create_session.assert_not_awaited()
    assert summary.pending is not None


@pytest.mark.asyncio
async def test_store_failure_keeps_request_for_retry(summary, timer, store, manual_scheduler):
    timer.start_pause()
    manual_scheduler.advance(300)
    store.create_session.side_effect = APIError(500)

    result = await summary.submit(2, "meh")

    assert result.ok is False
    assert result.error == "Failed to save session (Status: 500)"
    assert summary.status == "error"
    assert summary.error_message == result.error
    assert summary.is_submitting is False
    assert summary.pending.score == 2
    assert summary.pending.notes == "meh"
    assert timer.phase is TimerPhase.EXPIRED

    store.create_session.side_effect = None
    retry = await summary.submit()
    assert retry.ok is True
    assert store.create_session.await_count == 2
    assert store.create_session.await_args.args[0].quality_score == 2


@pytest.mark.asyncio
async def test_server_message_is_reported(summary, timer, store, manual_scheduler):
    timer.start_pause()
    manual_scheduler.advance(300)
    store.create_session.side_effect = APIError(400, "Score must be between 1 and 5")

    result = await summary.submit(3)
    assert result.error == "Score must be between 1 and 5"


@pytest.mark.asyncio
async def test_missing_token_reported(summary, timer, store, manual_scheduler):
    timer.start_pause()
    manual_scheduler.advance(300)
    store.create_session.side_effect = MissingCredentialsError()

    result = await summary.submit(3)
    assert result.error == "No authentication token available"


@pytest.mark.asyncio
async def test_network_failure_reported(summary, timer, store, manual_scheduler):
    timer.start_pause()
    manual_scheduler.advance(300)
    store.create_session.side_effect = httpx.ConnectError("connection refused")

    result = await summary.submit(3)
    assert result.ok is False
    assert result.error == "connection refused"


def test_discard_clears_request_and_rearms(summary, timer, manual_scheduler):
    timer.start_pause()
    manual_scheduler.advance(300)

    summary.discard()

    assert summary.pending is None
    assert timer.phase is TimerPhase.IDLE
    assert timer.remaining_seconds == 300


def test_close_stops_listening(summary, timer, manual_scheduler):
    summary.close()
    timer.start_pause()
    manual_scheduler.advance(300)
    assert summary.pending is None


@pytest.mark.asyncio
async def test_saving_old_summary_keeps_paused_new_run(
    summary, timer, store, manual_scheduler, fixed_clock
):
    timer.start_pause()
    manual_scheduler.advance(60)
    timer.reset()
    timer.start_pause()
    manual_scheduler.advance(120)
    timer.start_pause()

    result = await summary.submit(4, "first")

    assert result.ok is True
    assert store.create_session.await_args.args[0].elapsed_minutes == 1
    assert timer.session_start == fixed_clock()
    assert timer.remaining_seconds == 180


@pytest.mark.asyncio
async def test_session_ending_while_summary_unsaved_is_queued(
    summary, timer, store, manual_scheduler, mocker
):
    log = mocker.patch("focus_companion.models.focus.summary.logger")
    timer.start_pause()
    manual_scheduler.advance(60)
    timer.reset()
    first = summary.pending

    timer.start_pause()
    manual_scheduler.advance(300)

    assert summary.pending is first
    assert [r.event.kind for r in summary.backlog] == ["expired"]
    log.warning.assert_called_once()

    await summary.submit(2)
    assert store.create_session.await_args.args[0].elapsed_minutes == 1
    assert summary.pending.event.kind == "expired"
    assert timer.phase is TimerPhase.EXPIRED

    await summary.submit(5)
    assert store.create_session.await_args.args[0].elapsed_minutes == 5
    assert summary.pending is None
    assert not summary.backlog
    assert timer.phase is TimerPhase.IDLE


def test_discard_moves_to_queued_summary(summary, timer, manual_scheduler):
    timer.start_pause()
    manual_scheduler.advance(60)
    timer.reset()
    timer.start_pause()
    manual_scheduler.advance(300)

    summary.discard()

    assert summary.pending.event.kind == "expired"
    assert timer.phase is TimerPhase.EXPIRED
