"""Tests for completed-session records."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from focus_companion.models.focus.session import CompletedSession, to_utc_iso
from focus_companion.models.focus.timer import SessionSnapshot

START = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)
END = datetime(2026, 3, 2, 9, 25, tzinfo=timezone.utc)


def test_to_utc_iso_uses_z_suffix():
    assert to_utc_iso(START) == "2026-03-02T09:00:00Z"


def test_to_utc_iso_converts_offsets():
    local = datetime(2026, 3, 2, 11, 0, tzinfo=timezone(timedelta(hours=2)))
    assert to_utc_iso(local) == "2026-03-02T09:00:00Z"


def test_from_snapshot_copies_timer_values():
    snapshot = SessionSnapshot(start_time=START, total_seconds=1500, remaining_seconds=0)
    session = CompletedSession.from_snapshot(snapshot, score=4, notes="deep work", end_time=END)

    assert session.start_time == START
    assert session.end_time == END
    assert session.elapsed_minutes == 25
    assert session.quality_score == 4
    assert session.notes == "deep work"


def test_payload_field_names():
    session = CompletedSession(
        start_time=START, end_time=END, elapsed_minutes=25, quality_score=5, notes="ok"
    )
    assert session.to_payload() == {
        "startTime": "2026-03-02T09:00:00Z",
        "endTime": "2026-03-02T09:25:00Z",
        "duration": 25,
        "score": 5,
        "notes": "ok",
    }


def test_payload_without_start_time():
    session = CompletedSession(end_time=END, elapsed_minutes=0, quality_score=3)
    payload = session.to_payload()
    assert payload["startTime"] is None
    assert payload["notes"] == ""


def test_notes_are_stripped():
    session = CompletedSession(
        end_time=END, elapsed_minutes=1, quality_score=3, notes="  focused  \n"
    )
    assert session.notes == "focused"


@pytest.mark.parametrize("score", [0, 6, -1])
def test_score_out_of_range_rejected(score):
    with pytest.raises(ValidationError):
        CompletedSession(end_time=END, elapsed_minutes=1, quality_score=score)


def test_negative_duration_rejected():
    with pytest.raises(ValidationError):
        CompletedSession(end_time=END, elapsed_minutes=-1, quality_score=3)


def test_session_is_immutable():
    session = CompletedSession(end_time=END, elapsed_minutes=1, quality_score=3)
    with pytest.raises(ValidationError):
        session.quality_score = 5


def test_from_record_reads_api_fields():
    record = {
        "id": 4,
        "startTime": "2026-03-02T09:00:00Z",
        "endTime": "2026-03-02T09:25:00Z",
        "duration": 25,
        "score": 4,
        "notes": None,
    }
    session = CompletedSession.from_record(record)

    assert session.start_time == START
    assert session.end_time == END
    assert session.elapsed_minutes == 25
    assert session.quality_score == 4
    assert session.notes == ""


def test_from_record_without_start_time():
    session = CompletedSession.from_record(
        {"endTime": "2026-03-02T09:25:00Z", "duration": 1, "score": 2}
    )
    assert session.start_time is None
    assert session.to_payload()["startTime"] is None
