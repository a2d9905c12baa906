"""Completed-session records handed to the session store."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .timer import SessionSnapshot

MIN_SCORE = 1
MAX_SCORE = 5
DEFAULT_SCORE = 3


def to_utc_iso(value: datetime) -> str:
    """Render a datetime as a UTC ISO-8601 string with a ``Z`` suffix."""
    if value.tzinfo is None:
        value = value.astimezone()
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class CompletedSession(BaseModel):
    """Outcome of one focus session, as sent to ``POST /api/pomodoro``."""

    model_config = ConfigDict(frozen=True)

    start_time: Optional[datetime] = None
    end_time: datetime
    elapsed_minutes: int = Field(ge=0)
    quality_score: int = Field(ge=MIN_SCORE, le=MAX_SCORE)
    notes: str = ""

    @field_validator("notes")
    @classmethod
    def strip_notes(cls, v: str) -> str:
        return v.strip()

    @classmethod
    def from_snapshot(
        cls,
        snapshot: SessionSnapshot,
        *,
        score: int,
        notes: str,
        end_time: datetime,
    ) -> "CompletedSession":
        """Assemble a session from the timer values captured when it ended."""
        return cls(
            start_time=snapshot.start_time,
            end_time=end_time,
            elapsed_minutes=snapshot.elapsed_minutes,
            quality_score=score,
            notes=notes,
        )

    @classmethod
    def from_record(cls, record: dict) -> "CompletedSession":
        """Rebuild a session from a record returned by the API."""
        return cls(
            start_time=record.get("startTime"),
            end_time=record["endTime"],
            elapsed_minutes=record.get("duration", 0),
            quality_score=record.get("score", DEFAULT_SCORE),
            notes=record.get("notes") or "",
        )

    def to_payload(self) -> dict:
        """Wire representation expected by the API."""
        return {
            "startTime": to_utc_iso(self.start_time) if self.start_time else None,
            "endTime": to_utc_iso(self.end_time),
            "duration": self.elapsed_minutes,
            "score": self.quality_score,
            "notes": self.notes,
        }
