"""Session summary hand-off between the focus timer and the session store."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Protocol

import httpx

from focus_companion.api.errors import APIError, FocusCompanionError

from .session import DEFAULT_SCORE, CompletedSession
from .timer import FocusTimer, TimerEvent

logger = logging.getLogger(__name__)

SubmitStatus = Literal["idle", "success", "error"]


class SessionStore(Protocol):
    """Anything that can persist a completed session."""

    async def create_session(self, session: CompletedSession) -> dict: ...


@dataclass
class SummaryRequest:
    """A finished session waiting for the user's score and notes."""

    event: TimerEvent
    score: int = DEFAULT_SCORE
    notes: str = ""

    @property
    def ended_early(self) -> bool:
        return self.event.kind == "ended_early"

    @property
    def elapsed_minutes(self) -> int:
        return self.event.snapshot.elapsed_minutes


@dataclass
class SubmitResult:
    """Outcome of one save attempt."""

    ok: bool
    record: dict | None = None
    error: str | None = None


class SessionSummaryManager:
    """Collects a summary for each finished session and stores it.

    Subscribes to the timer on construction. Every ``expired`` or
    ``ended_early`` event opens a :class:`SummaryRequest`. The request is
    closed, and the timer acknowledged, only after the store confirms the
    save; a failed save keeps the request open for the user to retry.
    Sessions that end while a request is still open wait in :attr:`backlog`
    and become pending, oldest first, as earlier ones are closed.
    """

    def __init__(
        self,
        timer: FocusTimer,
        store: SessionStore,
        clock: Callable[[], datetime] | None = None,
    ):
        self.timer = timer
        self.store = store
        self.pending: SummaryRequest | None = None
        self.backlog: deque[SummaryRequest] = deque()
        self.status: SubmitStatus = "idle"
        self.error_message = ""
        self.is_submitting = False
        self._clock = clock or (lambda: datetime.now().astimezone())
        self._unsubscribe = timer.subscribe(self._on_timer_event)

    @property
    def awaiting_summary(self) -> bool:
        return self.pending is not None

    def _on_timer_event(self, event: TimerEvent) -> None:
        if self.pending is not None:
            logger.warning(
                "Session ended (%s) while an earlier summary is unsaved; queued",
                event.kind,
            )
            self.backlog.append(SummaryRequest(event))
            return
        self.pending = SummaryRequest(event)
        self.status = "idle"
        self.error_message = ""

    def _close_pending(self) -> None:
        closed = self.pending
        self.pending = self.backlog.popleft() if self.backlog else None
        if closed is not None:
            self.timer.acknowledge(closed.event.snapshot)

    def build_session(self) -> CompletedSession:
        """Assemble the record for the pending request, ending now.

        Raises:
            RuntimeError: If no session is awaiting a summary.
            pydantic.ValidationError: If the score is outside 1-5.
        """
        if self.pending is None:
            raise RuntimeError("No session is awaiting a summary")
        return CompletedSession.from_snapshot(
            self.pending.event.snapshot,
            score=self.pending.score,
            notes=self.pending.notes,
            end_time=self._clock(),
        )

    async def submit(
        self, score: int | None = None, notes: str | None = None
    ) -> SubmitResult:
        """Store the pending session with the given score and notes.

        Invalid scores raise before any request is made. Store failures are
        reported in the result and in :attr:`error_message`.
        """
        if self.pending is None:
            raise RuntimeError("No session is awaiting a summary")
        if score is not None:
            self.pending.score = score
        if notes is not None:
            self.pending.notes = notes

        session = self.build_session()

        self.is_submitting = True
        self.status = "idle"
        self.error_message = ""
        try:
            record = await self.store.create_session(session)
        except (FocusCompanionError, httpx.HTTPError) as e:
            self.status = "error"
            self.error_message = _describe_failure(e)
            logger.warning("Saving session failed: %s", self.error_message)
            return SubmitResult(ok=False, error=self.error_message)
        finally:
            self.is_submitting = False

        self.status = "success"
        self._close_pending()
        logger.info(
            "Saved %s-minute session (score %s)",
            session.elapsed_minutes,
            session.quality_score,
        )
        return SubmitResult(ok=True, record=record)

    def discard(self) -> None:
        """Drop the pending summary without storing it."""
        if self.pending is not None:
            logger.info("Discarded summary for %s-minute session", self.pending.elapsed_minutes)
        self._close_pending()
        self.status = "idle"
        self.error_message = ""

    def close(self) -> None:
        """Stop listening to the timer."""
        self._unsubscribe()


def _describe_failure(error: Exception) -> str:
    if isinstance(error, APIError) and not error.server_message:
        return f"Failed to save session (Status: {error.status_code})"
    return str(error) or "An unexpected error occurred"
