"""Focus mode - Pomodoro timer system for Focus Companion CLI."""

from .keyboard import KeyboardHandler, get_keyboard_handler, poll_action
from .session import CompletedSession
from .summary import SessionSummaryManager, SubmitResult, SummaryRequest
from .ticker import AsyncioTickScheduler, RepeatingTick
from .timer import (
    FocusTimer,
    SessionSnapshot,
    TimerEvent,
    TimerPhase,
    color_tier,
    format_time,
)
from .ui import TimerDisplay, show_session_ended_message

__all__ = [
    "AsyncioTickScheduler",
    "CompletedSession",
    "FocusTimer",
    "KeyboardHandler",
    "RepeatingTick",
    "SessionSnapshot",
    "SessionSummaryManager",
    "SubmitResult",
    "SummaryRequest",
    "TimerDisplay",
    "TimerEvent",
    "TimerPhase",
    "color_tier",
    "format_time",
    "get_keyboard_handler",
    "poll_action",
    "show_session_ended_message",
]
