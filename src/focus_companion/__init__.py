"""Focus Companion CLI - Pomodoro focus timer with session journaling."""

__version__ = "0.1.0"
