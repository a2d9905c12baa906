"""Keyboard controls for the fullscreen timer.

Key sources are polled, never awaited: each ``get_key`` call returns at once
with the next pending keypress (lower-cased) or ``None``.
"""

import sys
from typing import Literal, Optional, Protocol

TimerAction = Literal["start_pause", "reset", "quit"]

KEY_BINDINGS: dict[str, TimerAction] = {
    " ": "start_pause",
    "p": "start_pause",
    "r": "reset",
    "q": "quit",
}

# Windows prefixes arrow and function keys with one of these bytes
_WINDOWS_EXTENDED_PREFIXES = (b"\x00", b"\xe0")


class KeySource(Protocol):
    """Non-blocking source of single keypresses."""

    def get_key(self) -> Optional[str]: ...

    def stop(self) -> None: ...


def poll_action(source: KeySource) -> Optional[TimerAction]:
    """Read one pending key from *source* and translate it to a timer action."""
    key = source.get_key()
    if key is None:
        return None
    return KEY_BINDINGS.get(key)


class KeyboardHandler:
    """Reads keys from a POSIX terminal in cbreak mode."""

    def __init__(self):
        self.fd = sys.stdin.fileno()
        self.old_settings = None
        self._setup()

    def _setup(self):
        import termios
        import tty

        try:
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except termios.error:
            # stdin is not a terminal (piped input, CI)
            self.old_settings = None

    def get_key(self) -> Optional[str]:
        import select

        try:
            ready, _, _ = select.select([sys.stdin], [], [], 0)
            if not ready:
                return None
            key = sys.stdin.read(1)
        except (OSError, ValueError):
            return None
        return key.lower() if key else None

    def stop(self):
        """Put the terminal back the way it was found."""
        if not self.old_settings:
            return
        import termios

        try:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
        except termios.error:
            pass
        self.old_settings = None


class WindowsKeyboardHandler:
    """Reads keys from the Windows console through msvcrt."""

    def __init__(self):
        try:
            import msvcrt
        except ImportError:
            msvcrt = None
        self.msvcrt = msvcrt

    def get_key(self) -> Optional[str]:
        if self.msvcrt is None or not self.msvcrt.kbhit():
            return None

        key = self.msvcrt.getch()
        if key in _WINDOWS_EXTENDED_PREFIXES:
            # Drop the scan code that follows; no timer control uses it
            self.msvcrt.getch()
            return None
        return key.decode("utf-8", errors="ignore").lower() or None

    def stop(self):
        pass


def get_keyboard_handler() -> KeySource:
    """Return the keyboard handler for the current platform."""
    if sys.platform == "win32":
        return WindowsKeyboardHandler()
    return KeyboardHandler()
