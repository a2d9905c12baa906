"""Full-screen timer UI for focus mode."""

import asyncio
from typing import Literal

from rich.align import Align
from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from focus_companion.utils.ui.console import get_console

from .keyboard import KeySource, get_keyboard_handler, poll_action
from .summary import SessionSummaryManager, SummaryRequest
from .timer import ColorTier, FocusTimer, TimerPhase

RunOutcome = Literal["expired", "ended_early", "quit"]

TIER_STYLES: dict[ColorTier, str] = {
    "ample": "tier.ample",
    "warning": "tier.warning",
    "critical": "tier.critical",
}

POLL_INTERVAL_SECONDS = 0.1


class TimerDisplay:
    """Manages the fullscreen timer display."""

    def __init__(self, console: Console | None = None):
        self.console = console or get_console()

    def create_layout(self, timer: FocusTimer) -> Layout:
        """Create the timer layout with all components."""
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=3),
        )

        phase = timer.phase
        if phase is TimerPhase.RUNNING:
            emoji, title, color = "🍅", "Focus Companion", "cyan"
        elif phase is TimerPhase.EXPIRED:
            emoji, title, color = "✓", "TIME'S UP", "green"
        elif timer.session_start is not None:
            emoji, title, color = "⏸️ ", "PAUSED", "yellow"
        else:
            emoji, title, color = "⏱️ ", "READY", "white"

        header_text = Text(f"{emoji}  {title}", style=f"bold {color}", justify="center")
        layout["header"].update(Align.center(header_text, vertical="middle"))
        layout["body"].update(Align.center(self._create_body_content(timer), vertical="middle"))
        layout["footer"].update(Align.center(self._create_footer_text(timer), vertical="middle"))

        return layout

    def _create_body_content(self, timer: FocusTimer) -> Group:
        """Create the countdown and progress bar."""
        tier_style = TIER_STYLES[timer.color_tier()]

        big_timer = Text(justify="center")
        big_timer.append(" " * 10)
        big_timer.append(timer.display, style=tier_style)
        big_timer.append(" " * 10)

        total_seconds = timer.total_seconds
        elapsed = total_seconds - timer.remaining_seconds
        progress_pct = (
            min(100, int((elapsed / total_seconds) * 100)) if total_seconds > 0 else 0
        )

        bar_width = 40
        filled = int(bar_width * progress_pct / 100)
        progress_bar = "▓" * filled + "░" * (bar_width - filled)

        progress_text = Text(justify="center")
        progress_text.append(progress_bar + f"  {progress_pct}%", style="dim")

        return Group(big_timer, Text(""), progress_text)

    def _create_footer_text(self, timer: FocusTimer) -> Text:
        """Create footer with keyboard hints."""
        action = "pause" if timer.running else "start"
        hints = f"Press 'space' to {action}  •  'r' to reset  •  'q' to quit"
        return Text(hints, style="dim", justify="center")

    async def run_timer(
        self,
        timer: FocusTimer,
        summary: SessionSummaryManager,
        keyboard: KeySource | None = None,
        autostart: bool = True,
    ) -> RunOutcome:
        """
        Run the fullscreen timer until a session ends or the user quits.

        Returns 'expired', 'ended_early' or 'quit'.
        """
        keyboard = keyboard or get_keyboard_handler()
        if autostart and timer.phase is TimerPhase.IDLE:
            timer.start_pause()

        try:
            with Live(
                self.create_layout(timer),
                console=self.console,
                refresh_per_second=4,
                screen=True,
            ) as live:
                while summary.pending is None:
                    action = poll_action(keyboard)
                    if action == "start_pause":
                        timer.start_pause()
                    elif action == "reset":
                        timer.reset()
                    elif action == "quit":
                        return "quit"

                    live.update(self.create_layout(timer))
                    await asyncio.sleep(POLL_INTERVAL_SECONDS)
        finally:
            keyboard.stop()

        return summary.pending.event.kind


def show_session_ended_message(request: SummaryRequest, console: Console | None = None):
    """Show a panel when a session ends, before asking for its summary."""
    console = console or get_console()
    snapshot = request.event.snapshot

    if request.ended_early:
        title = "[yellow]Session Ended Early[/yellow]"
        border = "yellow"
    else:
        title = "[bold green]🎉 Focus Session Complete![/bold green]"
        border = "green"

    planned_minutes = snapshot.total_seconds // 60
    panel = Panel(
        f"""{title}

Planned: {planned_minutes} minutes
Time focused: {request.elapsed_minutes} minutes

How did your focus session go?""",
        border_style=border,
        padding=(1, 2),
    )

    console.print(panel)
