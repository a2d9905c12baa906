"""Shared rich console for Focus Companion CLI output."""

from functools import lru_cache

from rich.console import Console
from rich.theme import Theme

# Countdown colours, keyed by remaining-time tier
FOCUS_THEME = Theme(
    {
        "tier.ample": "bold green",
        "tier.warning": "bold yellow",
        "tier.critical": "bold red",
    }
)


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """Get the shared Rich Console, carrying the countdown tier styles."""
    return Console(highlight=highlight, theme=FOCUS_THEME)
