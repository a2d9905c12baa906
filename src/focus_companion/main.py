"""Main entry point for Focus Companion CLI."""

import typer

from focus_companion import __version__
from focus_companion.commands import auth, config, timer
from focus_companion.utils.logger import get_logger, log_file_path
from focus_companion.utils.typer_helpers import SuggestingGroup
from focus_companion.utils.ui.console import get_console

app = typer.Typer(
    name="focus-companion",
    cls=SuggestingGroup,
    help="Pomodoro focus timer with session journaling",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(timer.app, name="timer", help="Pomodoro focus timer")
app.add_typer(auth.app, name="auth", help="Authentication commands")
app.add_typer(config.app, name="config", help="Configuration management")


@app.callback()
def main_callback() -> None:
    """Pomodoro focus timer with session journaling."""
    get_logger().debug("focus-companion %s starting", __version__)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Focus Companion CLI[/bold] version [cyan]{__version__}[/cyan]")
    console.print(f"[dim]Log file: {log_file_path()}[/dim]")


if __name__ == "__main__":
    app()
