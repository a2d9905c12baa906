"""Pomodoro focus timer commands for Focus Companion CLI."""

import asyncio

import typer
from rich.prompt import Confirm, IntPrompt, Prompt

from focus_companion.api.client import APIClient
from focus_companion.api.pomodoro import PomodoroAPI
from focus_companion.config import get_config_manager
from focus_companion.models.focus.session import (
    DEFAULT_SCORE,
    MAX_SCORE,
    MIN_SCORE,
    CompletedSession,
)
from focus_companion.models.focus.summary import SessionSummaryManager
from focus_companion.models.focus.ticker import AsyncioTickScheduler
from focus_companion.models.focus.timer import FocusTimer, format_time, is_valid_minutes
from focus_companion.models.focus.ui import TimerDisplay, show_session_ended_message
from focus_companion.utils.exit_codes import ERROR_INVALID_ARGS
from focus_companion.utils.typer_helpers import SuggestingGroup
from focus_companion.utils.ui.console import get_console
from focus_companion.utils.ui.formatters import (
    format_error,
    format_output,
    format_sessions_table,
    format_success,
    format_warning,
    score_emoji,
)

from .utils import API_ERRORS, handle_api_error

console = get_console()
app = typer.Typer(cls=SuggestingGroup, help="Pomodoro focus timer")


def prompt_summary(default_score: int = DEFAULT_SCORE, default_notes: str = "") -> tuple[int, str]:
    """Ask for the session score and notes."""
    score = IntPrompt.ask(
        f"{score_emoji(default_score)} Your score ({MIN_SCORE}-{MAX_SCORE})",
        choices=[str(i) for i in range(MIN_SCORE, MAX_SCORE + 1)],
        default=default_score,
        console=console,
    )
    notes = Prompt.ask(
        "📝 Notes (optional)",
        default=default_notes,
        show_default=False,
        console=console,
    )
    return score, notes


async def collect_summary(summary: SessionSummaryManager) -> bool:
    """Prompt for the pending summary and save it, offering manual retries.

    Returns True once the session is stored, False if the user gives up.
    """
    request = summary.pending
    if request is None:
        return False

    show_session_ended_message(request, console)
    while True:
        score, notes = prompt_summary(request.score, request.notes)
        result = await summary.submit(score, notes)
        if result.ok:
            format_success(f"Session saved ({score_emoji(score)} {score}/{MAX_SCORE})")
            return True

        format_error(result.error or "Failed to save session")
        if not Confirm.ask("Retry saving this session?", default=True, console=console):
            summary.discard()
            format_warning("Session summary discarded")
            return False


@app.command("start")
def start_timer(
    minutes: float | None = typer.Option(
        None, "--minutes", "-m", help="Session duration in minutes"
    ),
    paused: bool = typer.Option(
        False, "--paused", help="Open the timer without starting the countdown"
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
):
    """Start a focus session with a fullscreen countdown."""
    config_manager = get_config_manager(profile)
    if minutes is None:
        minutes = config_manager.config.timer.default_minutes
    if not is_valid_minutes(minutes):
        format_error("Duration must be a positive number of minutes")
        raise typer.Exit(ERROR_INVALID_ARGS)

    if not config_manager.get_token():
        format_warning(
            "Not logged in - sessions cannot be saved until you run "
            "'focus-companion auth login'"
        )

    async def _start():
        client = APIClient(profile)
        timer = FocusTimer(minutes, scheduler=AsyncioTickScheduler())
        summary = SessionSummaryManager(timer, PomodoroAPI(client))
        display = TimerDisplay(console)

        try:
            autostart = not paused
            while True:
                outcome = await display.run_timer(timer, summary, autostart=autostart)
                if outcome == "quit":
                    console.print("\n[yellow]Timer stopped[/yellow]\n")
                    return

                while summary.pending is not None:
                    await collect_summary(summary)
                if not Confirm.ask("Start another session?", default=False, console=console):
                    return
                autostart = True
        finally:
            summary.close()
            timer.dispose()
            await client.close()

    try:
        asyncio.run(_start())
    except KeyboardInterrupt:
        console.print("\n[yellow]Timer stopped[/yellow]\n")


@app.command("history")
def session_history(
    limit: int | None = typer.Option(
        None, "--limit", "-n", min=1, help="Show only the latest N sessions"
    ),
    output: str = typer.Option("table", "--output", "-o", help="Output format (table, json, yaml)"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
):
    """Show stored focus sessions."""

    async def _history():
        client = APIClient(profile)

        try:
            sessions = await PomodoroAPI(client).list_sessions()
            sessions.sort(key=lambda s: s.get("endTime") or "", reverse=True)
            if limit is not None:
                sessions = sessions[:limit]

            if output == "table":
                format_sessions_table(sessions)
            else:
                format_output(sessions, output)

        except API_ERRORS as e:
            handle_api_error(e, "fetching session history")
        finally:
            await client.close()

    asyncio.run(_history())


@app.command("show")
def show_session(
    session_id: int = typer.Argument(..., help="Session ID"),
    output: str = typer.Option("table", "--output", "-o", help="Output format (table, json, yaml)"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
):
    """Show a single stored session."""

    async def _show():
        client = APIClient(profile)

        try:
            session = await PomodoroAPI(client).get_session(session_id)
            format_output(session, output)
        except API_ERRORS as e:
            handle_api_error(e, f"fetching session {session_id}")
        finally:
            await client.close()

    asyncio.run(_show())


@app.command("edit")
def edit_session(
    session_id: int = typer.Argument(..., help="Session ID"),
    score: int | None = typer.Option(
        None, "--score", "-s", min=MIN_SCORE, max=MAX_SCORE, help="New score (1-5)"
    ),
    notes: str | None = typer.Option(None, "--notes", help="New notes"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
):
    """Change the score or notes of a stored session."""
    if score is None and notes is None:
        format_error("Nothing to change: pass --score and/or --notes")
        raise typer.Exit(ERROR_INVALID_ARGS)

    async def _edit():
        client = APIClient(profile)

        try:
            api = PomodoroAPI(client)
            record = await api.get_session(session_id)
            if score is not None:
                record["score"] = score
            if notes is not None:
                record["notes"] = notes
            await api.update_session(session_id, CompletedSession.from_record(record))
            format_success(f"Session {session_id} updated")
        except API_ERRORS as e:
            handle_api_error(e, f"updating session {session_id}")
        finally:
            await client.close()

    asyncio.run(_edit())


@app.command("delete")
def delete_session(
    session_id: int = typer.Argument(..., help="Session ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
):
    """Delete a stored session."""
    if not yes and not typer.confirm(f"Delete session {session_id}?"):
        format_error("Cancelled")
        raise typer.Exit(0)

    async def _delete():
        client = APIClient(profile)

        try:
            await PomodoroAPI(client).delete_session(session_id)
            format_success(f"Session {session_id} deleted")
        except API_ERRORS as e:
            handle_api_error(e, f"deleting session {session_id}")
        finally:
            await client.close()

    asyncio.run(_delete())


@app.command("format")
def format_seconds(
    seconds: int = typer.Argument(..., help="Number of seconds"),
):
    """Print SECONDS as MM:SS."""
    console.print(format_time(seconds))
