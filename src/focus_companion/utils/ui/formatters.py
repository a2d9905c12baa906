"""Output formatters for different formats."""

import json
from datetime import datetime
from typing import Any

import yaml
from rich.table import Table

from focus_companion.utils.ui.console import get_console

console = get_console()

SCORE_EMOJIS = ["😢", "😕", "😐", "😊", "🎉"]


def score_emoji(score: int | None) -> str:
    """Return the emoji shown next to a 1-5 session score."""
    if score is None or not 1 <= score <= 5:
        return "😐"
    return SCORE_EMOJIS[score - 1]


def format_output(data: Any, output_format: str = "table") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    else:
        format_table(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())

    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(_humanize_key(col))

    for item in items:
        table.add_row(*(_format_value(item.get(col, "")) for col in columns))

    console.print(table)


def format_sessions_table(sessions: list[dict]) -> None:
    """Render stored Pomodoro sessions, newest first."""
    if not sessions:
        console.print("[yellow]No focus sessions found[/yellow]")
        return

    table = Table(title=f"Focus Sessions ({len(sessions)})", show_header=True)
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Started", style="cyan")
    table.add_column("Duration", justify="right")
    table.add_column("Score", justify="center")
    table.add_column("Notes")

    ordered = sorted(sessions, key=lambda s: s.get("endTime") or "", reverse=True)
    for session in ordered:
        score = session.get("score")
        notes = session.get("notes") or "—"
        table.add_row(
            str(session.get("id", "-")),
            _format_timestamp(session.get("startTime")),
            f"{session.get('duration', 0)}m",
            f"{score_emoji(score)} {score}" if score is not None else "-",
            notes[:40],
        )

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(_humanize_key(key), _format_value(value))

    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def _humanize_key(key: str) -> str:
    # startTime -> Start Time, api_endpoint -> Api Endpoint
    spaced = "".join(f" {c}" if c.isupper() else c for c in key)
    return spaced.replace("_", " ").strip().title()


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, default=str)
    if value is None:
        return "-"
    return str(value)


def _format_timestamp(value: str | None) -> str:
    if not value:
        return "—"
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return parsed.astimezone().strftime("%Y-%m-%d %H:%M")
