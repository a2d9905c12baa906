"""Authentication commands.

Tokens are issued by the external identity provider; these commands only
store, report and forget them.
"""

import typer
from rich.prompt import Prompt

from focus_companion.config import get_config_manager
from focus_companion.utils.exit_codes import ERROR_AUTH_FAILURE, ERROR_INVALID_ARGS
from focus_companion.utils.typer_helpers import SuggestingGroup
from focus_companion.utils.ui.console import get_console
from focus_companion.utils.ui.formatters import format_error, format_success

app = typer.Typer(cls=SuggestingGroup, help="Authentication commands")
console = get_console()


@app.command()
def login(
    token: str | None = typer.Option(None, "--token", help="Bearer token from the identity provider"),
    endpoint: str | None = typer.Option(None, "--endpoint", help="API base URL"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Store a bearer token for API requests."""
    config_manager = get_config_manager(profile)

    if endpoint:
        config_manager.set("api.endpoint", endpoint)

    if not token:
        token = Prompt.ask("Token", password=True, console=console)

    token = (token or "").strip()
    if not token:
        format_error("A token is required")
        raise typer.Exit(ERROR_INVALID_ARGS)

    config_manager.save_credentials(token)
    format_success(f"Logged in to {config_manager.api_endpoint}")


@app.command()
def logout(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Forget the stored bearer token."""
    config_manager = get_config_manager(profile)
    config_manager.clear_credentials()
    format_success("Logged out")


@app.command()
def status(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Show whether a token is stored."""
    config_manager = get_config_manager(profile)
    console.print(f"Endpoint: [cyan]{config_manager.api_endpoint}[/cyan]")
    if config_manager.get_token():
        console.print("[green]✓ Logged in[/green]")
    else:
        console.print("[yellow]Not logged in[/yellow]")
        raise typer.Exit(ERROR_AUTH_FAILURE)
