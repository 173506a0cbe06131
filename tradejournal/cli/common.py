"""Helpers shared by the CLI command modules."""

from datetime import date

import click
from rich.console import Console
from rich.panel import Panel

from tradejournal import config as cfg
from tradejournal.backends import BackendError, BaseBackend, get_backend

console = Console()


def require_config() -> dict:
    """Load and validate configuration, exiting with a panel on failure."""
    config = cfg.load_config()

    if config is None:
        console.print(Panel(
            "[red]Configuration not found.[/red]\n\n"
            "Run [cyan]tradejournal login[/cyan] to create a config file.",
            title="[bold red]Error[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)

    problems = cfg.validate_config(config)
    if problems:
        console.print(Panel(
            "[red]Invalid configuration:[/red]\n\n"
            + "\n".join(f"  • {problem}" for problem in problems)
            + f"\n\n[dim]Edit {cfg.get_config_path()} to fix these values.[/dim]",
            title="[bold red]Configuration Error[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)

    return config


def open_backend(config: dict) -> BaseBackend:
    """Build the configured backend, exiting with a panel if it cannot be opened."""
    try:
        return get_backend(config)
    except BackendError as e:
        fail(str(e), title="Backend Error")


def require_session(backend: BaseBackend) -> None:
    """Exit with a panel unless the backend has an active session."""
    if backend.is_authenticated():
        return

    console.print(Panel(
        "[red]Not signed in.[/red]\n\n"
        "Run [cyan]tradejournal login[/cyan] to start a session.",
        title="[bold red]Error[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def signed_in_backend(config: dict) -> BaseBackend:
    """Open the configured backend and require an active session."""
    backend = open_backend(config)
    require_session(backend)
    return backend


def fail(message: str, title: str = "Error") -> None:
    """Print an error panel and exit with status 1."""
    console.print(Panel(
        f"[red]✗[/red] {message}",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def parse_month(ctx: click.Context, param: click.Parameter, value: str | None) -> tuple[int, int] | None:
    """Click callback turning YYYY-MM into (year, month)."""
    if value is None:
        return None
    try:
        parsed = date.fromisoformat(f"{value}-01")
    except ValueError:
        raise click.BadParameter("expected YYYY-MM, e.g. 2024-03")
    return parsed.year, parsed.month
