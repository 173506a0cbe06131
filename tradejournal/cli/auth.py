"""Authentication commands for TradeJournal CLI.

Handles sign-in and sign-out against the configured backend.
"""

import click
from rich.panel import Panel

from tradejournal import config as cfg
from tradejournal.cli.common import console, open_backend, require_config


@click.command()
@click.option("--email", "-e", default=None, help="Account email (user name for the local backend).")
@click.option("--password", "-p", default=None, help="Account password (prompted when omitted).")
def login(email: str | None, password: str | None) -> None:
    """Sign in to the trade backend.

    On first run a template config file is created. With the local
    backend this records a local session; with Supabase it signs in
    with email and password and stores the session tokens.

    \b
    Examples:
      tradejournal login
      tradejournal login --email me@example.com
    """
    if cfg.load_config() is None:
        config_path = cfg.create_template_config()
        console.print(Panel(
            "[yellow]Configuration file created at:[/yellow]\n"
            f"[cyan]{config_path}[/cyan]\n\n"
            "The local backend is selected by default. Edit this file to\n"
            "use Supabase, then run [green]tradejournal login[/green] again.",
            title="[bold]Configuration Required[/bold]",
            border_style="yellow",
        ))
        raise SystemExit(1)

    config = require_config()
    kind = cfg.backend_kind(config)
    backend = open_backend(config)

    if kind == "local":
        user = email or "local"
        if not backend.sign_in(user):
            console.print(Panel(
                "[red]✗[/red] Could not start local session\n\n"
                f"[dim]{backend.get_last_error()}[/dim]",
                title="[bold red]Login Failed[/bold red]",
                border_style="red",
            ))
            raise SystemExit(1)
        console.print(Panel(
            f"[green]✓[/green] Local journal active as [cyan]{user}[/cyan]\n\n"
            f"[dim]Trades are stored in {cfg.db_path(config)}[/dim]",
            title="[bold green]Login Successful[/bold green]",
            border_style="green",
        ))
        return

    if not email:
        email = click.prompt("Email")
    if password is None:
        password = click.prompt("Password", hide_input=True)

    console.print("[dim]Signing in to Supabase...[/dim]")

    if backend.sign_in(email, password):
        console.print(Panel(
            f"[green]✓[/green] Signed in as [cyan]{email}[/cyan]\n\n"
            "[dim]Session stored. You can now log and review trades.[/dim]",
            title="[bold green]Login Successful[/bold green]",
            border_style="green",
        ))
    else:
        console.print(Panel(
            "[red]✗[/red] Authentication failed\n\n"
            f"[yellow]Error:[/yellow] {backend.get_last_error()}\n\n"
            "[dim]Check your email and password, and that supabase.url and\n"
            "supabase.key belong to the same project.[/dim]",
            title="[bold red]Login Failed[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)


@click.command()
def logout() -> None:
    """Sign out and clear the stored session."""
    from tradejournal.views import Dashboard

    config = cfg.load_config()

    if config is None:
        console.print("[yellow]No configuration found. Nothing to logout from.[/yellow]")
        return

    config = require_config()
    dashboard = Dashboard(open_backend(config), variant=cfg.dashboard_variant(config))
    notification = dashboard.sign_out()

    if notification.level == "success":
        console.print(Panel(
            f"[green]✓[/green] {notification.message}",
            title="[bold green]Logout Successful[/bold green]",
            border_style="green",
        ))
    else:
        console.print(Panel(
            f"[red]✗[/red] {notification.message}",
            title="[bold red]Logout Failed[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)
