"""Trade entry commands for TradeJournal CLI.

Handles logging, listing and deleting journaled trades.
"""

from datetime import date, timedelta

import click
from pydantic import ValidationError
from rich.panel import Panel

from tradejournal import config as cfg
from tradejournal.backends import BackendError
from tradejournal.cli.common import console, fail, require_config, signed_in_backend
from tradejournal.models import Trade
from tradejournal.views import Dashboard, format_pnl, trades_table


@click.command()
@click.option("--days", "-d", type=int, default=None, help="Only show trades from the last N days.")
def trades(days: int | None) -> None:
    """List all journaled trades, oldest first.

    \b
    Examples:
      tradejournal trades
      tradejournal trades --days 30
    """
    config = require_config()
    shell = Dashboard(signed_in_backend(config))

    try:
        collection = shell.load()
    except BackendError as e:
        fail(str(e), title="Fetch Failed")

    if days is not None:
        since = date.today() - timedelta(days=days)
        collection = [t for t in collection if t.date >= since]

    if not collection:
        console.print(Panel(
            "[dim]No trades found[/dim]",
            title="[bold]Trades[/bold]",
            border_style="dim",
        ))
        return

    console.print(trades_table(collection))
    total = sum(t.pnl_net for t in collection)
    console.print(f"\n[bold]Total P&L:[/bold] {format_pnl(total)} [dim]({len(collection)} trades)[/dim]")


@click.command()
@click.argument("symbol")
@click.argument("pnl")
@click.option("--date", "trade_date", default=None, help="Trade date as YYYY-MM-DD (default: today).")
@click.option("--rules/--no-rules", default=False, help="Whether the trade followed your rules.")
@click.option("--emotion", "-e", default=None, help="Emotional state, e.g. calm, anxious, greedy.")
def add(symbol: str, pnl: str, trade_date: str | None, rules: bool, emotion: str | None) -> None:
    """Log a trade with its net P&L.

    Use a negative PNL for a loss; put it after -- so it is not read
    as an option.

    \b
    Examples:
      tradejournal add AAPL 120.5 --rules --emotion calm
      tradejournal add TSLA --no-rules --emotion greedy -- -80
    """
    config = require_config()

    try:
        trade = Trade(
            symbol=symbol.upper(),
            pnl_net=pnl,
            date=trade_date or date.today(),
            rules_followed=rules,
            emotion=emotion,
        )
    except ValidationError as e:
        errors = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors())
        fail(errors, title="Invalid Trade")

    shell = Dashboard(signed_in_backend(config), variant=cfg.dashboard_variant(config))

    try:
        stored = shell.add_trade(trade)
        metrics = shell.metrics()
    except BackendError as e:
        fail(str(e), title="Add Failed")

    console.print(Panel(
        f"[green]✓[/green] Logged [cyan]{stored.symbol}[/cyan] {format_pnl(stored.pnl_net)} "
        f"on {stored.date.strftime('%Y-%m-%d')}\n\n"
        f"[dim]ID: {stored.id} | Journal P&L: {metrics.pnl_total:,.2f} | "
        f"Win Rate: {metrics.win_rate:.1f}% | Trades: {metrics.total_trades}[/dim]",
        title="[bold green]Trade Logged[/bold green]",
        border_style="green",
    ))


@click.command()
@click.argument("trade_id")
def delete(trade_id: str) -> None:
    """Delete a trade by its ID.

    \b
    Examples:
      tradejournal delete 42
    """
    config = require_config()
    shell = Dashboard(signed_in_backend(config))

    try:
        deleted = shell.delete_trade(trade_id)
    except BackendError as e:
        fail(str(e), title="Delete Failed")

    if not deleted:
        fail(f"No trade with ID {trade_id}", title="Not Found")

    console.print(f"[green]✓[/green] Deleted trade [cyan]{trade_id}[/cyan]")
