"""Dashboard commands for TradeJournal CLI.

Displays the summary tiles, the P&L calendar and recent trades.
"""

import click
from rich.columns import Columns

from tradejournal import config as cfg
from tradejournal.analytics import VARIANTS
from tradejournal.backends import BackendError
from tradejournal.cli.common import (
    console,
    fail,
    parse_month,
    require_config,
    signed_in_backend,
)
from tradejournal.db.cache import QueryCache
from tradejournal.views import CalendarView, Dashboard, RecentTradesView, metric_tiles


def _build_dashboard(
    config: dict,
    variant: str | None = None,
    month: tuple[int, int] | None = None,
    limit: int | None = None,
) -> Dashboard:
    year, month_number = month if month else (None, None)
    return Dashboard(
        signed_in_backend(config),
        variant=variant or cfg.dashboard_variant(config),
        recent_limit=limit if limit is not None else cfg.recent_limit(config),
        year=year,
        month=month_number,
    )


@click.command()
@click.option("--variant", type=click.Choice(VARIANTS), default=None, help="Fourth tile: trade score or top emotion.")
@click.option("--month", "-m", callback=parse_month, default=None, help="Calendar month as YYYY-MM.")
def dashboard(variant: str | None, month: tuple[int, int] | None) -> None:
    """Display the full trading dashboard.

    Shows the P&L calendar and recent trades above four summary
    tiles: total P&L, win rate, rule compliance and trade score (or
    most frequent emotion with --variant emotion).

    \b
    Examples:
      tradejournal dashboard
      tradejournal dashboard --month 2024-03 --variant emotion
    """
    config = require_config()
    shell = _build_dashboard(config, variant=variant, month=month)

    try:
        console.print(shell.render())
    except BackendError as e:
        fail(str(e), title="Fetch Failed")


@click.command()
@click.option("--variant", type=click.Choice(VARIANTS), default=None, help="Fourth tile: trade score or top emotion.")
def stats(variant: str | None) -> None:
    """Display the four summary tiles only."""
    config = require_config()
    shell = _build_dashboard(config, variant=variant)

    try:
        metrics = shell.metrics()
    except BackendError as e:
        fail(str(e), title="Fetch Failed")

    console.print(Columns(metric_tiles(metrics), equal=True, expand=True))


@click.command()
@click.option("--month", "-m", callback=parse_month, default=None, help="Month as YYYY-MM (default: latest trade).")
def calendar(month: tuple[int, int] | None) -> None:
    """Display the P&L calendar for one month."""
    config = require_config()
    year, month_number = month if month else (None, None)
    view = CalendarView(signed_in_backend(config), QueryCache(), year=year, month=month_number)

    try:
        console.print(view.render())
    except BackendError as e:
        fail(str(e), title="Fetch Failed")


@click.command()
@click.option("--limit", "-n", type=int, default=None, help="Number of trades to show.")
def recent(limit: int | None) -> None:
    """Display the most recent trades."""
    config = require_config()
    view = RecentTradesView(
        signed_in_backend(config),
        QueryCache(),
        limit=limit if limit is not None else cfg.recent_limit(config),
    )

    try:
        console.print(view.render())
    except BackendError as e:
        fail(str(e), title="Fetch Failed")
