"""Dashboard views rendered with rich.

The calendar and recent-trades views each read their own slice of the
trade collection through the shared query cache; the Dashboard composes
them with the four summary tiles.
"""

import logging
from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field
from rich.columns import Columns
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table

from tradejournal.analytics import (
    calculate_metrics,
    daily_pnl,
    month_grid,
    month_summary,
    recent_trades,
)
from tradejournal.backends.base import BaseBackend
from tradejournal.db.cache import QueryCache
from tradejournal.models import Trade, TradeMetrics

logger = logging.getLogger(__name__)

# Full collection, ascending by date
TRADES_KEY = ("trades", "date", "asc")

WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


class Notification(BaseModel):
    """Transient message shown after a user action."""

    level: Literal["success", "error"] = Field(..., description="Outcome of the action")
    message: str = Field(..., description="Text to show")

    model_config = {"frozen": True}


def load_trades(backend: BaseBackend, cache: QueryCache) -> list[Trade]:
    """Fetch the full trade collection through the cache.

    Raises:
        BackendError: If the fetch fails. Nothing is cached in that case.
    """
    return cache.get(TRADES_KEY, backend.fetch_trades)


def format_pnl(value: float) -> str:
    """Format a P&L value with sign and colour markup."""
    color = "green" if value >= 0 else "red"
    sign = "+" if value >= 0 else "-"
    return f"[{color}]{sign}${abs(value):,.2f}[/{color}]"


def default_month(trades: list[Trade], today: Optional[date] = None) -> tuple[int, int]:
    """Month of the latest trade, or the current month when there are none."""
    if trades:
        latest = max(t.date for t in trades)
        return latest.year, latest.month
    today = today or date.today()
    return today.year, today.month


class CalendarView:
    """Monthly P&L heat-map."""

    def __init__(
        self,
        backend: BaseBackend,
        cache: QueryCache,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ):
        self.backend = backend
        self.cache = cache
        self.year = year
        self.month = month

    def render(self) -> RenderableType:
        trades = load_trades(self.backend, self.cache)
        if self.year is None or self.month is None:
            year, month = default_month(trades)
        else:
            year, month = self.year, self.month

        daily = daily_pnl(trades)
        summary = month_summary(daily, year, month)

        table = Table(
            title=f"P&L Calendar {date(year, month, 1).strftime('%B %Y')}",
            show_header=True,
            header_style="bold cyan",
            show_lines=True,
        )
        for weekday in WEEKDAYS:
            table.add_column(weekday, justify="center", min_width=9)

        for week in month_grid(year, month):
            cells = []
            for day in week:
                if day is None:
                    cells.append("")
                elif day in daily:
                    entry = daily[day]
                    cells.append(f"[bold]{day.day}[/bold]\n{format_pnl(entry.pnl)}\n[dim]{entry.trades_count}t[/dim]")
                else:
                    cells.append(f"[dim]{day.day}[/dim]")
            table.add_row(*cells)

        table.caption = (
            f"Month: {format_pnl(summary['pnl'])} | "
            f"Days: {summary['trading_days']} | "
            f"[green]Green: {summary['green_days']}[/green] | "
            f"[red]Red: {summary['red_days']}[/red]"
        )
        return table


class RecentTradesView:
    """List of the most recent trades, newest first."""

    def __init__(self, backend: BaseBackend, cache: QueryCache, limit: int = 5):
        self.backend = backend
        self.cache = cache
        self.limit = limit

    def render(self) -> RenderableType:
        trades = recent_trades(load_trades(self.backend, self.cache), self.limit)

        if not trades:
            return Panel(
                "[dim]No trades yet[/dim]",
                title="[bold]Recent Trades[/bold]",
                border_style="dim",
            )

        return trades_table(trades, title="Recent Trades")


def trades_table(trades: list[Trade], title: str = "Trades") -> Table:
    """Build a table listing trades."""
    table = Table(title=title, show_header=True, header_style="bold cyan")

    table.add_column("ID", style="dim")
    table.add_column("Date", style="bold")
    table.add_column("Symbol")
    table.add_column("P&L", justify="right")
    table.add_column("Rules", justify="center")
    table.add_column("Emotion")

    for trade in trades:
        table.add_row(
            trade.id or "-",
            trade.date.strftime("%Y-%m-%d"),
            trade.symbol,
            format_pnl(trade.pnl_net),
            "[green]✓[/green]" if trade.rules_followed else "[red]✗[/red]",
            trade.emotion or "-",
        )

    return table


def metric_tiles(metrics: TradeMetrics) -> list[Panel]:
    """Build the four summary tiles."""
    profitable = metrics.pnl_total > 0
    trend = "[green]▲[/green]" if profitable else "[red]▼[/red]"

    tiles = [
        Panel(
            f"{format_pnl(metrics.pnl_total)}\n[dim]{metrics.total_trades} trades[/dim]",
            title=f"PnL Total {trend}",
            border_style="green" if profitable else "red",
        ),
        Panel(
            f"[bold cyan]{metrics.win_rate:.1f}%[/bold cyan]\n[dim]Overall win rate[/dim]",
            title="Win Rate",
            border_style="cyan",
        ),
        Panel(
            f"[bold cyan]{metrics.rule_compliance_rate:.1f}%[/bold cyan]\n[dim]Trading discipline[/dim]",
            title="Rule Compliance",
            border_style="cyan",
        ),
    ]

    if metrics.variant == "score":
        tiles.append(Panel(
            f"[bold magenta]{metrics.trade_score}[/bold magenta]\n[dim]Overall score[/dim]",
            title="Trade Score",
            border_style="magenta",
        ))
    else:
        tiles.append(Panel(
            f"[bold magenta]{metrics.most_frequent_emotion}[/bold magenta]\n[dim]Most frequent emotion[/dim]",
            title="Top Emotion",
            border_style="magenta",
        ))

    return tiles


class Dashboard:
    """Presentation shell: metrics tiles plus calendar and recent trades."""

    def __init__(
        self,
        backend: BaseBackend,
        cache: Optional[QueryCache] = None,
        variant: str = "score",
        recent_limit: int = 5,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ):
        self.backend = backend
        self.cache = cache if cache is not None else QueryCache()
        self.variant = variant
        self.calendar = CalendarView(backend, self.cache, year=year, month=month)
        self.recent = RecentTradesView(backend, self.cache, limit=recent_limit)

    def load(self) -> list[Trade]:
        """Snapshot fetch of the full trade collection."""
        return load_trades(self.backend, self.cache)

    def metrics(self) -> TradeMetrics:
        return calculate_metrics(self.load(), variant=self.variant)

    def render(self) -> RenderableType:
        """Render the dashboard.

        Raises:
            BackendError: If the trade collection cannot be fetched.
        """
        metrics = self.metrics()
        return Group(
            Columns([self.calendar.render(), self.recent.render()]),
            Columns(metric_tiles(metrics), equal=True, expand=True),
        )

    def add_trade(self, trade: Trade) -> Trade:
        """Insert a trade and drop every cached trades query."""
        stored = self.backend.add_trade(trade)
        self.cache.invalidate("trades")
        return stored

    def delete_trade(self, trade_id: str) -> bool:
        """Delete a trade and drop every cached trades query."""
        deleted = self.backend.delete_trade(trade_id)
        if deleted:
            self.cache.invalidate("trades")
        return deleted

    def sign_out(self) -> Notification:
        """Terminate the session.

        A successful sign-out also drops every cached query.
        """
        if self.backend.sign_out():
            self.cache.invalidate()
            return Notification(level="success", message="Signed out")

        logger.warning("Sign-out failed: %s", self.backend.get_last_error())
        return Notification(
            level="error",
            message=f"Error signing out: {self.backend.get_last_error()}",
        )
