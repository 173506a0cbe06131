"""Calendar and recent-trades slices of a trade collection."""

import calendar
from datetime import date
from typing import Optional, Sequence

from tradejournal.models import DailyPnL, Trade


def daily_pnl(trades: Sequence[Trade]) -> dict[date, DailyPnL]:
    """Aggregate net P&L per calendar day.

    Args:
        trades: Trades to aggregate.

    Returns:
        Mapping of date to DailyPnL, in ascending date order.
    """
    totals: dict[date, float] = {}
    counts: dict[date, int] = {}

    for trade in trades:
        totals[trade.date] = totals.get(trade.date, 0.0) + float(trade.pnl_net)
        counts[trade.date] = counts.get(trade.date, 0) + 1

    return {
        day: DailyPnL(date=day, pnl=totals[day], trades_count=counts[day])
        for day in sorted(totals)
    }


def month_grid(year: int, month: int) -> list[list[Optional[date]]]:
    """Build a Monday-first week grid for a month.

    Args:
        year: Calendar year.
        month: Calendar month (1-12).

    Returns:
        List of weeks, each a list of 7 dates; days outside the month are None.
    """
    cal = calendar.Calendar(firstweekday=calendar.MONDAY)
    return [
        [day if day.month == month else None for day in week]
        for week in cal.monthdatescalendar(year, month)
    ]


def month_summary(daily: dict[date, DailyPnL], year: int, month: int) -> dict:
    """Summarize the daily P&L of one month.

    Args:
        daily: Output of daily_pnl.
        year: Calendar year.
        month: Calendar month (1-12).

    Returns:
        Dictionary with month P&L, trading days, green and red days.
    """
    days = [d for d in daily.values() if d.date.year == year and d.date.month == month]
    return {
        "pnl": sum((d.pnl for d in days), 0.0),
        "trading_days": len(days),
        "green_days": sum(1 for d in days if d.pnl > 0),
        "red_days": sum(1 for d in days if d.pnl < 0),
        "trades": sum(d.trades_count for d in days),
    }


def recent_trades(trades: Sequence[Trade], limit: int = 5) -> list[Trade]:
    """Get the most recent trades, newest first.

    Trades on the same date come out in reverse fetch order, so the
    last inserted of a day is shown first.

    Args:
        trades: Trades ordered by date ascending.
        limit: Maximum number of trades to return.

    Returns:
        Up to `limit` trades.
    """
    if limit <= 0:
        return []
    newest_first = sorted(reversed(list(trades)), key=lambda t: t.date, reverse=True)
    return newest_first[:limit]
