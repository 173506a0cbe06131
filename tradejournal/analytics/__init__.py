"""Trade analytics for TradeJournal.

This module provides the aggregation over a fetched trade collection
and the calendar/recent-trades slices used by the dashboard.
"""

from tradejournal.analytics.metrics import (
    NO_EMOTION,
    VARIANTS,
    calculate_metrics,
    most_frequent_emotion,
    rule_compliance_rate,
    total_pnl,
    trade_score,
    win_rate,
)
from tradejournal.analytics.calendar import (
    daily_pnl,
    month_grid,
    month_summary,
    recent_trades,
)

__all__ = [
    "NO_EMOTION",
    "VARIANTS",
    "calculate_metrics",
    "daily_pnl",
    "month_grid",
    "month_summary",
    "most_frequent_emotion",
    "recent_trades",
    "rule_compliance_rate",
    "total_pnl",
    "trade_score",
    "win_rate",
]
