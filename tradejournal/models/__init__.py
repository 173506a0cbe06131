"""Data models for TradeJournal."""

from tradejournal.models.trade import Trade
from tradejournal.models.metrics import DailyPnL, TradeMetrics

__all__ = [
    "DailyPnL",
    "Trade",
    "TradeMetrics",
]
