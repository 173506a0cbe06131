"""TradeJournal - terminal trading journal with P&L statistics."""

__version__ = "0.1.0"
