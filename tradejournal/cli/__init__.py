"""CLI commands for TradeJournal.

This package provides the command-line interface for TradeJournal,
including authentication, trade entry and the dashboard views.
"""

from tradejournal.cli.main import cli, main

__all__ = ["cli", "main"]
