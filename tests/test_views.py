"""Tests for the dashboard shell and its views.

**Feature: trade-journal**
"""

from datetime import date
from io import StringIO

import pytest
from rich.console import Console

from tradejournal.backends import BackendError, BaseBackend
from tradejournal.db.cache import QueryCache
from tradejournal.models import Trade
from tradejournal.views import (
    TRADES_KEY,
    CalendarView,
    Dashboard,
    RecentTradesView,
    default_month,
    format_pnl,
)


class MemoryBackend(BaseBackend):
    """In-memory backend counting fetches."""

    def __init__(self, trades=None, fail_fetch=False, fail_sign_out=False):
        self.trades = list(trades or [])
        self.fetches = 0
        self.fail_fetch = fail_fetch
        self.fail_sign_out = fail_sign_out
        self.signed_in = True

    def sign_in(self, email, password=None):
        self.signed_in = True
        return True

    def sign_out(self):
        if self.fail_sign_out:
            self._last_error = "network unreachable"
            return False
        self.signed_in = False
        return True

    def is_authenticated(self):
        return self.signed_in

    def fetch_trades(self):
        self.fetches += 1
        if self.fail_fetch:
            raise BackendError("Failed to fetch trades: connection refused")
        return sorted(self.trades, key=lambda t: t.date)

    def add_trade(self, trade):
        stored = trade.model_copy(update={"id": str(len(self.trades) + 1)})
        self.trades.append(stored)
        return stored

    def delete_trade(self, trade_id):
        before = len(self.trades)
        self.trades = [t for t in self.trades if t.id != trade_id]
        return len(self.trades) < before


def render_text(renderable) -> str:
    console = Console(file=StringIO(), width=160, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


@pytest.fixture
def trades():
    return [
        Trade(id="1", pnl_net=100, date=date(2024, 3, 4), symbol="AAPL", rules_followed=True, emotion="calm"),
        Trade(id="2", pnl_net=-50, date=date(2024, 3, 5), symbol="TSLA", rules_followed=False, emotion="anxious"),
        Trade(id="3", pnl_net=30, date=date(2024, 3, 5), symbol="MSFT", rules_followed=True, emotion="calm"),
    ]


class TestDashboardMetrics:
    def test_metrics_from_backend(self, trades):
        shell = Dashboard(MemoryBackend(trades))
        metrics = shell.metrics()

        assert metrics.total_trades == 3
        assert metrics.pnl_total == 80
        assert metrics.trade_score is not None

    def test_emotion_variant(self, trades):
        metrics = Dashboard(MemoryBackend(trades), variant="emotion").metrics()

        assert metrics.most_frequent_emotion == "calm"

    def test_views_share_one_fetch(self, trades):
        backend = MemoryBackend(trades)
        shell = Dashboard(backend)

        render_text(shell.render())

        assert backend.fetches == 1

    def test_add_invalidates_cache(self, trades):
        backend = MemoryBackend(trades)
        shell = Dashboard(backend)
        shell.load()

        shell.add_trade(Trade(pnl_net=10, date=date(2024, 3, 6), symbol="NVDA"))

        assert TRADES_KEY not in shell.cache
        assert shell.metrics().total_trades == 4
        assert backend.fetches == 2

    def test_delete_invalidates_cache(self, trades):
        backend = MemoryBackend(trades)
        shell = Dashboard(backend)
        shell.load()

        assert shell.delete_trade("2") is True
        assert shell.metrics().total_trades == 2

    def test_fetch_failure_propagates(self):
        shell = Dashboard(MemoryBackend(fail_fetch=True))

        with pytest.raises(BackendError, match="connection refused"):
            shell.render()

        assert TRADES_KEY not in shell.cache


class TestSignOut:
    def test_success(self, trades):
        shell = Dashboard(MemoryBackend(trades))
        shell.load()

        notification = shell.sign_out()

        assert notification.level == "success"
        assert len(shell.cache) == 0

    def test_failure(self, trades):
        shell = Dashboard(MemoryBackend(trades, fail_sign_out=True))
        shell.load()

        notification = shell.sign_out()

        assert notification.level == "error"
        assert "network unreachable" in notification.message
        assert TRADES_KEY in shell.cache


class TestRendering:
    def test_dashboard_tiles(self, trades):
        text = render_text(Dashboard(MemoryBackend(trades)).render())

        assert "PnL Total" in text
        assert "Win Rate" in text
        assert "Rule Compliance" in text
        assert "Trade Score" in text
        assert "66.7%" in text

    def test_dashboard_emotion_tile(self, trades):
        text = render_text(Dashboard(MemoryBackend(trades), variant="emotion").render())

        assert "Top Emotion" in text
        assert "calm" in text

    def test_calendar_defaults_to_latest_month(self, trades):
        text = render_text(CalendarView(MemoryBackend(trades), QueryCache()).render())

        assert "March 2024" in text
        assert "Mon" in text

    def test_calendar_explicit_month(self, trades):
        text = render_text(CalendarView(MemoryBackend(trades), QueryCache(), year=2024, month=2).render())

        assert "February 2024" in text

    def test_recent_empty(self):
        text = render_text(RecentTradesView(MemoryBackend(), QueryCache()).render())

        assert "No trades yet" in text

    def test_recent_newest_first(self, trades):
        text = render_text(RecentTradesView(MemoryBackend(trades), QueryCache(), limit=2).render())

        assert "MSFT" in text
        assert "TSLA" in text
        assert "AAPL" not in text
        assert text.index("MSFT") < text.index("TSLA")


class TestHelpers:
    def test_format_pnl(self):
        assert format_pnl(1234.5) == "[green]+$1,234.50[/green]"
        assert format_pnl(-3) == "[red]-$3.00[/red]"

    def test_default_month_empty(self):
        assert default_month([], today=date(2025, 7, 9)) == (2025, 7)
