"""Tests for the TradeJournal command-line interface.

**Feature: trade-journal**
"""

from pathlib import Path
from unittest.mock import patch

import pytest
import toml
from click.testing import CliRunner

from tradejournal.backends import BackendError, LocalBackend
from tradejournal.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_path(tmp_path: Path, monkeypatch) -> Path:
    """Point TRADEJOURNAL_CONFIG at a local-backend config in a temp dir."""
    path = tmp_path / "config.toml"
    monkeypatch.setenv("TRADEJOURNAL_CONFIG", str(path))
    path.write_text(toml.dumps({
        "backend": {"kind": "local", "db_path": str(tmp_path / "journal.db")},
        "dashboard": {"variant": "score", "recent_limit": 3},
    }))
    return path


@pytest.fixture
def signed_in(runner, config_path: Path) -> Path:
    """Start a local session against the temp config."""
    result = runner.invoke(cli, ["login", "--email", "alice"])
    assert result.exit_code == 0, result.output
    return config_path


class TestLazyGroup:
    def test_lists_all_commands(self, runner):
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for name in ["add", "calendar", "dashboard", "delete", "login", "logout", "recent", "stats", "trades"]:
            assert name in result.output


class TestLogin:
    def test_first_run_creates_template(self, runner, tmp_path: Path, monkeypatch):
        path = tmp_path / "fresh" / "config.toml"
        monkeypatch.setenv("TRADEJOURNAL_CONFIG", str(path))

        result = runner.invoke(cli, ["login"])

        assert result.exit_code == 1
        assert "Configuration file created" in result.output
        assert toml.load(path)["backend"]["kind"] == "local"

    def test_local_login_and_logout(self, runner, config_path: Path):
        result = runner.invoke(cli, ["login", "--email", "alice"])
        assert result.exit_code == 0
        assert "Login Successful" in result.output

        result = runner.invoke(cli, ["logout"])
        assert result.exit_code == 0
        assert "Signed out" in result.output

    def test_logout_without_session(self, runner, config_path: Path):
        result = runner.invoke(cli, ["logout"])

        assert result.exit_code == 1
        assert "No active session" in result.output

    def test_invalid_config(self, runner, tmp_path: Path, monkeypatch):
        path = tmp_path / "config.toml"
        path.write_text(toml.dumps({"backend": {"kind": "mysql"}}))
        monkeypatch.setenv("TRADEJOURNAL_CONFIG", str(path))

        result = runner.invoke(cli, ["dashboard"])

        assert result.exit_code == 1
        assert "backend.kind" in result.output

    def test_invalid_recent_limit(self, runner, tmp_path: Path, monkeypatch):
        path = tmp_path / "config.toml"
        path.write_text(toml.dumps({"dashboard": {"recent_limit": "lots"}}))
        monkeypatch.setenv("TRADEJOURNAL_CONFIG", str(path))

        result = runner.invoke(cli, ["recent"])

        assert result.exit_code == 1
        assert "dashboard.recent_limit" in result.output
        assert isinstance(result.exception, SystemExit)


class TestSessionRequired:
    @pytest.mark.parametrize("args", [
        ["dashboard"], ["stats"], ["calendar"], ["recent"], ["trades"],
        ["add", "AAPL", "10"], ["delete", "1"],
    ])
    def test_commands_refuse_without_session(self, runner, config_path: Path, args):
        result = runner.invoke(cli, args)

        assert result.exit_code == 1
        assert "Not signed in" in result.output

    def test_trades_refused_after_logout(self, runner, signed_in: Path):
        result = runner.invoke(cli, ["add", "AAPL", "10", "--date", "2024-03-04"])
        assert result.exit_code == 0, result.output

        result = runner.invoke(cli, ["logout"])
        assert result.exit_code == 0

        result = runner.invoke(cli, ["trades"])
        assert result.exit_code == 1
        assert "Not signed in" in result.output
        assert "AAPL" not in result.output

    def test_unopenable_database(self, runner, tmp_path: Path, monkeypatch):
        path = tmp_path / "config.toml"
        path.write_text(toml.dumps({"backend": {"kind": "local", "db_path": str(tmp_path)}}))
        monkeypatch.setenv("TRADEJOURNAL_CONFIG", str(path))

        result = runner.invoke(cli, ["dashboard"])

        assert result.exit_code == 1
        assert "Backend Error" in result.output
        assert isinstance(result.exception, SystemExit)


class TestTradeCommands:
    def test_add_and_list(self, runner, signed_in: Path):
        result = runner.invoke(cli, ["add", "aapl", "120.5", "--date", "2024-03-04", "--rules", "--emotion", "calm"])
        assert result.exit_code == 0, result.output
        assert "Trade Logged" in result.output
        assert "AAPL" in result.output

        result = runner.invoke(cli, ["add", "tsla", "--date", "2024-03-05", "--", "-80"])
        assert result.exit_code == 0, result.output

        result = runner.invoke(cli, ["trades"])
        assert result.exit_code == 0
        assert "AAPL" in result.output
        assert "TSLA" in result.output
        assert "+$40.50" in result.output

    def test_add_invalid_pnl(self, runner, config_path: Path):
        result = runner.invoke(cli, ["add", "AAPL", "lots"])

        assert result.exit_code == 1
        assert "Invalid Trade" in result.output

    def test_delete(self, runner, signed_in: Path):
        runner.invoke(cli, ["add", "AAPL", "10", "--date", "2024-03-04"])

        result = runner.invoke(cli, ["delete", "1"])
        assert result.exit_code == 0
        assert "Deleted trade" in result.output

        result = runner.invoke(cli, ["delete", "1"])
        assert result.exit_code == 1
        assert "No trade with ID 1" in result.output

    def test_trades_empty(self, runner, signed_in: Path):
        result = runner.invoke(cli, ["trades"])

        assert result.exit_code == 0
        assert "No trades found" in result.output


class TestDashboardCommands:
    @pytest.fixture
    def journal(self, runner, signed_in: Path):
        runner.invoke(cli, ["add", "AAPL", "100", "--date", "2024-03-04", "--rules", "--emotion", "calm"])
        runner.invoke(cli, ["add", "TSLA", "--date", "2024-03-05", "--no-rules", "--emotion", "anxious", "--", "-50"])
        return signed_in

    def test_stats(self, runner, journal):
        result = runner.invoke(cli, ["stats"])

        assert result.exit_code == 0
        assert "50.0%" in result.output
        assert "Trade Score" in result.output

    def test_stats_emotion_variant(self, runner, journal):
        result = runner.invoke(cli, ["stats", "--variant", "emotion"])

        assert result.exit_code == 0
        assert "Top Emotion" in result.output
        assert "calm" in result.output

    def test_dashboard(self, runner, journal):
        result = runner.invoke(cli, ["dashboard", "--month", "2024-03"])

        assert result.exit_code == 0, result.output
        assert "March 2024" in result.output
        assert "Rule Compliance" in result.output

    def test_calendar_invalid_month(self, runner, journal):
        result = runner.invoke(cli, ["calendar", "--month", "March"])

        assert result.exit_code == 2
        assert "YYYY-MM" in result.output

    def test_recent(self, runner, journal):
        result = runner.invoke(cli, ["recent", "--limit", "1"])

        assert result.exit_code == 0
        assert "TSLA" in result.output
        assert "AAPL" not in result.output

    def test_missing_config(self, runner, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("TRADEJOURNAL_CONFIG", str(tmp_path / "missing.toml"))

        result = runner.invoke(cli, ["dashboard"])

        assert result.exit_code == 1
        assert "Configuration not found" in result.output

    def test_fetch_failure(self, runner, journal):
        with patch.object(LocalBackend, "fetch_trades", side_effect=BackendError("Failed to fetch trades: locked")):
            result = runner.invoke(cli, ["dashboard"])

        assert result.exit_code == 1
        assert "Fetch Failed" in result.output
