"""Local SQLite backend for offline use."""

import logging
import sqlite3
from typing import Optional

from tradejournal.backends.base import BackendError, BaseBackend
from tradejournal.db.store import DataStore
from tradejournal.models import Trade

logger = logging.getLogger(__name__)


class LocalBackend(BaseBackend):
    """Backend keeping trades in a local SQLite file.

    There is no password check: signing in records the user name in
    the store's session table, signing out removes it.
    """

    def __init__(self, data_store: DataStore):
        """Initialize local backend.

        Args:
            data_store: DataStore instance for persistence.
        """
        self._data_store = data_store

    def sign_in(self, email: str, password: Optional[str] = None) -> bool:
        try:
            self._data_store.save_session(email)
        except sqlite3.Error as e:
            self._last_error = str(e)
            logger.warning("Local sign-in failed: %s", e)
            return False
        logger.info("Signed in locally as %s", email)
        return True

    def sign_out(self) -> bool:
        """Remove the local session marker.

        Returns:
            True if a session was cleared, False if none was active or
            the store could not be written.
        """
        try:
            cleared = self._data_store.clear_session()
        except sqlite3.Error as e:
            self._last_error = str(e)
            logger.warning("Local sign-out failed: %s", e)
            return False
        if not cleared:
            self._last_error = "No active session"
        logger.info("Local sign-out: %s", "cleared" if cleared else "no session")
        return cleared

    def is_authenticated(self) -> bool:
        try:
            return self._data_store.get_session_user() is not None
        except sqlite3.Error:
            return False

    def fetch_trades(self) -> list[Trade]:
        try:
            trades = self._data_store.get_trades()
        except sqlite3.Error as e:
            raise BackendError(f"Failed to fetch trades: {e}") from e
        logger.debug("Fetched %d trades from %s", len(trades), self._data_store.db_path)
        return trades

    def add_trade(self, trade: Trade) -> Trade:
        try:
            trade_id = self._data_store.log_trade(trade)
        except sqlite3.Error as e:
            raise BackendError(f"Failed to add trade: {e}") from e
        logger.info("Added trade %s %s %.2f", trade_id, trade.symbol, trade.pnl_net)
        return trade.model_copy(update={"id": str(trade_id)})

    def delete_trade(self, trade_id: str) -> bool:
        try:
            row_id = int(trade_id)
        except (TypeError, ValueError):
            return False

        try:
            deleted = self._data_store.delete_trade(row_id)
        except sqlite3.Error as e:
            raise BackendError(f"Failed to delete trade {trade_id}: {e}") from e
        logger.info("Delete trade %s: %s", trade_id, "done" if deleted else "not found")
        return deleted
