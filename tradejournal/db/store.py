"""SQLite data store for TradeJournal."""

import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from tradejournal.models import Trade


class DataStore:
    """SQLite-based data store for TradeJournal."""

    REQUIRED_TABLES = [
        "trades",
        "session",
    ]

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            # Trades table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS trades (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    date TEXT NOT NULL,
                    symbol TEXT NOT NULL,
                    pnl_net REAL NOT NULL,
                    rules_followed INTEGER NOT NULL DEFAULT 0,
                    emotion TEXT
                )
            """)

            # Single-row local session marker
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS session (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    user TEXT NOT NULL,
                    signed_in_at TEXT NOT NULL
                )
            """)

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Trades ====================

    def log_trade(self, trade: Trade) -> int:
        """Log a trade to the database.

        Args:
            trade: Trade to log. Its id is ignored.

        Returns:
            The ID of the inserted trade.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO trades (date, symbol, pnl_net, rules_followed, emotion)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    trade.date.isoformat(),
                    trade.symbol,
                    trade.pnl_net,
                    1 if trade.rules_followed else 0,
                    trade.emotion,
                ),
            )
            conn.commit()
            return cursor.lastrowid or 0
        finally:
            conn.close()

    def get_trades(self) -> list[Trade]:
        """Get all trades, ordered by date ascending.

        Trades on the same date keep insertion order.

        Returns:
            List of trades.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT id, date, symbol, pnl_net, rules_followed, emotion
                FROM trades
                ORDER BY date, id
                """
            )
            return [
                Trade(
                    id=row["id"],
                    date=date.fromisoformat(row["date"]),
                    symbol=row["symbol"],
                    pnl_net=row["pnl_net"],
                    rules_followed=bool(row["rules_followed"]),
                    emotion=row["emotion"],
                )
                for row in cursor.fetchall()
            ]
        finally:
            conn.close()

    def delete_trade(self, trade_id: int) -> bool:
        """Delete a trade.

        Args:
            trade_id: ID of the trade to delete.

        Returns:
            True if a trade was deleted, False if no such trade.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM trades WHERE id = ?", (trade_id,))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    # ==================== Session ====================

    def save_session(self, user: str) -> None:
        """Mark a local user as signed in.

        Args:
            user: Name of the signed-in user.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO session (id, user, signed_in_at)
                VALUES (1, ?, ?)
                """,
                (user, datetime.now().isoformat()),
            )
            conn.commit()
        finally:
            conn.close()

    def get_session_user(self) -> Optional[str]:
        """Get the signed-in local user.

        Returns:
            User name if signed in, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT user FROM session WHERE id = 1")
            row = cursor.fetchone()
            return row["user"] if row else None
        finally:
            conn.close()

    def clear_session(self) -> bool:
        """Remove the local session marker.

        Returns:
            True if a session was cleared, False if none existed.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM session WHERE id = 1")
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()
