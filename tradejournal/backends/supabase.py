"""Supabase backend for the hosted trade journal.

Trades live in the `trades` table of a Supabase project; row-level
security scopes them to the signed-in user.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from supabase import Client, create_client

from tradejournal.backends.base import BackendError, BaseBackend
from tradejournal.models import Trade

logger = logging.getLogger(__name__)

TRADES_TABLE = "trades"

# Column names in the hosted `trades` table
COLUMN_MAP = {
    "id": "id",
    "pnl_net": "pnl_neto",
    "date": "fecha",
    "symbol": "simbolo",
    "rules_followed": "reglas_cumplidas",
    "emotion": "emocion",
}


def trade_from_row(row: dict[str, Any]) -> Trade:
    """Build a Trade from a `trades` table row."""
    return Trade(
        id=row.get("id"),
        pnl_net=row.get("pnl_neto") or 0,
        date=row["fecha"],
        symbol=row.get("simbolo") or "",
        rules_followed=bool(row.get("reglas_cumplidas")),
        emotion=row.get("emocion"),
    )


def trade_to_row(trade: Trade) -> dict[str, Any]:
    """Build an insert payload from a Trade. The id is left to the database."""
    return {
        COLUMN_MAP["pnl_net"]: trade.pnl_net,
        COLUMN_MAP["date"]: trade.date.isoformat(),
        COLUMN_MAP["symbol"]: trade.symbol,
        COLUMN_MAP["rules_followed"]: trade.rules_followed,
        COLUMN_MAP["emotion"]: trade.emotion,
    }


class SupabaseBackend(BaseBackend):
    """Backend talking to a Supabase project.

    Sign-in uses email/password auth. Session tokens are stored in a
    JSON file so later commands can restore the session.
    """

    def __init__(
        self,
        url: str,
        key: str,
        token_path: Optional[Path] = None,
        client: Optional[Client] = None,
    ):
        """Initialize Supabase backend.

        Args:
            url: Supabase project URL.
            key: Supabase anon key.
            token_path: Path to store session tokens.
            client: Pre-built client, mainly for tests.
        """
        self.url = url
        self.key = key
        self.token_path = token_path or Path.home() / ".config" / "tradejournal" / "session.json"

        self._client: Optional[Client] = client
        self._access_token: Optional[str] = None
        self._refresh_token: Optional[str] = None
        self._user_id: Optional[str] = None
        self._session_restored = False

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = create_client(self.url, self.key)
        return self._client

    def _save_session(self) -> None:
        """Save session tokens to file."""
        if not self._access_token:
            return

        self.token_path.parent.mkdir(parents=True, exist_ok=True)
        session_data = {
            "access_token": self._access_token,
            "refresh_token": self._refresh_token,
            "user_id": self._user_id,
            "timestamp": datetime.now().isoformat(),
        }
        self.token_path.write_text(json.dumps(session_data))

    def _load_session(self) -> bool:
        """Load session tokens from file.

        Returns:
            True if a session was loaded, False otherwise.
        """
        if not self.token_path.exists():
            return False

        try:
            session_data = json.loads(self.token_path.read_text())
        except (json.JSONDecodeError, OSError):
            return False

        self._access_token = session_data.get("access_token")
        self._refresh_token = session_data.get("refresh_token")
        self._user_id = session_data.get("user_id")
        return bool(self._access_token)

    def _clear_session(self) -> None:
        """Clear stored session tokens."""
        self._access_token = None
        self._refresh_token = None
        self._user_id = None
        self._session_restored = False
        if self.token_path.exists():
            self.token_path.unlink()

    def _ensure_session(self) -> None:
        """Restore the stored session on the client before a query."""
        if self._session_restored:
            return
        if not self._access_token and not self._load_session():
            return

        try:
            self.client.auth.set_session(self._access_token, self._refresh_token or "")
        except Exception as e:
            raise BackendError(f"Stored session is no longer valid, sign in again: {e}") from e
        self._session_restored = True

    def sign_in(self, email: str, password: Optional[str] = None) -> bool:
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password or ""}
            )
        except Exception as e:
            self._last_error = str(e)
            logger.warning("Supabase sign-in failed for %s: %s", email, e)
            return False

        if response.session is None:
            self._last_error = "No session returned"
            return False

        self._access_token = response.session.access_token
        self._refresh_token = response.session.refresh_token
        self._user_id = response.user.id if response.user else None
        self._session_restored = True
        self._save_session()
        logger.info("Signed in to Supabase as %s", email)
        return True

    def sign_out(self) -> bool:
        """Sign out remotely and clear stored tokens.

        Local tokens are cleared even when the remote call fails.

        Returns:
            True if the remote session was terminated, False otherwise.
        """
        try:
            self._ensure_session()
            self.client.auth.sign_out()
        except Exception as e:
            self._last_error = str(e)
            logger.warning("Supabase sign-out failed: %s", e)
            self._clear_session()
            return False

        self._clear_session()
        logger.info("Signed out of Supabase")
        return True

    def is_authenticated(self) -> bool:
        return self._access_token is not None or self._load_session()

    def fetch_trades(self) -> list[Trade]:
        self._ensure_session()
        try:
            response = (
                self.client.table(TRADES_TABLE)
                .select("*")
                .order(COLUMN_MAP["date"], desc=False)
                .execute()
            )
        except Exception as e:
            raise BackendError(f"Failed to fetch trades: {e}") from e

        trades = [trade_from_row(row) for row in response.data or []]
        logger.debug("Fetched %d trades from Supabase", len(trades))
        return trades

    def add_trade(self, trade: Trade) -> Trade:
        self._ensure_session()
        payload = trade_to_row(trade)
        if self._user_id:
            payload["user_id"] = self._user_id

        try:
            response = self.client.table(TRADES_TABLE).insert(payload).execute()
        except Exception as e:
            raise BackendError(f"Failed to add trade: {e}") from e

        rows = response.data or []
        if not rows:
            raise BackendError("Insert returned no row")
        stored = trade_from_row(rows[0])
        logger.info("Added trade %s %s %.2f", stored.id, stored.symbol, stored.pnl_net)
        return stored

    def delete_trade(self, trade_id: str) -> bool:
        self._ensure_session()
        try:
            response = (
                self.client.table(TRADES_TABLE)
                .delete()
                .eq(COLUMN_MAP["id"], trade_id)
                .execute()
            )
        except Exception as e:
            raise BackendError(f"Failed to delete trade {trade_id}: {e}") from e

        deleted = bool(response.data)
        logger.info("Delete trade %s: %s", trade_id, "done" if deleted else "not found")
        return deleted
