"""Base backend interface for TradeJournal."""

from abc import ABC, abstractmethod
from typing import Optional

from tradejournal.models import Trade


class BackendError(RuntimeError):
    """Raised when the backend fails to read, write or authenticate.

    The underlying exception is kept as __cause__.
    """


class BaseBackend(ABC):
    """Abstract base class for trade backends.

    Backends own persistence and authentication. Everything above them
    (cache, aggregator, views) only sees this interface.
    """

    @abstractmethod
    def sign_in(self, email: str, password: Optional[str] = None) -> bool:
        """Start a session.

        Returns:
            True if sign-in succeeded, False otherwise. The reason for a
            failure is available from get_last_error().
        """
        pass

    def get_last_error(self) -> str:
        """Get the last error message from a sign-in or sign-out attempt."""
        return getattr(self, "_last_error", "Unknown error")

    @abstractmethod
    def sign_out(self) -> bool:
        """Terminate the current session.

        Returns:
            True if the session was terminated, False otherwise.
        """
        pass

    @abstractmethod
    def is_authenticated(self) -> bool:
        """Check whether a session is active."""
        pass

    @abstractmethod
    def fetch_trades(self) -> list[Trade]:
        """Fetch the full trade collection, ordered by date ascending.

        Raises:
            BackendError: If the query fails.
        """
        pass

    @abstractmethod
    def add_trade(self, trade: Trade) -> Trade:
        """Insert a trade.

        Returns:
            The stored trade, carrying its backend-assigned id.

        Raises:
            BackendError: If the insert fails.
        """
        pass

    @abstractmethod
    def delete_trade(self, trade_id: str) -> bool:
        """Delete a trade by id.

        Returns:
            True if a trade was deleted, False if no such trade.

        Raises:
            BackendError: If the delete fails.
        """
        pass
