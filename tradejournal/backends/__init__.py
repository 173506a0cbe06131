"""Backend implementations for TradeJournal."""

import sqlite3

from tradejournal.backends.base import BackendError, BaseBackend
from tradejournal.backends.local import LocalBackend

__all__ = [
    "BackendError",
    "BaseBackend",
    "LocalBackend",
    "get_backend",
]


def get_backend(config: dict) -> BaseBackend:
    """Get the backend selected by config.

    Args:
        config: Configuration dictionary.

    Returns:
        Backend instance.

    Raises:
        BackendError: If the local database cannot be opened.
    """
    from tradejournal import config as cfg

    if cfg.backend_kind(config) == "supabase":
        from tradejournal.backends.supabase import SupabaseBackend

        url, key = cfg.supabase_credentials(config)
        return SupabaseBackend(url=url, key=key, token_path=cfg.session_path())

    from tradejournal.db.store import DataStore

    path = cfg.db_path(config)
    try:
        store = DataStore(path)
    except (sqlite3.Error, OSError) as e:
        raise BackendError(f"Cannot open journal database {path}: {e}") from e
    return LocalBackend(store)
