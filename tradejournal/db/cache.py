"""In-memory query cache.

Results are cached per query key, a tuple whose first element names the
collection (for example ("trades", "date", "asc")). Mutations invalidate
by collection name so every cached query over that collection refetches.
"""

import logging
from typing import Any, Callable, Hashable, Optional

logger = logging.getLogger(__name__)

QueryKey = tuple[Hashable, ...]


class QueryCache:
    """Application-level cache keyed by query parameters."""

    def __init__(self):
        self._entries: dict[QueryKey, Any] = {}

    def get(self, key: QueryKey, fetcher: Callable[[], Any]) -> Any:
        """Get a cached result, calling fetcher on a miss.

        Exceptions raised by fetcher propagate and nothing is cached.

        Args:
            key: Query key.
            fetcher: Zero-argument callable producing the result.

        Returns:
            The cached or freshly fetched result.
        """
        if key in self._entries:
            logger.debug("Cache hit for %s", key)
            return self._entries[key]

        logger.debug("Cache miss for %s", key)
        result = fetcher()
        self._entries[key] = result
        return result

    def invalidate(self, prefix: Optional[Hashable] = None) -> int:
        """Drop cached results.

        Args:
            prefix: Collection name; only keys starting with it are dropped.
                If None, the whole cache is cleared.

        Returns:
            Number of entries dropped.
        """
        if prefix is None:
            dropped = len(self._entries)
            self._entries.clear()
        else:
            stale = [key for key in self._entries if key and key[0] == prefix]
            for key in stale:
                del self._entries[key]
            dropped = len(stale)

        logger.debug("Invalidated %d cached queries (%s)", dropped, prefix or "all")
        return dropped

    def __contains__(self, key: QueryKey) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
