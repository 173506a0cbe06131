"""Storage and query caching for TradeJournal."""
