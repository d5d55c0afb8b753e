"""Response cache for market data, with per-category freshness."""

import logging
import os
import time
from collections.abc import Callable
from typing import Any

import diskcache

logger = logging.getLogger(__name__)

# Max age in seconds per data category. "quote" holds the full info payload,
# price included, so it follows the quote freshness.
DEFAULT_TTLS: dict[str, float] = {
    "quote": 15 * 60,
    "dividends": 24 * 60 * 60,
}


class MarketDataCache:
    """
    Cache of provider responses keyed by "<category>:<key>".

    Freshness is judged against the injected clock, so hit/miss behaviour is
    deterministic under test. Entries older than their category TTL are
    treated as missing (and evicted on read).
    """

    def __init__(
        self,
        cache_dir: str | None = None,
        ttls: dict[str, float] | None = None,
        clock: Callable[[], float] = time.time,
    ):
        if cache_dir is None:
            cache_dir = os.environ.get("CACHE_DIR", ".cache/market-data")
        self.cache: diskcache.Cache = diskcache.Cache(cache_dir)
        self.ttls = {**DEFAULT_TTLS, **(ttls or {})}
        self._clock = clock

    @staticmethod
    def make_key(category: str, key: str) -> str:
        """Canonical cache key, e.g. 'dividends:PETR4.SA'."""
        return f"{category}:{key.upper().strip()}"

    def _ttl(self, category: str) -> float:
        if category not in self.ttls:
            raise ValueError(f"Unknown cache category '{category}'. Must be one of: {sorted(self.ttls)}")
        return self.ttls[category]

    def store(self, category: str, key: str, data: Any) -> str:
        """
        Store data under a category, stamped with the current clock time.

        Args:
            category: Data category (quote or dividends)
            key: Symbol or other identifier
            data: Picklable payload

        Returns:
            The canonical cache key
        """
        self._ttl(category)
        cache_key = self.make_key(category, key)
        self.cache.set(cache_key, {"data": data, "stored_at": self._clock()})
        return cache_key

    def get(self, category: str, key: str) -> Any | None:
        """
        Get fresh data or None on miss.

        Args:
            category: Data category
            key: Symbol or other identifier

        Returns:
            Cached payload, or None if absent or older than the category TTL
        """
        max_age = self._ttl(category)
        cache_key = self.make_key(category, key)
        entry = self.cache.get(cache_key)
        if entry is None:
            logger.debug(f"cache miss: {cache_key}")
            return None

        age = self._clock() - entry["stored_at"]
        if age >= max_age:
            logger.debug(f"cache expired: {cache_key} (age={age:.0f}s, ttl={max_age:.0f}s)")
            self.cache.delete(cache_key)
            return None

        logger.debug(f"cache hit: {cache_key}")
        return entry["data"]

    def clear(self, key: str | None = None) -> int:
        """
        Clear cached data for one symbol (all categories) or everything.

        Returns:
            Number of entries removed
        """
        if key is None:
            return self.cache.clear()

        removed = 0
        for category in self.ttls:
            if self.cache.delete(self.make_key(category, key)):
                removed += 1
        return removed

    def stats(self) -> dict[str, Any]:
        """Entry count and keys currently held (fresh or not)."""
        keys = sorted(str(k) for k in self.cache.iterkeys())
        return {
            "size": len(keys),
            "keys": keys,
            "ttl_seconds": dict(self.ttls),
        }


_default_cache: MarketDataCache | None = None


def get_market_cache() -> MarketDataCache:
    """Process-wide cache, created on first use by the server boundary."""
    global _default_cache
    if _default_cache is None:
        _default_cache = MarketDataCache()
    return _default_cache
