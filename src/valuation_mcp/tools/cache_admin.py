"""Cache administration and market status tools."""

from datetime import datetime
from typing import Any

from valuation_mcp.data.cache import MarketDataCache, get_market_cache
from valuation_mcp.data.yfinance_client import get_market_state
from valuation_mcp.utils.provenance import build_error_response, build_meta
from valuation_mcp.utils.validators import normalize_symbol


def clear_cache(symbol: str | None = None, cache: MarketDataCache | None = None) -> dict[str, Any]:
    """
    Clear cached market data for one symbol, or all of it.

    Args:
        symbol: Ticker to clear (default: clear everything)
        cache: Market data cache (default: process-wide cache)

    Returns:
        Dict with success flag and number of removed entries
    """
    cache = cache if cache is not None else get_market_cache()

    if symbol is None:
        removed = cache.clear()
    else:
        try:
            symbol = normalize_symbol(symbol)
        except ValueError as e:
            return build_error_response(error_type="invalid_symbol", message=str(e), symbol=symbol)
        removed = cache.clear(symbol)

    return {
        "meta": build_meta("clear_cache"),
        "success": True,
        "symbol": symbol,
        "removed": removed,
    }


def cache_stats(cache: MarketDataCache | None = None) -> dict[str, Any]:
    """Report cache size, keys and per-category TTLs."""
    cache = cache if cache is not None else get_market_cache()
    return {
        "meta": build_meta("cache_stats"),
        **cache.stats(),
    }


def market_status(now: datetime | None = None) -> dict[str, Any]:
    """B3 session state (clock-based, no holiday calendar)."""
    state = get_market_state(now)
    return {
        "meta": build_meta("market_status"),
        "exchange": "B3",
        "is_open": state["state"] == "regular",
        **state,
    }
