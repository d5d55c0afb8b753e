"""Data layer for fetching and caching market data."""

from valuation_mcp.data.cache import DEFAULT_TTLS, MarketDataCache, get_market_cache
from valuation_mcp.data.normalize import events_from_series, safe_float, snapshot_from_info
from valuation_mcp.data.yfinance_client import (
    RetryResult,
    ServerShuttingDownError,
    YFinanceRetryError,
    fetch_dividends,
    fetch_info,
    get_market_state,
    shutdown_executor,
)

__all__ = [
    # Cache
    "DEFAULT_TTLS",
    "MarketDataCache",
    "get_market_cache",
    # Normalization
    "events_from_series",
    "safe_float",
    "snapshot_from_info",
    # yfinance
    "RetryResult",
    "ServerShuttingDownError",
    "YFinanceRetryError",
    "fetch_dividends",
    "fetch_info",
    "get_market_state",
    "shutdown_executor",
]
