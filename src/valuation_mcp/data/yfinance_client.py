"""Async yfinance client with bounded concurrency, retry logic and response caching."""

import asyncio
import logging
import os
import random
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, TypeVar

import pytz
import yfinance as yf
from requests.exceptions import HTTPError

from valuation_mcp.analytics.models import DividendEvent
from valuation_mcp.data.cache import MarketDataCache
from valuation_mcp.data.normalize import events_from_series

logger = logging.getLogger(__name__)

# Bounded concurrency for yfinance calls
_max_workers = int(os.environ.get("YF_MAX_WORKERS", "4"))
_executor = ThreadPoolExecutor(max_workers=_max_workers)
_fetch_semaphore = asyncio.Semaphore(_max_workers)

# Retry configuration
_max_retries = int(os.environ.get("YF_MAX_RETRIES", "3"))
_base_delay = float(os.environ.get("YF_BASE_DELAY", "1.0"))  # seconds
_max_delay = float(os.environ.get("YF_MAX_DELAY", "30.0"))  # seconds

# Shutdown coordination
shutdown_event = asyncio.Event()

T = TypeVar("T")


class ServerShuttingDownError(Exception):
    """Raised when server is shutting down."""


class YFinanceRetryError(Exception):
    """Raised when yfinance fails after all retries."""

    def __init__(self, message: str, last_error: Exception | None = None):
        super().__init__(message)
        self.last_error = last_error


def _is_retryable_error(error: Exception) -> bool:
    """Transient errors: 401 invalid crumb, 429, 5xx, connection and timeout failures."""
    if isinstance(error, HTTPError) and error.response is not None:
        status_code = error.response.status_code
        if status_code in (401, 429) or 500 <= status_code < 600:
            return True

    error_str = str(error).lower()
    retryable_patterns = [
        "invalid crumb",
        "rate limit",
        "too many requests",
        "connection",
        "timeout",
        "temporary",
    ]
    return any(pattern in error_str for pattern in retryable_patterns)


def _calculate_backoff(attempt: int) -> float:
    """Exponential backoff with +/-25% jitter, capped at the max delay."""
    delay = _base_delay * (2**attempt)
    jitter = delay * 0.25 * (2 * random.random() - 1)
    return min(delay + jitter, _max_delay)


@dataclass
class RetryResult:
    """Result of a fetch with provenance tracking."""

    result: Any
    attempts: int = 0
    total_backoff_seconds: float = 0.0
    source: str = "yfinance"
    cache_hit: bool = False
    errors: list[str] = field(default_factory=list)

    def to_provenance(self) -> dict[str, Any]:
        """Convert to provenance fields for the data_provenance block."""
        prov: dict[str, Any] = {
            "attempts": self.attempts,
            "cache_hit": self.cache_hit,
            "total_backoff_seconds": self.total_backoff_seconds,
        }
        if self.errors:
            prov["retry_errors"] = self.errors[-3:]
        return prov


async def _retry_with_backoff(
    operation_name: str,
    sync_func: Callable[[], T],
    max_retries: int = _max_retries,
) -> RetryResult:
    """
    Execute a blocking function on the executor, retrying transient failures.

    Args:
        operation_name: Name for logging (e.g., "fetch_info(PETR4.SA)")
        sync_func: Synchronous function to execute
        max_retries: Maximum number of retry attempts

    Returns:
        RetryResult with result and provenance info

    Raises:
        YFinanceRetryError: If all retries exhausted
        ServerShuttingDownError: If server is shutting down
    """
    total_backoff = 0.0
    errors: list[str] = []

    for attempt in range(max_retries + 1):
        if shutdown_event.is_set():
            raise ServerShuttingDownError("Server is shutting down")

        try:
            loop = asyncio.get_running_loop()
            result = await loop.run_in_executor(_executor, sync_func)
            return RetryResult(
                result=result,
                attempts=attempt + 1,
                total_backoff_seconds=round(total_backoff, 2),
                errors=errors,
            )
        except Exception as e:
            errors.append(type(e).__name__)

            if not _is_retryable_error(e):
                raise

            if attempt >= max_retries:
                logger.warning(
                    f"{operation_name}: Failed after {attempt + 1} attempts. Last error: {e}"
                )
                raise YFinanceRetryError(
                    f"Failed after {attempt + 1} attempts: {e}",
                    last_error=e,
                ) from e

            delay = _calculate_backoff(attempt)
            total_backoff += delay
            logger.info(
                f"{operation_name}: Attempt {attempt + 1} failed ({e}). "
                f"Retrying in {delay:.1f}s..."
            )
            await asyncio.sleep(delay)

    # Unreachable: the loop either returns or raises
    raise YFinanceRetryError(f"Failed after {max_retries + 1} attempts")


async def fetch_info(symbol: str, cache: MarketDataCache) -> RetryResult:
    """
    Fetch stock info (quote + fundamentals) with caching and retry logic.

    Args:
        symbol: Normalized ticker symbol
        cache: Market data cache ("quote" category: the payload carries the live price)

    Returns:
        RetryResult whose `result` is the yfinance info dict

    Raises:
        ServerShuttingDownError: If server is shutting down
        YFinanceRetryError: If all retries exhausted for retryable errors
        ValueError: If the symbol is unknown to the provider
    """
    cached = cache.get("quote", symbol)
    if cached is not None:
        return RetryResult(result=cached, cache_hit=True)

    def _fetch() -> dict[str, Any]:
        info = yf.Ticker(symbol).info
        # Unknown symbols come back as a near-empty dict
        if not info or info.get("quoteType") in (None, "NONE"):
            raise ValueError(f"Asset {symbol} not found")
        return dict(info)

    async with _fetch_semaphore:
        retry_result = await _retry_with_backoff(f"fetch_info({symbol})", _fetch)

    cache.store("quote", symbol, retry_result.result)
    return retry_result


async def fetch_dividends(symbol: str, cache: MarketDataCache) -> RetryResult:
    """
    Fetch the full dividend history for a symbol.

    An empty history is a valid result (non-paying company), not an error.

    Args:
        symbol: Normalized ticker symbol
        cache: Market data cache ("dividends" category)

    Returns:
        RetryResult whose `result` is a date-sorted list of DividendEvent
    """
    cached = cache.get("dividends", symbol)
    if cached is not None:
        return RetryResult(result=cached, cache_hit=True)

    def _fetch() -> list[DividendEvent]:
        return events_from_series(yf.Ticker(symbol).dividends)

    async with _fetch_semaphore:
        retry_result = await _retry_with_backoff(f"fetch_dividends({symbol})", _fetch)

    cache.store("dividends", symbol, retry_result.result)
    return retry_result


def get_market_state(now: datetime | None = None, tz: str = "America/Sao_Paulo") -> dict[str, str]:
    """
    Determine B3 session state. Clock-based only (no holiday calendar).

    Args:
        now: Reference time (default: current time in `tz`); naive values are
            taken as local to `tz`
        tz: Exchange timezone (default: America/Sao_Paulo)

    Returns:
        Dict with state, method, and checked_at timestamp
    """
    exchange_tz = pytz.timezone(tz)
    if now is None:
        now = datetime.now(exchange_tz)
    elif now.tzinfo is None:
        now = exchange_tz.localize(now)
    else:
        now = now.astimezone(exchange_tz)

    if now.weekday() >= 5:
        state = "closed"
    else:
        time_minutes = now.hour * 60 + now.minute

        if time_minutes < 9 * 60:
            state = "closed"
        elif time_minutes < 10 * 60:  # 9 AM - 10 AM
            state = "pre_market"
        elif time_minutes < 17 * 60:  # 10 AM - 5 PM
            state = "regular"
        elif time_minutes < 18 * 60:  # 5 PM - 6 PM
            state = "after_hours"
        else:
            state = "closed"

    return {
        "state": state,
        "method": "clock_only_no_holidays",
        "checked_at": now.isoformat(),
    }


async def shutdown_executor() -> None:
    """Cleanup on server shutdown."""
    shutdown_event.set()
    _executor.shutdown(wait=False, cancel_futures=True)
