"""Shared input loading for analytics tools."""

import os
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from valuation_mcp.analytics.models import DividendEvent, FundamentalsSnapshot
from valuation_mcp.data.cache import MarketDataCache, get_market_cache
from valuation_mcp.data.normalize import snapshot_from_info
from valuation_mcp.data.yfinance_client import fetch_dividends, fetch_info
from valuation_mcp.utils.provenance import build_error_response, build_provenance
from valuation_mcp.utils.validators import normalize_symbol

DEFAULT_TARGET_YIELD = float(os.environ.get("DEFAULT_TARGET_YIELD", "0.06"))
DIVIDEND_LOOKBACK_YEARS = int(os.environ.get("DIVIDEND_LOOKBACK_YEARS", "5"))


@dataclass
class MarketInputs:
    """Everything a tool needs from the data layer for one symbol."""

    symbol: str
    fundamentals: FundamentalsSnapshot | None
    events: list[DividendEvent]
    provenance: dict[str, Any]
    name: str | None = None
    currency: str | None = None


async def load_market_inputs(
    symbol: str,
    *,
    fundamentals: bool = True,
    dividends: bool = True,
    cache: MarketDataCache | None = None,
) -> MarketInputs | dict[str, Any]:
    """
    Fetch fundamentals and/or dividend history for a symbol.

    Args:
        symbol: Raw ticker symbol
        fundamentals: Fetch the info payload
        dividends: Fetch the dividend history
        cache: Cache to use (default: process-wide cache)

    Returns:
        MarketInputs on success, or a standardized error response dict
    """
    try:
        normalized_symbol = normalize_symbol(symbol)
    except ValueError as e:
        return build_error_response(error_type="invalid_symbol", message=str(e), symbol=symbol)

    cache = cache if cache is not None else get_market_cache()
    as_of = datetime.utcnow().isoformat() + "Z"
    provenance: dict[str, Any] = {}
    snapshot: FundamentalsSnapshot | None = None
    events: list[DividendEvent] = []
    name: str | None = None
    currency: str | None = None

    try:
        if fundamentals:
            info_result = await fetch_info(normalized_symbol, cache)
            info = info_result.result
            snapshot = snapshot_from_info(info)
            name = info.get("shortName") or info.get("longName")
            currency = info.get("currency")
            provenance["fundamentals"] = build_provenance(
                source="yfinance",
                as_of=as_of,
                **info_result.to_provenance(),
            )
        if dividends:
            div_result = await fetch_dividends(normalized_symbol, cache)
            events = div_result.result
            provenance["dividends"] = build_provenance(
                source="yfinance",
                as_of=as_of,
                events=len(events),
                **div_result.to_provenance(),
            )
    except ValueError as e:
        return build_error_response(error_type="invalid_symbol", message=str(e), symbol=normalized_symbol)
    except Exception as e:
        return build_error_response(
            error_type="data_unavailable",
            message=f"Failed to fetch data: {e}",
            symbol=normalized_symbol,
        )

    return MarketInputs(
        symbol=normalized_symbol,
        fundamentals=snapshot,
        events=events,
        provenance=provenance,
        name=name,
        currency=currency,
    )


def resolve_today(now: date | None) -> date:
    """The single place tools read the system clock."""
    return now if now is not None else date.today()
