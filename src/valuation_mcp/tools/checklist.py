"""Buy-and-hold checklist tool."""

from datetime import date
from time import perf_counter
from typing import Any

from valuation_mcp.analytics.checklist import MIN_DAILY_LIQUIDITY, buy_and_hold_checklist
from valuation_mcp.analytics.dividends import analyze_dividends
from valuation_mcp.data.cache import MarketDataCache
from valuation_mcp.tools.inputs import (
    DIVIDEND_LOOKBACK_YEARS,
    MarketInputs,
    load_market_inputs,
    resolve_today,
)
from valuation_mcp.utils.provenance import build_meta


async def checklist_report(
    symbol: str,
    include_placeholders: bool = False,
    include_dividend_consistency: bool = False,
    cache: MarketDataCache | None = None,
    now: date | None = None,
) -> dict[str, Any]:
    """
    Score a stock against the buy-and-hold checklist.

    Args:
        symbol: Stock ticker symbol
        include_placeholders: Count criteria the provider cannot verify as passed
        include_dividend_consistency: Add the 5-year dividend consistency criterion
        cache: Market data cache (default: process-wide cache)
        now: Reference date for the dividend lookback window (default: today)

    Returns:
        Dict with per-criterion checks, passed_count, total_criteria and score
    """
    start_time = perf_counter()

    inputs = await load_market_inputs(symbol, dividends=include_dividend_consistency, cache=cache)
    if not isinstance(inputs, MarketInputs):
        return inputs

    analysis = None
    if include_dividend_consistency:
        today = resolve_today(now)
        analysis = analyze_dividends(inputs.events, DIVIDEND_LOOKBACK_YEARS, now=today)
    result = buy_and_hold_checklist(
        inputs.fundamentals,
        analysis,
        include_placeholders=include_placeholders,
    )

    duration_ms = (perf_counter() - start_time) * 1000

    return {
        "meta": build_meta("buy_and_hold_checklist", duration_ms),
        "data_provenance": inputs.provenance,
        "symbol": inputs.symbol,
        **result.to_dict(),
        "thresholds": {
            "dividend_yield": 0.05,
            "roe": 0.10,
            "debt_to_equity": 1.0,
            "daily_liquidity": MIN_DAILY_LIQUIDITY,
        },
        "placeholders_included": include_placeholders,
        "dividend_consistency_included": include_dividend_consistency,
    }
