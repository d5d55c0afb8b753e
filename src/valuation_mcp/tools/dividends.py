"""Dividend history, radar and projection tools."""

from datetime import date
from time import perf_counter
from typing import Any

from valuation_mcp.analytics.dividends import (
    analyze_dividends,
    average_dividend,
    dividend_yield,
    project_dividends,
    yearly_totals,
)
from valuation_mcp.analytics.radar import dividend_radar
from valuation_mcp.data.cache import MarketDataCache
from valuation_mcp.tools.inputs import (
    DIVIDEND_LOOKBACK_YEARS,
    MarketInputs,
    load_market_inputs,
    resolve_today,
)
from valuation_mcp.utils.provenance import build_error_response, build_meta
from valuation_mcp.utils.validators import validate_lookback_years


async def dividend_history(
    symbol: str,
    years: int = DIVIDEND_LOOKBACK_YEARS,
    cache: MarketDataCache | None = None,
    now: date | None = None,
) -> dict[str, Any]:
    """
    Get dividend history with average dividend and consistency/growth analysis.

    Args:
        symbol: Stock ticker symbol
        years: Lookback window in years (default: 5)
        cache: Market data cache (default: process-wide cache)
        now: Reference date for the lookback window (default: today)

    Returns:
        Dict with events (most recent first), yearly totals, average_dividend and analysis
    """
    start_time = perf_counter()

    try:
        validate_lookback_years(years)
    except ValueError as e:
        return build_error_response(error_type="invalid_parameters", message=str(e), symbol=symbol)

    inputs = await load_market_inputs(symbol, fundamentals=False, cache=cache)
    if not isinstance(inputs, MarketInputs):
        return inputs

    today = resolve_today(now)
    totals = yearly_totals(inputs.events, years, now=today)

    duration_ms = (perf_counter() - start_time) * 1000

    return {
        "meta": build_meta("dividend_history", duration_ms),
        "data_provenance": inputs.provenance,
        "symbol": inputs.symbol,
        "lookback_years": years,
        "as_of_date": today.isoformat(),
        "events": [e.to_dict() for e in reversed(inputs.events)],
        "yearly_totals": {str(year): round(total, 4) for year, total in totals.items()},
        "average_dividend": average_dividend(inputs.events, years, now=today),
        "analysis": analyze_dividends(inputs.events, years, now=today).to_dict(),
    }


async def dividend_radar_report(
    symbol: str,
    cache: MarketDataCache | None = None,
) -> dict[str, Any]:
    """
    Seasonal dividend pattern: per-month historical payment frequency.

    Args:
        symbol: Stock ticker symbol
        cache: Market data cache (default: process-wide cache)

    Returns:
        Dict with 12 month entries, has_data and total_events
    """
    start_time = perf_counter()

    inputs = await load_market_inputs(symbol, fundamentals=False, cache=cache)
    if not isinstance(inputs, MarketInputs):
        return inputs

    radar = dividend_radar(inputs.events)

    duration_ms = (perf_counter() - start_time) * 1000

    return {
        "meta": build_meta("dividend_radar", duration_ms),
        "data_provenance": inputs.provenance,
        "symbol": inputs.symbol,
        # Probabilities are historical frequencies, not forecasts
        "probability_basis": "historical_frequency",
        **radar.to_dict(),
    }


async def dividend_projection(
    symbol: str,
    years: int = DIVIDEND_LOOKBACK_YEARS,
    cache: MarketDataCache | None = None,
    now: date | None = None,
) -> dict[str, Any]:
    """
    Project annual dividends forward from the trailing 12 months at the historical CAGR.

    Args:
        symbol: Stock ticker symbol
        years: Years to project, also used as the CAGR lookback (default: 5)
        cache: Market data cache (default: process-wide cache)
        now: Reference date (default: today)

    Returns:
        Dict with trailing dividend, growth rate, current yield and projections
    """
    start_time = perf_counter()

    try:
        validate_lookback_years(years)
    except ValueError as e:
        return build_error_response(error_type="invalid_parameters", message=str(e), symbol=symbol)

    inputs = await load_market_inputs(symbol, cache=cache)
    if not isinstance(inputs, MarketInputs):
        return inputs

    today = resolve_today(now)
    trailing_dividend = round(sum(yearly_totals(inputs.events, 1, now=today).values()), 4)
    analysis = analyze_dividends(inputs.events, years, now=today)
    price = inputs.fundamentals.price

    warnings: list[str] = []
    if trailing_dividend == 0:
        warnings.append("no_dividends_last_12_months")
    if analysis.growth_rate < 0:
        warnings.append("declining_dividends")

    duration_ms = (perf_counter() - start_time) * 1000

    return {
        "meta": build_meta("dividend_projection", duration_ms),
        "data_provenance": inputs.provenance,
        "symbol": inputs.symbol,
        "as_of_date": today.isoformat(),
        "trailing_12m_dividend": trailing_dividend,
        "growth_rate": analysis.growth_rate,
        "current_yield": dividend_yield(trailing_dividend, price) if price is not None else None,
        "projections": [
            p.to_dict() for p in project_dividends(trailing_dividend, analysis.growth_rate, years)
        ],
        "warnings": warnings,
    }
