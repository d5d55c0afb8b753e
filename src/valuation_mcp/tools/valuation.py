"""Graham / Bazin valuation tools."""

from datetime import date
from time import perf_counter
from typing import Any

from valuation_mcp.analytics.dividends import analyze_dividends, average_dividend
from valuation_mcp.analytics.payout import classify_payout
from valuation_mcp.analytics.valuation import bazin_price, graham_price, payout_ratio
from valuation_mcp.data.cache import MarketDataCache
from valuation_mcp.tools.inputs import (
    DEFAULT_TARGET_YIELD,
    DIVIDEND_LOOKBACK_YEARS,
    MarketInputs,
    load_market_inputs,
    resolve_today,
)
from valuation_mcp.utils.provenance import build_error_response, build_meta
from valuation_mcp.utils.validators import validate_lookback_years, validate_target_yield


async def graham_valuation(
    symbol: str,
    cache: MarketDataCache | None = None,
) -> dict[str, Any]:
    """
    Calculate Graham's fair price for a symbol.

    Args:
        symbol: Stock ticker symbol
        cache: Market data cache (default: process-wide cache)

    Returns:
        Dict with GrahamResult fields, or an error response
    """
    start_time = perf_counter()

    inputs = await load_market_inputs(symbol, dividends=False, cache=cache)
    if not isinstance(inputs, MarketInputs):
        return inputs

    fundamentals = inputs.fundamentals
    result = graham_price(fundamentals.eps, fundamentals.book_value, fundamentals.price)

    duration_ms = (perf_counter() - start_time) * 1000

    return {
        "meta": build_meta("graham_valuation", duration_ms),
        "data_provenance": inputs.provenance,
        "symbol": inputs.symbol,
        **result.to_dict(),
    }


async def bazin_valuation(
    symbol: str,
    target_yield: float = DEFAULT_TARGET_YIELD,
    years: int = DIVIDEND_LOOKBACK_YEARS,
    cache: MarketDataCache | None = None,
    now: date | None = None,
) -> dict[str, Any]:
    """
    Calculate Bazin's ceiling price for a symbol.

    Args:
        symbol: Stock ticker symbol
        target_yield: Minimum desired yield as a fraction (default: 0.06)
        years: Dividend lookback window in years (default: 5)
        cache: Market data cache (default: process-wide cache)
        now: Reference date for the lookback window (default: today)

    Returns:
        Dict with BazinResult fields, or an error response
    """
    start_time = perf_counter()

    try:
        validate_target_yield(target_yield)
        validate_lookback_years(years)
    except ValueError as e:
        return build_error_response(error_type="invalid_parameters", message=str(e), symbol=symbol)

    inputs = await load_market_inputs(symbol, cache=cache)
    if not isinstance(inputs, MarketInputs):
        return inputs

    today = resolve_today(now)
    avg_dividend = average_dividend(inputs.events, years, now=today)
    result = bazin_price(avg_dividend, inputs.fundamentals.price, target_yield)

    duration_ms = (perf_counter() - start_time) * 1000

    return {
        "meta": build_meta("bazin_valuation", duration_ms),
        "data_provenance": inputs.provenance,
        "symbol": inputs.symbol,
        "lookback_years": years,
        **result.to_dict(),
    }


async def valuation_analysis(
    symbol: str,
    cache: MarketDataCache | None = None,
    now: date | None = None,
) -> dict[str, Any]:
    """
    Combined valuation: Graham, Bazin, dividend analysis and payout sustainability.

    Args:
        symbol: Stock ticker symbol
        cache: Market data cache (default: process-wide cache)
        now: Reference date for the lookback window (default: today)

    Returns:
        Dict with graham, bazin, dividend_analysis, payout_ratio,
        payout_sustainability and fundamentals sections
    """
    start_time = perf_counter()

    inputs = await load_market_inputs(symbol, cache=cache)
    if not isinstance(inputs, MarketInputs):
        return inputs

    today = resolve_today(now)
    fundamentals = inputs.fundamentals
    years = DIVIDEND_LOOKBACK_YEARS

    avg_dividend = average_dividend(inputs.events, years, now=today)
    graham = graham_price(fundamentals.eps, fundamentals.book_value, fundamentals.price)
    bazin = bazin_price(avg_dividend, fundamentals.price, DEFAULT_TARGET_YIELD)
    analysis = analyze_dividends(inputs.events, years, now=today, eps=fundamentals.eps)
    payout = payout_ratio(avg_dividend, fundamentals.eps)

    warnings: list[str] = []
    if fundamentals.eps is None or fundamentals.book_value is None:
        warnings.append("graham_inputs_missing")
    elif fundamentals.eps <= 0:
        warnings.append("negative_eps")
    if not inputs.events:
        warnings.append("no_dividend_history")

    duration_ms = (perf_counter() - start_time) * 1000

    return {
        "meta": build_meta("valuation_analysis", duration_ms),
        "data_provenance": inputs.provenance,
        "symbol": inputs.symbol,
        "name": inputs.name,
        "currency": inputs.currency,
        "current_price": fundamentals.price,
        "graham": graham.to_dict(),
        "bazin": bazin.to_dict(),
        "dividend_analysis": analysis.to_dict(),
        "payout_ratio": payout,
        "payout_sustainability": classify_payout(payout).to_dict(),
        "fundamentals": {
            "lpa": fundamentals.eps,
            "vpa": fundamentals.book_value,
            "pe": fundamentals.price_to_earnings,
            "pb": fundamentals.price_to_book,
            "dividend_yield": fundamentals.dividend_yield,
            "roe": fundamentals.return_on_equity,
            "roa": fundamentals.return_on_assets,
        },
        "warnings": warnings,
    }
