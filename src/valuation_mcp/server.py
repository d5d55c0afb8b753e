"""Valuation Analysis MCP Server using FastMCP."""

import asyncio
import json
import logging
import os

from fastmcp import FastMCP

from valuation_mcp import SCHEMA_VERSION, SERVER_VERSION
from valuation_mcp.data.yfinance_client import shutdown_executor
from valuation_mcp.prompts.templates import get_prompt
from valuation_mcp.tools import (
    bazin_valuation,
    cache_stats,
    checklist_report,
    clear_cache,
    dividend_history,
    dividend_projection,
    dividend_radar_report,
    graham_valuation,
    market_status,
    valuation_analysis,
)
from valuation_mcp.tools.inputs import DEFAULT_TARGET_YIELD, DIVIDEND_LOOKBACK_YEARS

# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=getattr(logging, log_level, logging.INFO))
logger = logging.getLogger(__name__)

# Create FastMCP server instance
mcp = FastMCP(
    name="valuation-analysis",
)


# ============================================================================
# TOOLS
# ============================================================================


@mcp.tool
async def calculate_graham_price(symbol: str) -> str:
    """
    Calculate Graham's fair price: sqrt(22.5 x EPS x book value per share).

    Fair price is 0 when EPS or book value is not positive. A stock counts as
    undervalued only with at least a 10% margin of safety.

    Args:
        symbol: Stock ticker symbol (e.g., PETR4.SA, ITSA4.SA, KO)

    Returns:
        JSON with fair_price, upside, upside_percent, is_undervalued, lpa, vpa
    """
    result = await graham_valuation(symbol=symbol)
    return json.dumps(result, indent=2, default=str)


@mcp.tool
async def calculate_bazin_price(symbol: str, target_yield: float = DEFAULT_TARGET_YIELD) -> str:
    """
    Calculate Bazin's ceiling price: average annual dividend / target yield.

    Average dividend is taken over the last 5 years of payments.

    Args:
        symbol: Stock ticker symbol
        target_yield: Minimum desired yield as a fraction (default: 0.06)

    Returns:
        JSON with ceiling_price, upside, upside_percent, is_undervalued, average_dividend
    """
    result = await bazin_valuation(symbol=symbol, target_yield=target_yield)
    return json.dumps(result, indent=2, default=str)


@mcp.tool
async def get_valuation_analysis(symbol: str) -> str:
    """
    Full valuation picture: Graham, Bazin, dividend analysis and payout sustainability.

    Args:
        symbol: Stock ticker symbol

    Returns:
        JSON with graham, bazin, dividend_analysis, payout_ratio,
        payout_sustainability and key fundamentals (LPA, VPA, P/E, P/B, DY, ROE, ROA)
    """
    result = await valuation_analysis(symbol=symbol)
    return json.dumps(result, indent=2, default=str)


@mcp.tool
async def get_dividends(symbol: str, years: int = DIVIDEND_LOOKBACK_YEARS) -> str:
    """
    Get dividend history with average dividend, consistency and growth.

    Args:
        symbol: Stock ticker symbol
        years: Lookback window in years (default: 5)

    Returns:
        JSON with events, yearly totals, average_dividend and analysis
    """
    result = await dividend_history(symbol=symbol, years=years)
    return json.dumps(result, indent=2, default=str)


@mcp.tool
async def get_dividend_radar(symbol: str) -> str:
    """
    Dividend radar: which calendar months the company has historically paid in.

    Probabilities are the share of all past payments made in each month.
    They describe history, not a forecast.

    Args:
        symbol: Stock ticker symbol

    Returns:
        JSON with 12 month entries (probability, average_amount, occurrence_count) and has_data
    """
    result = await dividend_radar_report(symbol=symbol)
    return json.dumps(result, indent=2, default=str)


@mcp.tool
async def project_dividend_income(symbol: str, years: int = DIVIDEND_LOOKBACK_YEARS) -> str:
    """
    Project annual dividends per share from the trailing 12 months at the historical CAGR.

    Args:
        symbol: Stock ticker symbol
        years: Years to project (default: 5)

    Returns:
        JSON with trailing dividend, growth rate, current yield and yearly projections
    """
    result = await dividend_projection(symbol=symbol, years=years)
    return json.dumps(result, indent=2, default=str)


@mcp.tool
async def get_buy_and_hold_checklist(
    symbol: str,
    include_placeholders: bool = False,
    include_dividend_consistency: bool = False,
) -> str:
    """
    Score a stock 0-100 against the buy-and-hold checklist.

    Criteria: positive EPS, dividend yield > 5%, ROE > 10%, debt/equity < 1,
    non-negative revenue and earnings growth, and daily liquidity > 2M.

    Args:
        symbol: Stock ticker symbol
        include_placeholders: Also count listing tenure, 20-quarter profit streak
            and user rating as passed (data not available from the provider)
        include_dividend_consistency: Also require dividends in at least 80% of
            the last 5 years

    Returns:
        JSON with per-criterion checks, passed_count, total_criteria, score and unavailable criteria
    """
    result = await checklist_report(
        symbol=symbol,
        include_placeholders=include_placeholders,
        include_dividend_consistency=include_dividend_consistency,
    )
    return json.dumps(result, indent=2, default=str)


@mcp.tool
def get_market_status() -> str:
    """
    Check whether the B3 exchange is in its regular session (clock-based, no holidays).

    Returns:
        JSON with state (closed, pre_market, regular, after_hours) and is_open
    """
    return json.dumps(market_status(), indent=2, default=str)


@mcp.tool
def clear_market_cache(symbol: str | None = None) -> str:
    """
    Clear cached market data for one symbol, or everything when no symbol is given.

    Args:
        symbol: Ticker to clear (optional)

    Returns:
        JSON with success flag and number of removed entries
    """
    return json.dumps(clear_cache(symbol=symbol), indent=2, default=str)


@mcp.tool
def get_cache_stats() -> str:
    """
    Report cached market data entries and per-category TTLs.

    Returns:
        JSON with size, keys and ttl_seconds
    """
    return json.dumps(cache_stats(), indent=2, default=str)


# ============================================================================
# PROMPTS
# ============================================================================


@mcp.prompt
def value_memo(symbol: str) -> str:
    """Generate a Graham/Bazin value investment memo for a stock."""
    result = get_prompt("value_memo", {"symbol": symbol})
    if result:
        return result["messages"][0]["content"]
    return f"Analyze {symbol} using get_valuation_analysis."


@mcp.prompt
def dividend_income_memo(symbol: str) -> str:
    """Assess a stock as a dividend income holding."""
    result = get_prompt("dividend_income_memo", {"symbol": symbol})
    if result:
        return result["messages"][0]["content"]
    return f"Analyze {symbol} dividends using get_dividends and get_dividend_radar."


# ============================================================================
# ENTRY POINT
# ============================================================================


def main() -> None:
    """Run the MCP server."""
    logger.info(f"Starting Valuation Analysis MCP Server v{SERVER_VERSION} (schema v{SCHEMA_VERSION})")
    try:
        mcp.run()
    finally:
        asyncio.run(shutdown_executor())


if __name__ == "__main__":
    main()
