"""Convert raw yfinance payloads into analytics inputs."""

from typing import Any

import pandas as pd

from valuation_mcp.analytics.models import DividendEvent, FundamentalsSnapshot


def safe_float(value: Any) -> float | None:
    """Convert to float or return None (NaN/inf and non-numerics count as missing)."""
    if value is None:
        return None
    try:
        result = float(value)
    except (ValueError, TypeError):
        return None
    if pd.isna(result) or result in (float("inf"), float("-inf")):
        return None
    return result


def _first(info: dict[str, Any], *keys: str) -> float | None:
    """First key with a usable numeric value."""
    for key in keys:
        value = safe_float(info.get(key))
        if value is not None:
            return value
    return None


def snapshot_from_info(info: dict[str, Any]) -> FundamentalsSnapshot:
    """
    Build a FundamentalsSnapshot from a yfinance `Ticker.info` dict.

    Missing keys stay None. Ratios are returned as fractions.

    Args:
        info: Info dict from yfinance

    Returns:
        FundamentalsSnapshot
    """
    # yfinance returns D/E as a percentage (e.g. 45.3 == 0.453)
    debt_to_equity = safe_float(info.get("debtToEquity"))
    if debt_to_equity is not None and debt_to_equity > 10:
        debt_to_equity = debt_to_equity / 100

    # Dividend yield is sometimes a percentage, sometimes a fraction
    dividend_yield = _first(info, "dividendYield", "trailingAnnualDividendYield")
    if dividend_yield is not None and dividend_yield > 1:
        dividend_yield = dividend_yield / 100

    return FundamentalsSnapshot(
        price=_first(info, "currentPrice", "regularMarketPrice"),
        eps=_first(info, "trailingEps", "epsTrailingTwelveMonths"),
        book_value=safe_float(info.get("bookValue")),
        dividend_yield=dividend_yield,
        dividend_rate=_first(info, "dividendRate", "trailingAnnualDividendRate"),
        return_on_equity=safe_float(info.get("returnOnEquity")),
        return_on_assets=safe_float(info.get("returnOnAssets")),
        debt_to_equity=debt_to_equity,
        current_ratio=safe_float(info.get("currentRatio")),
        revenue_growth=safe_float(info.get("revenueGrowth")),
        earnings_growth=safe_float(info.get("earningsGrowth")),
        volume=_first(info, "regularMarketVolume", "volume"),
        price_to_earnings=safe_float(info.get("trailingPE")),
        price_to_book=safe_float(info.get("priceToBook")),
    )


def events_from_series(series: pd.Series | None, kind: str = "dividend") -> list[DividendEvent]:
    """
    Turn a yfinance dividends Series (DatetimeIndex -> amount) into events.

    NaN and negative amounts are skipped. Output is sorted by date.

    Args:
        series: `Ticker.dividends` Series, possibly empty or None
        kind: Label attached to every event

    Returns:
        List of DividendEvent
    """
    if series is None or len(series) == 0:
        return []

    events: list[DividendEvent] = []
    for timestamp, value in series.items():
        amount = safe_float(value)
        if amount is None or amount < 0:
            continue
        events.append(
            DividendEvent(
                date=pd.Timestamp(timestamp).date(),
                amount=amount,
                kind=kind,
            )
        )

    events.sort(key=lambda e: e.date)
    return events
