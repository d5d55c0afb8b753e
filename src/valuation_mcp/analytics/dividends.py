"""Dividend aggregation: per-year totals, averages, consistency and growth."""

from collections.abc import Iterable
from datetime import date, datetime

from valuation_mcp.analytics.models import DividendAnalysis, DividendEvent, DividendProjection
from valuation_mcp.analytics.valuation import payout_ratio

DEFAULT_LOOKBACK_YEARS = 5

# Consistency score a payer must reach to be considered healthy
HEALTHY_CONSISTENCY = 80


def _as_date(value: date) -> date:
    """Drop the time component so datetimes compare against plain dates."""
    if isinstance(value, datetime):
        return value.date()
    return value


def _years_before(now: date, years: int) -> date:
    """Same calendar day `years` years earlier (Feb 29 falls back to Feb 28)."""
    try:
        return now.replace(year=now.year - years)
    except ValueError:
        return now.replace(year=now.year - years, day=28)


def yearly_totals(
    events: Iterable[DividendEvent],
    years: int = DEFAULT_LOOKBACK_YEARS,
    *,
    now: date,
) -> dict[int, float]:
    """
    Sum in-window payments by calendar year of payment.

    Only events dated within [now - years, now] count; anything outside the
    window is excluded entirely.

    Args:
        events: Dividend events, in any order
        years: Lookback window in whole years
        now: Reference date closing the window

    Returns:
        Dict of year -> total amount, ordered by year ascending
    """
    today = _as_date(now)
    cutoff = _years_before(today, years)

    totals: dict[int, float] = {}
    for event in events:
        paid_on = _as_date(event.date)
        if paid_on < cutoff or paid_on > today:
            continue
        totals[paid_on.year] = totals.get(paid_on.year, 0.0) + event.amount

    return dict(sorted(totals.items()))


def average_dividend(
    events: Iterable[DividendEvent],
    years: int = DEFAULT_LOOKBACK_YEARS,
    *,
    now: date,
) -> float:
    """
    Mean of the per-year dividend totals inside the lookback window.

    Years without any payment are not counted as zero years: a company that
    paid in 3 of the last 5 years averages over those 3 totals.

    Returns:
        Average annual dividend per share (4 decimals), 0 when nothing was paid
    """
    totals = yearly_totals(events, years, now=now)
    if not totals:
        return 0.0
    return round(sum(totals.values()) / len(totals), 4)


def _growth_rate(totals: list[float]) -> float:
    """CAGR in percent between the earliest and latest yearly totals (0 if the earliest is 0)."""
    if len(totals) < 2:
        return 0.0

    first, last = totals[0], totals[-1]
    if first <= 0:
        return 0.0

    periods = len(totals) - 1
    return ((last / first) ** (1 / periods) - 1) * 100


def analyze_dividends(
    events: Iterable[DividendEvent],
    years: int = DEFAULT_LOOKBACK_YEARS,
    *,
    now: date,
    eps: float | None = None,
) -> DividendAnalysis:
    """
    Analyze dividend history for consistency and growth.

    Args:
        events: Dividend events, in any order
        years: Lookback window in whole years (default: 5)
        now: Reference date closing the window
        eps: Trailing earnings per share; enables payout_ratio when given

    Returns:
        DividendAnalysis; all zero/False when there is nothing to analyze
    """
    events = list(events)
    if not events or years <= 0:
        return DividendAnalysis()

    totals = yearly_totals(events, years, now=now)
    yearly = list(totals.values())
    total_paid = sum(yearly)

    consistency = round(len(totals) / years * 100)
    consistency = max(0, min(100, consistency))

    growth = _growth_rate(yearly)

    payout = 0.0
    if eps is not None:
        payout = payout_ratio(average_dividend(events, years, now=now), eps)

    return DividendAnalysis(
        total_paid=round(total_paid, 2),
        average_yield=round(total_paid / years, 4),
        consistency_score=consistency,
        growth_rate=round(growth, 2),
        payout_ratio=payout,
        is_healthy=consistency >= HEALTHY_CONSISTENCY and growth >= 0,
    )


def dividend_yield(annual_dividend: float, price: float) -> float:
    """Dividend yield in percent; 0 when price is not positive."""
    if price <= 0:
        return 0.0
    return round(annual_dividend / price * 100, 4)


def yield_on_cost(annual_dividend: float, purchase_price: float) -> float:
    """Yield on cost (YOC) in percent; 0 when purchase price is not positive."""
    if purchase_price <= 0:
        return 0.0
    return round(annual_dividend / purchase_price * 100, 4)


def project_dividends(
    current_dividend: float,
    growth_rate: float,
    years: int,
) -> list[DividendProjection]:
    """
    Compound the current dividend forward at a constant growth rate.

    Args:
        current_dividend: Latest annual dividend per share
        growth_rate: Annual growth in percent (e.g. 5.0 for 5%)
        years: Number of years to project

    Returns:
        One projection per year, starting at year 1
    """
    return [
        DividendProjection(
            year=i,
            dividend=round(current_dividend * (1 + growth_rate / 100) ** i, 4),
        )
        for i in range(1, years + 1)
    ]
