"""Closed-form value-investing heuristics (Graham, Bazin) and related ratios.

Degenerate inputs (non-positive EPS, book value, dividend or price) are an
expected, common case for loss-making or non-paying companies; they yield a
zeroed result instead of raising.
"""

import math

from valuation_mcp.analytics.models import BazinResult, GrahamResult

# Graham's multiplier: max P/E of 15 times max P/B of 1.5
GRAHAM_MULTIPLIER = 22.5

# Required margin of safety (percent) before Graham calls a stock undervalued
GRAHAM_MARGIN_OF_SAFETY = 10.0

DEFAULT_TARGET_YIELD = 0.06


def _positive(value: float | None) -> bool:
    return value is not None and math.isfinite(value) and value > 0


def _or_zero(value: float | None) -> float:
    if value is None or not math.isfinite(value):
        return 0.0
    return value


def _upside(target: float, current_price: float) -> tuple[float, float]:
    """Absolute and percent upside from current price to target (both 0 if price <= 0)."""
    if not _positive(current_price):
        return 0.0, 0.0
    upside = target - current_price
    return upside, upside / current_price * 100


def graham_price(
    lpa: float | None,
    vpa: float | None,
    current_price: float | None,
) -> GrahamResult:
    """
    Calculate Graham's fair price: sqrt(22.5 x LPA x VPA).

    Args:
        lpa: Earnings per share (LPA)
        vpa: Book value per share (VPA)
        current_price: Current market price

    Returns:
        GrahamResult; fair_price is 0 unless both LPA and VPA are positive.
        Undervalued only with at least a 10% margin of safety.
    """
    price = _or_zero(current_price)
    lpa_value = _or_zero(lpa)
    vpa_value = _or_zero(vpa)

    if not (_positive(lpa) and _positive(vpa)):
        return GrahamResult(
            current_price=price,
            fair_price=0.0,
            upside=0.0,
            upside_percent=0.0,
            is_undervalued=False,
            lpa=lpa_value,
            vpa=vpa_value,
        )

    fair_price = math.sqrt(GRAHAM_MULTIPLIER * lpa_value * vpa_value)
    upside, upside_percent = _upside(fair_price, price)

    return GrahamResult(
        current_price=price,
        fair_price=round(fair_price, 2),
        upside=round(upside, 2),
        upside_percent=round(upside_percent, 2),
        is_undervalued=_positive(price) and upside_percent >= GRAHAM_MARGIN_OF_SAFETY,
        lpa=lpa_value,
        vpa=vpa_value,
    )


def bazin_price(
    average_dividend: float | None,
    current_price: float | None,
    target_yield: float = DEFAULT_TARGET_YIELD,
) -> BazinResult:
    """
    Calculate Bazin's ceiling price: average dividend / target yield.

    The ceiling is the most one should pay to lock in at least `target_yield`
    per year. Unlike Graham, any price strictly below the ceiling counts as
    undervalued.

    Args:
        average_dividend: Average annual dividend per share
        current_price: Current market price
        target_yield: Minimum desired yield as a fraction (default: 0.06)

    Returns:
        BazinResult; ceiling_price is 0 unless dividend and target yield are positive
    """
    price = _or_zero(current_price)
    dividend = _or_zero(average_dividend)

    if not (_positive(average_dividend) and _positive(target_yield)):
        return BazinResult(
            current_price=price,
            ceiling_price=0.0,
            upside=0.0,
            upside_percent=0.0,
            is_undervalued=False,
            average_dividend=dividend,
            target_yield=target_yield,
        )

    ceiling_price = dividend / target_yield
    upside, upside_percent = _upside(ceiling_price, price)

    return BazinResult(
        current_price=price,
        ceiling_price=round(ceiling_price, 2),
        upside=round(upside, 2),
        upside_percent=round(upside_percent, 2),
        is_undervalued=_positive(price) and price < ceiling_price,
        average_dividend=dividend,
        target_yield=target_yield,
    )


def payout_ratio(dividend_per_share: float | None, eps: float | None) -> float:
    """Dividends per share over earnings per share, in percent (0 when EPS <= 0)."""
    if not _positive(eps):
        return 0.0
    return round(_or_zero(dividend_per_share) / eps * 100, 4)


def magic_formula_score(earnings_yield: float, return_on_capital: float) -> float:
    """
    Simplified Greenblatt magic-formula score.

    Averages earnings yield (inverse of P/E) and return on capital, each scaled
    to percent and capped at 100. Higher is better. The real formula ranks
    across a universe; this is a single-stock approximation.
    """
    normalized_ey = min(earnings_yield * 100, 100)
    normalized_roc = min(return_on_capital * 100, 100)
    return round((normalized_ey + normalized_roc) / 2, 2)


def discounted_cash_flow(
    free_cash_flow: float,
    growth_rate: float,
    discount_rate: float,
    years: int = 10,
) -> float:
    """
    Simplified two-stage DCF intrinsic value.

    Args:
        free_cash_flow: Current annual free cash flow
        growth_rate: Annual FCF growth as a fraction
        discount_rate: Discount rate as a fraction
        years: Explicit forecast horizon (default: 10)

    Returns:
        Present value of forecast cash flows plus discounted terminal value,
        or 0 when discount_rate <= growth_rate (perpetuity undefined)
    """
    if discount_rate <= growth_rate:
        return 0.0

    present_value = 0.0
    for i in range(1, years + 1):
        future_cash_flow = free_cash_flow * (1 + growth_rate) ** i
        present_value += future_cash_flow / (1 + discount_rate) ** i

    # Gordon growth terminal value
    terminal_cash_flow = free_cash_flow * (1 + growth_rate) ** (years + 1)
    terminal_value = terminal_cash_flow / (discount_rate - growth_rate)
    present_value += terminal_value / (1 + discount_rate) ** years

    return round(present_value, 2)
