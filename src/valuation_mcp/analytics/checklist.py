"""Buy-and-hold suitability checklist."""

import operator
from collections.abc import Callable

from valuation_mcp.analytics.dividends import HEALTHY_CONSISTENCY
from valuation_mcp.analytics.models import ChecklistResult, DividendAnalysis, FundamentalsSnapshot
from valuation_mcp.utils.validators import check_rule

# Minimum daily traded notional (volume x price), in the quote currency
MIN_DAILY_LIQUIDITY = 2_000_000

# Criteria the market-data provider cannot answer. Kept only for parity with
# dashboards that still count them as passed.
PLACEHOLDER_CRITERIA = (
    "listed_over_5_years",
    "profit_last_20_quarters",
    "well_rated",
)


def _liquidity(fundamentals: FundamentalsSnapshot) -> float | None:
    if fundamentals.volume is None or fundamentals.price is None:
        return None
    return fundamentals.volume * fundamentals.price


# key -> (value getter, threshold, comparator)
_CRITERIA: dict[
    str,
    tuple[Callable[[FundamentalsSnapshot], float | None], float, Callable[[float, float], bool]],
] = {
    "positive_earnings": (lambda f: f.eps, 0, operator.gt),
    "high_dividend_yield": (lambda f: f.dividend_yield, 0.05, operator.gt),
    "strong_roe": (lambda f: f.return_on_equity, 0.10, operator.gt),
    "low_debt": (lambda f: f.debt_to_equity, 1.0, operator.lt),
    "revenue_growth": (lambda f: f.revenue_growth, 0, operator.ge),
    "earnings_growth": (lambda f: f.earnings_growth, 0, operator.ge),
    "good_liquidity": (_liquidity, MIN_DAILY_LIQUIDITY, operator.gt),
}


def buy_and_hold_checklist(
    fundamentals: FundamentalsSnapshot,
    dividend_analysis: DividendAnalysis | None = None,
    include_placeholders: bool = False,
) -> ChecklistResult:
    """
    Evaluate the fixed buy-and-hold criteria against a fundamentals snapshot.

    A criterion whose input is missing fails and is listed in `unavailable`,
    so a sparse snapshot never scores as if the data were good.

    Args:
        fundamentals: Fundamentals snapshot (any field may be None)
        dividend_analysis: Opt-in; adds the dividend consistency criterion when given
        include_placeholders: Count the always-true placeholder criteria

    Returns:
        ChecklistResult with per-criterion booleans and a 0-100 score
    """
    checks: dict[str, bool] = {}
    unavailable: list[str] = []

    for key, (getter, threshold, comparator) in _CRITERIA.items():
        outcome = check_rule(getter(fundamentals), threshold, comparator)
        if outcome is None:
            unavailable.append(key)
        checks[key] = bool(outcome)

    if dividend_analysis is not None:
        checks["consistent_dividends"] = dividend_analysis.consistency_score >= HEALTHY_CONSISTENCY

    if include_placeholders:
        for key in PLACEHOLDER_CRITERIA:
            checks[key] = True

    passed = sum(1 for ok in checks.values() if ok)
    total = len(checks)
    score = max(0, min(100, round(passed / total * 100)))

    return ChecklistResult(
        checks=checks,
        passed_count=passed,
        total_criteria=total,
        score=score,
        unavailable=tuple(unavailable),
    )
