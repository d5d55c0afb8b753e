"""Pure valuation and dividend analytics. No I/O, no clock reads."""

from valuation_mcp.analytics.checklist import PLACEHOLDER_CRITERIA, buy_and_hold_checklist
from valuation_mcp.analytics.dividends import (
    DEFAULT_LOOKBACK_YEARS,
    analyze_dividends,
    average_dividend,
    dividend_yield,
    project_dividends,
    yearly_totals,
    yield_on_cost,
)
from valuation_mcp.analytics.models import (
    BazinResult,
    ChecklistResult,
    DividendAnalysis,
    DividendEvent,
    DividendProjection,
    DividendRadar,
    FundamentalsSnapshot,
    GrahamResult,
    MonthProbability,
    PayoutSustainability,
)
from valuation_mcp.analytics.payout import classify_payout
from valuation_mcp.analytics.radar import dividend_radar
from valuation_mcp.analytics.valuation import (
    DEFAULT_TARGET_YIELD,
    bazin_price,
    discounted_cash_flow,
    graham_price,
    magic_formula_score,
    payout_ratio,
)

__all__ = [
    # Models
    "BazinResult",
    "ChecklistResult",
    "DividendAnalysis",
    "DividendEvent",
    "DividendProjection",
    "DividendRadar",
    "FundamentalsSnapshot",
    "GrahamResult",
    "MonthProbability",
    "PayoutSustainability",
    # Dividends
    "DEFAULT_LOOKBACK_YEARS",
    "analyze_dividends",
    "average_dividend",
    "dividend_yield",
    "project_dividends",
    "yearly_totals",
    "yield_on_cost",
    # Valuation
    "DEFAULT_TARGET_YIELD",
    "bazin_price",
    "discounted_cash_flow",
    "graham_price",
    "magic_formula_score",
    "payout_ratio",
    # Classifiers
    "PLACEHOLDER_CRITERIA",
    "buy_and_hold_checklist",
    "classify_payout",
    "dividend_radar",
]
