"""Valuation and dividend analysis tools."""

from valuation_mcp.tools.cache_admin import cache_stats, clear_cache, market_status
from valuation_mcp.tools.checklist import checklist_report
from valuation_mcp.tools.dividends import dividend_history, dividend_projection, dividend_radar_report
from valuation_mcp.tools.valuation import bazin_valuation, graham_valuation, valuation_analysis

__all__ = [
    "bazin_valuation",
    "cache_stats",
    "checklist_report",
    "clear_cache",
    "dividend_history",
    "dividend_projection",
    "dividend_radar_report",
    "graham_valuation",
    "market_status",
    "valuation_analysis",
]
