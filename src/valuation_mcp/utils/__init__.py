"""Utility modules."""

from valuation_mcp.utils.provenance import build_error_response, build_meta, build_provenance
from valuation_mcp.utils.validators import (
    check_rule,
    normalize_symbol,
    validate_lookback_years,
    validate_target_yield,
)

__all__ = [
    "build_error_response",
    "build_meta",
    "build_provenance",
    "check_rule",
    "normalize_symbol",
    "validate_lookback_years",
    "validate_target_yield",
]
