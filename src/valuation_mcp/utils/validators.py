"""Validation utilities for tool parameters and rule checks."""

import operator
import re
from collections.abc import Callable

# Yahoo-style tickers: PETR4.SA, BRK-B, ^BVSP
_SYMBOL_PATTERN = re.compile(r"^[A-Z0-9^][A-Z0-9.\-^]{0,9}$")

MAX_LOOKBACK_YEARS = 30


def normalize_symbol(symbol: str) -> str:
    """
    Normalize and validate a ticker symbol.

    Args:
        symbol: Raw ticker (case and surrounding whitespace ignored)

    Returns:
        Uppercase, stripped symbol

    Raises:
        ValueError: If the symbol is empty, longer than 10 characters or
            contains characters outside letters, digits, '.', '-', '^'
    """
    normalized = (symbol or "").upper().strip()
    if not _SYMBOL_PATTERN.match(normalized):
        raise ValueError(f"Invalid symbol '{symbol}'. Expected 1-10 characters, e.g. PETR4.SA")
    return normalized


def validate_lookback_years(years: int) -> int:
    """Validate a dividend lookback window in whole years."""
    if not 1 <= years <= MAX_LOOKBACK_YEARS:
        raise ValueError(f"Invalid years {years}. Must be between 1 and {MAX_LOOKBACK_YEARS}")
    return years


def validate_target_yield(target_yield: float) -> float:
    """Validate a Bazin target yield given as a fraction (0.06 == 6%)."""
    if not 0 < target_yield < 1:
        raise ValueError(
            f"Invalid target_yield {target_yield}. Must be a fraction between 0 and 1 (e.g. 0.06)"
        )
    return target_yield


def check_rule(
    value: float | None,
    threshold: float,
    comparator: Callable[[float, float], bool] = operator.gt,
) -> bool | None:
    """
    Check a rule with nullable boolean semantics.

    If value is None, returns None (not False).

    Args:
        value: The value to check (may be None)
        threshold: The threshold to compare against
        comparator: Comparison function (default: operator.gt)

    Returns:
        True/False if value is not None, None otherwise
    """
    if value is None:
        return None
    return comparator(value, threshold)
