"""Payout ratio sustainability classification."""

import math

from valuation_mcp.analytics.models import PayoutSustainability

# (upper bound inclusive, is_sustainable, risk, message); first match wins
_PAYOUT_BUCKETS: tuple[tuple[float, bool, str, str], ...] = (
    (50.0, True, "low", "Conservative payout: the company retains most of its earnings"),
    (75.0, True, "medium", "Moderate payout: dividends look sustainable"),
    (100.0, True, "medium", "High payout: the company distributes almost all of its earnings"),
)

_NEGATIVE = PayoutSustainability(
    is_sustainable=False,
    risk="high",
    message="Company is paying dividends while reporting losses",
)

_ABOVE_EARNINGS = PayoutSustainability(
    is_sustainable=False,
    risk="high",
    message="Payout above 100% of earnings is not sustainable in the long run",
)


def classify_payout(ratio: float) -> PayoutSustainability:
    """
    Map a payout ratio (percent) to a sustainability verdict.

    Defined for every float: negative and NaN ratios are high risk, as is
    anything above 100%.
    """
    if math.isnan(ratio) or ratio < 0:
        return _NEGATIVE

    for upper, sustainable, risk, message in _PAYOUT_BUCKETS:
        if ratio <= upper:
            return PayoutSustainability(is_sustainable=sustainable, risk=risk, message=message)

    return _ABOVE_EARNINGS
