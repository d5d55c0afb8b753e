"""Dividend radar: seasonal payment pattern by calendar month.

Reports how often past payments fell in each month. This is a retrospective
frequency, not a forecast: "probability" for March is simply the share of
all historical payments that were made in a March.
"""

from collections.abc import Iterable

from valuation_mcp.analytics.models import DividendEvent, DividendRadar, MonthProbability

MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def _empty_month(month: int) -> MonthProbability:
    return MonthProbability(
        month=month,
        month_name=MONTH_NAMES[month],
        probability=0,
        has_historical_payment=False,
        average_amount=0.0,
        occurrence_count=0,
    )


def dividend_radar(events: Iterable[DividendEvent]) -> DividendRadar:
    """
    Bucket dividend events by payment month (0=Jan .. 11=Dec).

    Uses the full history supplied, with no lookback window.

    Args:
        events: Dividend events, in any order

    Returns:
        DividendRadar with exactly 12 month entries; has_data is False
        (and every month zeroed) when there are no events
    """
    amounts_by_month: list[list[float]] = [[] for _ in range(12)]
    for event in events:
        amounts_by_month[event.date.month - 1].append(event.amount)

    total = sum(len(amounts) for amounts in amounts_by_month)
    if total == 0:
        return DividendRadar(
            months=tuple(_empty_month(m) for m in range(12)),
            has_data=False,
            total_events=0,
        )

    months = []
    for month, amounts in enumerate(amounts_by_month):
        if not amounts:
            months.append(_empty_month(month))
            continue
        months.append(
            MonthProbability(
                month=month,
                month_name=MONTH_NAMES[month],
                probability=round(len(amounts) / total * 100),
                has_historical_payment=True,
                average_amount=round(sum(amounts) / len(amounts), 4),
                occurrence_count=len(amounts),
            )
        )

    return DividendRadar(months=tuple(months), has_data=True, total_events=total)
