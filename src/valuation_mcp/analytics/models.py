"""Value objects produced and consumed by the analytics core.

All records are frozen dataclasses: inputs are caller-owned snapshots and
results are recomputed on every call, never mutated in place.
"""

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any


@dataclass(frozen=True)
class DividendEvent:
    """A single per-share payment (cash dividend, interest on capital, etc.)."""

    date: date
    amount: float
    kind: str = "dividend"

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "amount": self.amount,
            "kind": self.kind,
        }


@dataclass(frozen=True)
class FundamentalsSnapshot:
    """
    Point-in-time fundamentals for one symbol.

    Every field is optional: the upstream provider may omit any of them and
    None means "unknown", not zero. Ratios are fractions (0.12 == 12%).
    """

    price: float | None = None
    eps: float | None = None
    book_value: float | None = None
    dividend_yield: float | None = None
    dividend_rate: float | None = None
    return_on_equity: float | None = None
    return_on_assets: float | None = None
    debt_to_equity: float | None = None
    current_ratio: float | None = None
    revenue_growth: float | None = None
    earnings_growth: float | None = None
    volume: float | None = None
    price_to_earnings: float | None = None
    price_to_book: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class GrahamResult:
    current_price: float
    fair_price: float
    upside: float
    upside_percent: float
    is_undervalued: bool
    lpa: float
    vpa: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BazinResult:
    current_price: float
    ceiling_price: float
    upside: float
    upside_percent: float
    is_undervalued: bool
    average_dividend: float
    target_yield: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DividendAnalysis:
    total_paid: float = 0.0
    average_yield: float = 0.0
    consistency_score: int = 0
    growth_rate: float = 0.0
    payout_ratio: float = 0.0
    is_healthy: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DividendProjection:
    year: int
    dividend: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PayoutSustainability:
    is_sustainable: bool
    risk: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MonthProbability:
    """
    Historical payment frequency for one calendar month.

    `probability` is the share of all past payments that fell in this month
    (retrospective frequency), not a calibrated forecast.
    """

    month: int
    month_name: str
    probability: int
    has_historical_payment: bool
    average_amount: float
    occurrence_count: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DividendRadar:
    months: tuple[MonthProbability, ...]
    has_data: bool
    total_events: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "months": [m.to_dict() for m in self.months],
            "has_data": self.has_data,
            "total_events": self.total_events,
        }


@dataclass(frozen=True)
class ChecklistResult:
    checks: dict[str, bool]
    passed_count: int
    total_criteria: int
    score: int
    # Criteria that failed only because their input was missing
    unavailable: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "checks": dict(self.checks),
            "passed_count": self.passed_count,
            "total_criteria": self.total_criteria,
            "score": self.score,
            "unavailable": list(self.unavailable),
        }
