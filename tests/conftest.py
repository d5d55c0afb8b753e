"""Pytest configuration and fixtures."""

from datetime import date

import pandas as pd
import pytest

from valuation_mcp.analytics.models import DividendEvent, FundamentalsSnapshot
from valuation_mcp.data.cache import MarketDataCache


class FakeClock:
    """Manually advanced clock for cache tests."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def today() -> date:
    """Fixed reference date for lookback windows."""
    return date(2024, 6, 30)


@pytest.fixture
def quarterly_dividends() -> list[DividendEvent]:
    """Quarterly payer, 2019-2024 H1, growing 0.10/quarter each year."""
    events = []
    for i, year in enumerate(range(2019, 2025)):
        amount = round(0.50 + 0.10 * i, 2)
        months = (3, 6) if year == 2024 else (3, 6, 9, 12)
        for month in months:
            events.append(DividendEvent(date=date(year, month, 15), amount=amount))
    return events


@pytest.fixture
def sample_fundamentals() -> FundamentalsSnapshot:
    """Healthy dividend payer that passes every checklist criterion."""
    return FundamentalsSnapshot(
        price=28.0,
        eps=2.5,
        book_value=18.0,
        dividend_yield=0.075,
        dividend_rate=2.1,
        return_on_equity=0.18,
        return_on_assets=0.08,
        debt_to_equity=0.45,
        current_ratio=1.6,
        revenue_growth=0.07,
        earnings_growth=0.04,
        volume=5_000_000,
        price_to_earnings=11.2,
        price_to_book=1.56,
    )


@pytest.fixture
def sample_info() -> dict:
    """yfinance-style info payload."""
    return {
        "symbol": "ITSA4.SA",
        "quoteType": "EQUITY",
        "shortName": "ITAUSA PN",
        "currency": "BRL",
        "currentPrice": 28.0,
        "trailingEps": 2.5,
        "bookValue": 18.0,
        "dividendYield": 7.5,
        "dividendRate": 2.1,
        "returnOnEquity": 0.18,
        "returnOnAssets": 0.08,
        "debtToEquity": 45.0,
        "currentRatio": 1.6,
        "revenueGrowth": 0.07,
        "earningsGrowth": 0.04,
        "regularMarketVolume": 5_000_000,
        "trailingPE": 11.2,
        "priceToBook": 1.56,
    }


@pytest.fixture
def sample_dividend_series() -> pd.Series:
    """yfinance-style dividends Series (tz-aware DatetimeIndex)."""
    index = pd.DatetimeIndex(
        ["2023-03-01", "2023-06-01", "2023-09-01", "2023-12-01"],
        tz="America/Sao_Paulo",
    )
    return pd.Series([0.5, 0.5, float("nan"), 0.75], index=index, name="Dividends")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def market_cache(tmp_path, clock) -> MarketDataCache:
    """Disk cache in a temp dir driven by the fake clock."""
    cache = MarketDataCache(cache_dir=str(tmp_path / "cache"), clock=clock)
    yield cache
    cache.cache.close()
