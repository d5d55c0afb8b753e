"""Tests for dividend aggregation."""

from datetime import date, datetime

import pytest

from valuation_mcp.analytics.dividends import (
    analyze_dividends,
    average_dividend,
    dividend_yield,
    project_dividends,
    yearly_totals,
    yield_on_cost,
)
from valuation_mcp.analytics.models import DividendAnalysis, DividendEvent


class TestYearlyTotals:
    """Tests for yearly_totals windowing."""

    def test_window_excludes_old_events(self, quarterly_dividends, today) -> None:
        """Test payments before now - years are dropped entirely."""
        totals = yearly_totals(quarterly_dividends, 5, now=today)

        assert list(totals) == [2019, 2020, 2021, 2022, 2023, 2024]
        # Only Sep and Dec 2019 fall after 2019-06-30
        assert totals[2019] == pytest.approx(1.0)
        assert totals[2020] == pytest.approx(2.4)
        assert totals[2024] == pytest.approx(2.0)

    def test_window_bounds_inclusive(self) -> None:
        """Test events exactly on the window edges are included."""
        events = [
            DividendEvent(date=date(2019, 6, 30), amount=1.0),
            DividendEvent(date=date(2024, 6, 30), amount=2.0),
        ]
        totals = yearly_totals(events, 5, now=date(2024, 6, 30))
        assert totals == {2019: 1.0, 2024: 2.0}

    def test_future_events_excluded(self) -> None:
        """Test announced but unpaid future events are ignored."""
        events = [DividendEvent(date=date(2024, 12, 1), amount=1.0)]
        assert yearly_totals(events, 5, now=date(2024, 6, 30)) == {}

    def test_leap_day_reference(self) -> None:
        """Test a Feb 29 reference date falls back to Feb 28 for the cutoff."""
        events = [
            DividendEvent(date=date(2019, 2, 27), amount=1.0),
            DividendEvent(date=date(2019, 2, 28), amount=2.0),
        ]
        assert yearly_totals(events, 5, now=date(2024, 2, 29)) == {2019: 2.0}

    def test_accepts_datetime_now(self, quarterly_dividends) -> None:
        """Test datetime references compare as dates."""
        by_date = yearly_totals(quarterly_dividends, 5, now=date(2024, 6, 30))
        by_datetime = yearly_totals(quarterly_dividends, 5, now=datetime(2024, 6, 30, 23, 59))
        assert by_date == by_datetime

    def test_unsorted_input(self, quarterly_dividends, today) -> None:
        """Test input order does not matter."""
        forward = yearly_totals(quarterly_dividends, 5, now=today)
        backward = yearly_totals(list(reversed(quarterly_dividends)), 5, now=today)
        assert forward == backward


class TestAverageDividend:
    """Tests for average_dividend."""

    def test_average_over_paying_years(self, quarterly_dividends, today) -> None:
        """Test the average is over years with payments."""
        # (1.0 + 2.4 + 2.8 + 3.2 + 3.6 + 2.0) / 6
        assert average_dividend(quarterly_dividends, 5, now=today) == 2.5

    def test_gap_years_not_counted_as_zero(self) -> None:
        """Test years without payments do not drag the average down."""
        events = [
            DividendEvent(date=date(2020, 5, 1), amount=1.0),
            DividendEvent(date=date(2023, 5, 1), amount=3.0),
        ]
        assert average_dividend(events, 5, now=date(2024, 6, 30)) == 2.0

    def test_empty(self, today) -> None:
        """Test no events averages to 0."""
        assert average_dividend([], 5, now=today) == 0

    def test_nothing_in_window(self, today) -> None:
        """Test events older than the window average to 0."""
        events = [DividendEvent(date=date(2010, 5, 1), amount=1.0)]
        assert average_dividend(events, 5, now=today) == 0


class TestAnalyzeDividends:
    """Tests for analyze_dividends."""

    def test_healthy_grower(self, quarterly_dividends, today) -> None:
        """Test a steady, growing payer is healthy."""
        analysis = analyze_dividends(quarterly_dividends, 5, now=today)

        assert analysis.total_paid == 15.0
        assert analysis.average_yield == 3.0
        # 6 calendar years touched by a 5-year window clamps at 100
        assert analysis.consistency_score == 100
        # CAGR from 1.0 to 2.0 over 5 periods
        assert analysis.growth_rate == 14.87
        assert analysis.is_healthy is True

    def test_empty_is_zeroed(self, today) -> None:
        """Test an empty history returns the all-zero analysis."""
        assert analyze_dividends([], 5, now=today) == DividendAnalysis()

    def test_non_positive_years(self, quarterly_dividends, today) -> None:
        """Test a zero-year window returns the all-zero analysis."""
        assert analyze_dividends(quarterly_dividends, 0, now=today) == DividendAnalysis()

    def test_sporadic_payer_not_healthy(self) -> None:
        """Test paying in 2 of 5 years fails the consistency bar."""
        events = [
            DividendEvent(date=date(2021, 5, 1), amount=1.0),
            DividendEvent(date=date(2023, 5, 1), amount=1.0),
        ]
        analysis = analyze_dividends(events, 5, now=date(2024, 6, 30))

        assert analysis.consistency_score == 40
        assert analysis.is_healthy is False

    def test_declining_dividends_not_healthy(self) -> None:
        """Test a consistent payer with shrinking dividends is not healthy."""
        events = [
            DividendEvent(date=date(year, 5, 1), amount=amount)
            for year, amount in [(2020, 4.0), (2021, 3.0), (2022, 2.5), (2023, 2.0), (2024, 1.0)]
        ]
        analysis = analyze_dividends(events, 5, now=date(2024, 6, 30))

        assert analysis.consistency_score == 100
        assert analysis.growth_rate < 0
        assert analysis.is_healthy is False

    def test_single_year_has_no_growth(self) -> None:
        """Test growth is 0 with a single yearly bucket."""
        events = [DividendEvent(date=date(2024, 3, 1), amount=1.0)]
        analysis = analyze_dividends(events, 5, now=date(2024, 6, 30))
        assert analysis.growth_rate == 0
        assert analysis.consistency_score == 20

    def test_zero_earliest_year_has_no_growth(self) -> None:
        """Test growth is 0 when the earliest yearly total is zero."""
        events = [
            DividendEvent(date=date(2021, 5, 1), amount=0.0),
            DividendEvent(date=date(2022, 5, 1), amount=1.0),
            DividendEvent(date=date(2023, 5, 1), amount=2.0),
        ]
        analysis = analyze_dividends(events, 5, now=date(2024, 6, 30))

        assert analysis.growth_rate == 0
        assert analysis.consistency_score == 60

    def test_growth_uses_earliest_and_latest_years(self) -> None:
        """Test CAGR spans every yearly bucket from first to last."""
        events = [
            DividendEvent(date=date(2021, 5, 1), amount=1.0),
            DividendEvent(date=date(2022, 5, 1), amount=3.0),
            DividendEvent(date=date(2023, 5, 1), amount=4.0),
        ]
        analysis = analyze_dividends(events, 5, now=date(2024, 6, 30))

        # 1.0 -> 4.0 over two periods
        assert analysis.growth_rate == 100.0

    def test_payout_ratio_with_eps(self, quarterly_dividends, today) -> None:
        """Test payout ratio uses the average dividend over EPS."""
        analysis = analyze_dividends(quarterly_dividends, 5, now=today, eps=5.0)
        assert analysis.payout_ratio == 50.0

    def test_payout_ratio_without_eps(self, quarterly_dividends, today) -> None:
        """Test payout ratio stays 0 without EPS."""
        assert analyze_dividends(quarterly_dividends, 5, now=today).payout_ratio == 0

    def test_idempotent(self, quarterly_dividends, today) -> None:
        """Test repeated calls with the same inputs agree."""
        first = analyze_dividends(quarterly_dividends, 5, now=today)
        second = analyze_dividends(quarterly_dividends, 5, now=today)
        assert first == second

    def test_consistency_bounds(self, quarterly_dividends, today) -> None:
        """Test consistency stays within 0-100 for any window."""
        for years in range(1, 11):
            score = analyze_dividends(quarterly_dividends, years, now=today).consistency_score
            assert 0 <= score <= 100


class TestYieldHelpers:
    """Tests for yield and projection helpers."""

    def test_dividend_yield(self) -> None:
        """Test yield is expressed in percent."""
        assert dividend_yield(2.0, 40.0) == 5.0

    def test_dividend_yield_zero_price(self) -> None:
        """Test yield is 0 for a non-positive price."""
        assert dividend_yield(2.0, 0) == 0

    def test_yield_on_cost(self) -> None:
        """Test YOC uses the purchase price."""
        assert yield_on_cost(2.0, 20.0) == 10.0
        assert yield_on_cost(2.0, -1.0) == 0

    def test_project_dividends(self) -> None:
        """Test dividends compound at the growth rate."""
        projections = project_dividends(1.0, 10.0, 3)

        assert [p.year for p in projections] == [1, 2, 3]
        assert [p.dividend for p in projections] == [1.1, 1.21, 1.331]

    def test_project_dividends_no_years(self) -> None:
        """Test a zero horizon yields no projections."""
        assert project_dividends(1.0, 10.0, 0) == []
