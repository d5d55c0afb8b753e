"""Tests for the buy-and-hold checklist."""

from valuation_mcp.analytics.checklist import PLACEHOLDER_CRITERIA, buy_and_hold_checklist
from valuation_mcp.analytics.models import DividendAnalysis, FundamentalsSnapshot


class TestBuyAndHoldChecklist:
    """Tests for buy_and_hold_checklist."""

    def test_all_pass(self, sample_fundamentals) -> None:
        """Test a snapshot meeting every threshold scores 100."""
        result = buy_and_hold_checklist(sample_fundamentals)

        assert result.total_criteria == 7
        assert result.passed_count == 7
        assert result.score == 100
        assert result.unavailable == ()

    def test_none_pass(self) -> None:
        """Test a snapshot failing every threshold scores 0."""
        weak = FundamentalsSnapshot(
            price=1.0,
            eps=-0.5,
            dividend_yield=0.01,
            return_on_equity=-0.05,
            debt_to_equity=3.0,
            revenue_growth=-0.1,
            earnings_growth=-0.2,
            volume=1000,
        )
        result = buy_and_hold_checklist(weak)

        assert result.passed_count == 0
        assert result.score == 0
        assert result.unavailable == ()

    def test_missing_data_fails_and_is_reported(self) -> None:
        """Test missing fields fail rather than pass silently."""
        result = buy_and_hold_checklist(FundamentalsSnapshot())

        assert result.score == 0
        assert set(result.unavailable) == set(result.checks)
        assert "good_liquidity" in result.unavailable

    def test_partial_snapshot(self, sample_fundamentals) -> None:
        """Test only the missing criterion is listed as unavailable."""
        snapshot = FundamentalsSnapshot(**{**sample_fundamentals.to_dict(), "debt_to_equity": None})
        result = buy_and_hold_checklist(snapshot)

        assert result.unavailable == ("low_debt",)
        assert result.checks["low_debt"] is False
        assert result.passed_count == 6
        assert result.score == 86

    def test_dividend_criterion_opt_in(self, sample_fundamentals) -> None:
        """Test the base checklist has exactly the seven fundamentals criteria."""
        result = buy_and_hold_checklist(sample_fundamentals)

        assert result.total_criteria == 7
        assert "consistent_dividends" not in result.checks

    def test_consistent_dividends(self, sample_fundamentals) -> None:
        """Test the dividend criterion is added when an analysis is supplied."""
        steady = buy_and_hold_checklist(sample_fundamentals, DividendAnalysis(consistency_score=80))
        sporadic = buy_and_hold_checklist(sample_fundamentals, DividendAnalysis(consistency_score=40))

        assert steady.total_criteria == 8
        assert steady.checks["consistent_dividends"] is True
        assert sporadic.checks["consistent_dividends"] is False
        assert sporadic.score == 88

    def test_placeholders_excluded_by_default(self, sample_fundamentals) -> None:
        """Test placeholder criteria are opt-in."""
        result = buy_and_hold_checklist(sample_fundamentals)
        assert not set(PLACEHOLDER_CRITERIA) & set(result.checks)

    def test_placeholders_included(self) -> None:
        """Test placeholders count as passed when requested."""
        result = buy_and_hold_checklist(FundamentalsSnapshot(), include_placeholders=True)

        assert result.total_criteria == 10
        assert result.passed_count == 3
        assert result.score == 30
        assert all(result.checks[key] for key in PLACEHOLDER_CRITERIA)

    def test_liquidity_threshold(self, sample_fundamentals) -> None:
        """Test liquidity is volume x price against 2M."""
        thin = FundamentalsSnapshot(**{**sample_fundamentals.to_dict(), "volume": 50_000})
        assert buy_and_hold_checklist(thin).checks["good_liquidity"] is False

    def test_score_bounds(self, sample_fundamentals) -> None:
        """Test score stays an integer in 0-100."""
        result = buy_and_hold_checklist(sample_fundamentals, DividendAnalysis(), include_placeholders=True)
        assert isinstance(result.score, int)
        assert 0 <= result.score <= 100
