# backend/tests/services/test_performance_integration.py
"""
Integration tests for the full performance pipeline:
database -> PortfolioLoader -> ValuationEngine -> AllocationCalculator.

Scenarios mirror how the API is used, with transaction dates relative to
"today" like the sample data.
"""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from portfolio_api.models import AssetKind, FundType, TransactionType
from portfolio_api.services.performance import PerformanceService
from tests.conftest import create_asset, create_transaction


@pytest.fixture
def service():
    return PerformanceService()


@pytest.fixture
def today():
    return date.today()


class TestPerformanceIntegration:

    def test_unknown_portfolio(self, db, service, today):
        assert service.calculate_performance(db, 12345, today, today) is None

    def test_buy_and_sell(self, db, service, sample_portfolio, today):
        apple = create_asset(db, sample_portfolio, ticker="AAPL", name="Apple")
        create_transaction(db, apple, today - timedelta(days=10), "10", "150")
        create_transaction(
            db, apple, today - timedelta(days=5), "5", "170", TransactionType.SELL
        )

        report = service.calculate_performance(
            db, sample_portfolio.id, today - timedelta(days=15), today
        )

        assert report.portfolio_id == sample_portfolio.id
        assert report.total_value == Decimal("850")
        assert report.assets[0].realized_gain == Decimal("100")
        assert report.assets[0].unrealized_gain == Decimal("100")
        assert report.allocation[0].allocation_percentage == Decimal("100")

    def test_old_transactions_still_count(self, db, service, sample_portfolio, today):
        legacy = create_asset(db, sample_portfolio, ticker="LEG", name="Legacy Stock")
        create_transaction(db, legacy, today - timedelta(days=730), "50", "100")

        report = service.calculate_performance(
            db, sample_portfolio.id, today - timedelta(days=30), today
        )

        assert report.total_value == Decimal("5000")
        assert len(report.assets) == 1
        assert report.assets[0].name == "Legacy Stock"
        assert report.assets[0].value == Decimal("5000")
        assert report.assets[0].unrealized_gain == Decimal("0")

    def test_mixed_kinds(self, db, service, sample_portfolio, today):
        stock = create_asset(db, sample_portfolio, ticker="AAPL", name="Apple Inc")
        bond = create_asset(
            db, sample_portfolio,
            ticker="UST10", name="US Treasury 10Y", kind=AssetKind.BOND,
            coupon_rate=Decimal("2.5"),
        )
        fund = create_asset(
            db, sample_portfolio,
            ticker="SPY", name="S&P 500 ETF", kind=AssetKind.FUND,
            fund_type=FundType.INDEX,
        )
        create_transaction(db, stock, today - timedelta(days=20), "10", "150")
        create_transaction(db, bond, today - timedelta(days=15), "5", "100")
        create_transaction(db, fund, today - timedelta(days=10), "3", "300")

        report = service.calculate_performance(
            db, sample_portfolio.id, today - timedelta(days=30), today
        )

        # 1500 + 500 + 900
        assert report.total_value == Decimal("2900")
        assert [a.ticker for a in report.assets] == ["AAPL", "UST10", "SPY"]
        assert report.total_points == 31

        values = [p.value for p in report.value_over_time]
        assert values[0] == Decimal("0")
        assert values == sorted(values)

    def test_same_day_order_follows_creation(self, db, service, sample_portfolio, today):
        """Buy recorded before sell on the same day: sell uses the buy's cost."""
        asset = create_asset(db, sample_portfolio)
        day = today - timedelta(days=1)
        create_transaction(db, asset, day, "10", "100")
        create_transaction(db, asset, day, "5", "120", TransactionType.SELL)

        report = service.calculate_performance(db, sample_portfolio.id, day, today)

        assert report.assets[0].realized_gain == Decimal("100")
        assert report.total_value == Decimal("600")

    def test_repeated_calls_are_equal(self, db, service, sample_portfolio, today):
        asset = create_asset(db, sample_portfolio)
        create_transaction(db, asset, today - timedelta(days=3), "7", "42")

        start = today - timedelta(days=7)
        first = service.calculate_performance(db, sample_portfolio.id, start, today)
        second = service.calculate_performance(db, sample_portfolio.id, start, today)

        assert first == second
