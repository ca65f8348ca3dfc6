# backend/tests/services/test_loader.py
"""
Integration tests for PortfolioLoader against an in-memory SQLite database.

Verifies that ORM rows are copied into the frozen aggregate correctly:
kind-specific details, transaction ordering and portfolio scoping.
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from portfolio_api.models import AssetKind, BondType, FundType, TransactionType
from portfolio_api.services.performance.loader import PortfolioLoader
from portfolio_api.services.performance.types import (
    BondDetails,
    FundDetails,
    PortfolioAggregate,
    StockDetails,
)
from tests.conftest import (
    create_asset,
    create_customer,
    create_portfolio,
    create_transaction,
)


@pytest.fixture
def loader():
    return PortfolioLoader()


class TestLoadPortfolio:
    """Tests for loading the aggregate."""

    def test_unknown_portfolio_returns_none(self, db, loader):
        assert loader.load(db, 999) is None

    def test_empty_portfolio(self, db, loader, sample_portfolio):
        aggregate = loader.load(db, sample_portfolio.id)

        assert isinstance(aggregate, PortfolioAggregate)
        assert aggregate.id == sample_portfolio.id
        assert aggregate.name == "Test Portfolio"
        assert aggregate.customer_id == sample_portfolio.customer_id
        assert aggregate.assets == ()

    def test_only_own_assets_are_loaded(self, db, loader, sample_customer):
        mine = create_portfolio(db, sample_customer, name="Mine")
        other = create_portfolio(db, sample_customer, name="Other")
        create_asset(db, mine, ticker="AAPL")
        create_asset(db, other, ticker="MSFT")

        aggregate = loader.load(db, mine.id)

        assert [a.ticker for a in aggregate.assets] == ["AAPL"]


class TestAssetDetails:
    """Each kind gets its own details payload."""

    def test_stock_details(self, db, loader, sample_portfolio):
        create_asset(
            db, sample_portfolio,
            ticker="AAPL",
            kind=AssetKind.STOCK,
            exchange="NASDAQ",
            sector="Technology",
            dividend_yield=Decimal("0.6"),
        )

        asset = loader.load(db, sample_portfolio.id).assets[0]

        assert asset.kind == AssetKind.STOCK
        assert isinstance(asset.details, StockDetails)
        assert asset.details.exchange == "NASDAQ"
        assert asset.details.sector == "Technology"
        assert asset.details.dividend_yield == Decimal("0.6")

    def test_bond_details(self, db, loader, sample_portfolio):
        create_asset(
            db, sample_portfolio,
            ticker="UST10",
            name="US Treasury 10Y",
            kind=AssetKind.BOND,
            issuer="US Govt",
            coupon_rate=Decimal("2.5"),
            maturity_date=date(2034, 1, 1),
            bond_type=BondType.GOVERNMENT,
        )

        asset = loader.load(db, sample_portfolio.id).assets[0]

        assert isinstance(asset.details, BondDetails)
        assert asset.details.issuer == "US Govt"
        assert asset.details.coupon_rate == Decimal("2.5")
        assert asset.details.maturity_date == date(2034, 1, 1)
        assert asset.details.bond_type == BondType.GOVERNMENT

    def test_fund_details(self, db, loader, sample_portfolio):
        create_asset(
            db, sample_portfolio,
            ticker="SPY",
            name="S&P 500 ETF",
            kind=AssetKind.FUND,
            fund_manager="Vanguard",
            fund_type=FundType.INDEX,
            expense_ratio=Decimal("0.09"),
        )

        asset = loader.load(db, sample_portfolio.id).assets[0]

        assert isinstance(asset.details, FundDetails)
        assert asset.details.fund_manager == "Vanguard"
        assert asset.details.fund_type == FundType.INDEX
        assert asset.details.expense_ratio == Decimal("0.09")


class TestTransactions:
    """Transactions are copied in (date, id) order."""

    def test_transactions_ordered_by_date_then_id(self, db, loader, sample_portfolio):
        asset = create_asset(db, sample_portfolio)
        late = create_transaction(db, asset, date(2024, 3, 1), "1", "110")
        same_day_first = create_transaction(db, asset, date(2024, 1, 15), "10", "100")
        same_day_second = create_transaction(
            db, asset, date(2024, 1, 15), "4", "105", TransactionType.SELL
        )

        record = loader.load(db, sample_portfolio.id).assets[0]

        assert [t.id for t in record.transactions] == [
            same_day_first.id,
            same_day_second.id,
            late.id,
        ]

    def test_transaction_fields(self, db, loader, sample_portfolio):
        asset = create_asset(db, sample_portfolio)
        create_transaction(
            db, asset, date(2024, 1, 15), "2.5", "99.12345678", TransactionType.SELL
        )

        txn = loader.load(db, sample_portfolio.id).assets[0].transactions[0]

        assert txn.asset_id == asset.id
        assert txn.date == date(2024, 1, 15)
        assert type(txn.date) is date
        assert txn.quantity == Decimal("2.5")
        assert txn.price == Decimal("99.12345678")
        assert txn.transaction_type == TransactionType.SELL

    def test_datetime_column_value_becomes_calendar_date(self, db, loader, sample_portfolio):
        asset = create_asset(db, sample_portfolio)
        create_transaction(db, asset, datetime(2024, 1, 15, 16, 30), "1", "100")

        txn = loader.load(db, sample_portfolio.id).assets[0].transactions[0]

        assert type(txn.date) is date
        assert txn.date == date(2024, 1, 15)

    def test_aggregate_is_detached_from_session(self, db, loader, sample_portfolio):
        """Closing the session must not affect the loaded values."""
        asset = create_asset(db, sample_portfolio)
        create_transaction(db, asset, date(2024, 1, 15))

        aggregate = loader.load(db, sample_portfolio.id)
        db.close()

        assert aggregate.assets[0].transactions[0].quantity == Decimal("10")
