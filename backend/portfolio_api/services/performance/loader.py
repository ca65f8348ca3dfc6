# backend/portfolio_api/services/performance/loader.py
"""
Portfolio loader - the only database access of a performance calculation.

Loads a portfolio with all its assets and their transactions in one go
(selectinload: one query per level, no N+1) and copies the rows into the
frozen dataclasses of types.py. Everything downstream works on those values
and never sees an ORM object or a session.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from portfolio_api.models import Asset, AssetKind, Portfolio, Transaction
from portfolio_api.services.performance.types import (
    AssetDetails,
    AssetRecord,
    BondDetails,
    FundDetails,
    PortfolioAggregate,
    StockDetails,
    TransactionRecord,
)
from portfolio_api.utils.date_utils import as_calendar_date

logger = logging.getLogger(__name__)


class PortfolioLoader:
    """Reads PortfolioAggregate values from the database."""

    def load(self, db: Session, portfolio_id: int) -> PortfolioAggregate | None:
        """
        Load a portfolio aggregate.

        Args:
            db: Database session
            portfolio_id: Portfolio to load

        Returns:
            PortfolioAggregate, or None if no such portfolio exists
        """
        stmt = (
            select(Portfolio)
            .where(Portfolio.id == portfolio_id)
            .options(
                selectinload(Portfolio.assets).selectinload(Asset.transactions)
            )
        )
        portfolio = db.execute(stmt).scalar_one_or_none()

        if portfolio is None:
            return None

        assets = tuple(
            self._to_asset_record(asset)
            for asset in sorted(portfolio.assets, key=lambda a: a.id)
        )

        logger.debug(
            f"Loaded portfolio {portfolio_id} with {len(assets)} assets and "
            f"{sum(len(a.transactions) for a in assets)} transactions"
        )

        return PortfolioAggregate(
            id=portfolio.id,
            name=portfolio.name,
            customer_id=portfolio.customer_id,
            assets=assets,
        )

    # =========================================================================
    # ROW CONVERSION
    # =========================================================================

    def _to_asset_record(self, asset: Asset) -> AssetRecord:
        # Creation order breaks same-day ties
        transactions = sorted(
            asset.transactions,
            key=lambda t: (as_calendar_date(t.date), t.id),
        )

        return AssetRecord(
            id=asset.id,
            ticker=asset.ticker,
            name=asset.name,
            kind=asset.kind,
            details=self._to_details(asset),
            transactions=tuple(self._to_transaction_record(t) for t in transactions),
        )

    @staticmethod
    def _to_details(asset: Asset) -> AssetDetails:
        if asset.kind == AssetKind.BOND:
            return BondDetails(
                coupon_rate=asset.coupon_rate,
                maturity_date=asset.maturity_date,
                issuer=asset.issuer,
                bond_type=asset.bond_type,
            )
        if asset.kind == AssetKind.FUND:
            return FundDetails(
                fund_manager=asset.fund_manager,
                fund_type=asset.fund_type,
                expense_ratio=asset.expense_ratio,
            )
        return StockDetails(
            exchange=asset.exchange,
            sector=asset.sector,
            dividend_yield=asset.dividend_yield,
        )

    @staticmethod
    def _to_transaction_record(txn: Transaction) -> TransactionRecord:
        return TransactionRecord(
            id=txn.id,
            asset_id=txn.asset_id,
            date=as_calendar_date(txn.date),
            quantity=txn.quantity,
            price=txn.price,
            transaction_type=txn.transaction_type,
        )
