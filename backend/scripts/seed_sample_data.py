#!/usr/bin/env python3
# backend/scripts/seed_sample_data.py
"""
Seed a demo customer with one portfolio holding a stock, a bond and a fund.

Transaction dates are relative to today, so a performance query for the last
30 days always shows the three purchases. Does nothing if any portfolio
already exists.

Usage:
    python backend/scripts/seed_sample_data.py
"""
import logging
import sys
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path

# Setup path to import portfolio_api modules
backend_dir = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(backend_dir))

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from portfolio_api.database import SessionLocal, engine
from portfolio_api.models import (
    Base,
    Customer,
    Portfolio,
    Asset,
    Transaction,
    AssetKind,
    BondType,
    FundType,
    TransactionType,
)
from portfolio_api.utils import setup_logging

logger = logging.getLogger(__name__)


def _add_years(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        # Feb 29 -> Feb 28
        return day.replace(year=day.year + years, day=28)


def build_sample_customer(today: date) -> Customer:
    """Build (unsaved) the demo customer, portfolio, assets and purchases."""
    stock = Asset(
        ticker="AAPL",
        name="Apple Inc",
        kind=AssetKind.STOCK,
        exchange="NASDAQ",
        sector="Technology",
        dividend_yield=Decimal("0.6"),
        transactions=[
            Transaction(
                transaction_type=TransactionType.BUY,
                date=today - timedelta(days=20),
                quantity=Decimal("10"),
                price=Decimal("150"),
            ),
        ],
    )
    bond = Asset(
        ticker="UST10",
        name="US Treasury 10Y",
        kind=AssetKind.BOND,
        issuer="US Govt",
        coupon_rate=Decimal("2.5"),
        maturity_date=_add_years(today, 10),
        bond_type=BondType.GOVERNMENT,
        transactions=[
            Transaction(
                transaction_type=TransactionType.BUY,
                date=today - timedelta(days=15),
                quantity=Decimal("5"),
                price=Decimal("100"),
            ),
        ],
    )
    fund = Asset(
        ticker="SPY",
        name="S&P 500 ETF",
        kind=AssetKind.FUND,
        fund_manager="Vanguard",
        fund_type=FundType.INDEX,
        expense_ratio=Decimal("0.09"),
        transactions=[
            Transaction(
                transaction_type=TransactionType.BUY,
                date=today - timedelta(days=10),
                quantity=Decimal("3"),
                price=Decimal("300"),
            ),
        ],
    )

    portfolio = Portfolio(name="Default Portfolio", assets=[stock, bond, fund])
    return Customer(name="John Doe", portfolios=[portfolio])


def seed(today: date | None = None) -> bool:
    """
    Insert the sample data.

    Returns:
        True if data was inserted, False if portfolios already existed
    """
    today = today or date.today()
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        logger.info("Starting database seeding...")

        if db.execute(select(Portfolio.id).limit(1)).first() is not None:
            logger.info("Portfolios exist, skipping seed")
            return False

        customer = build_sample_customer(today)
        db.add(customer)
        db.commit()

        portfolio = customer.portfolios[0]
        logger.info(
            f"Created customer '{customer.name}' with portfolio "
            f"'{portfolio.name}' (id={portfolio.id}): "
            f"{', '.join(a.ticker for a in portfolio.assets)}"
        )
        return True

    except SQLAlchemyError as e:
        logger.error(f"Seeding failed: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    setup_logging()
    seed()
