# backend/tests/conftest.py
"""
Pytest configuration and fixtures.

This module provides shared fixtures for all tests:
- Test-mode settings (in-memory SQLite, no DATABASE_URL needed)
- Database session fixtures (in-memory SQLite)
- Sample data factories
"""

import os

# Set required environment variables BEFORE importing app modules
# This prevents settings validation errors during import
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from datetime import date
from decimal import Decimal
from typing import Iterator

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from portfolio_api.database import enable_sqlite_foreign_keys
from portfolio_api.models import (
    Base,
    Asset,
    AssetKind,
    Customer,
    Portfolio,
    Transaction,
    TransactionType,
)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest.fixture(scope="function")
def db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", enable_sqlite_foreign_keys)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)


@pytest.fixture(scope="function")
def db(db_engine) -> Iterator[Session]:
    """Create a database session for testing."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


# =============================================================================
# SAMPLE DATA FACTORIES
# =============================================================================

def create_customer(db: Session, name: str = "John Doe") -> Customer:
    """Factory function for creating Customer entities in the database."""
    customer = Customer(name=name)
    db.add(customer)
    db.commit()
    db.refresh(customer)
    return customer


def create_portfolio(
        db: Session,
        customer: Customer,
        name: str = "Test Portfolio",
) -> Portfolio:
    """Factory function for creating Portfolio entities in the database."""
    portfolio = Portfolio(customer_id=customer.id, name=name)
    db.add(portfolio)
    db.commit()
    db.refresh(portfolio)
    return portfolio


def create_asset(
        db: Session,
        portfolio: Portfolio,
        ticker: str = "AAPL",
        name: str = "Apple Inc",
        kind: AssetKind = AssetKind.STOCK,
        **details,
) -> Asset:
    """
    Factory function for creating Asset entities in the database.

    Kind-specific columns (exchange, coupon_rate, fund_type, ...) go in
    **details.
    """
    asset = Asset(
        portfolio_id=portfolio.id,
        ticker=ticker,
        name=name,
        kind=kind,
        **details,
    )
    db.add(asset)
    db.commit()
    db.refresh(asset)
    return asset


def create_transaction(
        db: Session,
        asset: Asset,
        txn_date: date,
        quantity: str | Decimal = "10",
        price: str | Decimal = "100",
        transaction_type: TransactionType = TransactionType.BUY,
) -> Transaction:
    """Factory function for creating Transaction entities in the database."""
    txn = Transaction(
        asset_id=asset.id,
        transaction_type=transaction_type,
        date=txn_date,
        quantity=Decimal(quantity),
        price=Decimal(price),
    )
    db.add(txn)
    db.commit()
    db.refresh(txn)
    return txn


# =============================================================================
# FIXTURE EXPORTS (for convenience imports in tests)
# =============================================================================

@pytest.fixture
def sample_customer(db: Session) -> Customer:
    """Provide a sample Customer for tests."""
    return create_customer(db)


@pytest.fixture
def sample_portfolio(db: Session, sample_customer: Customer) -> Portfolio:
    """Provide a sample Portfolio for tests."""
    return create_portfolio(db, sample_customer)
