# backend/portfolio_api/models.py
import enum
from datetime import date
from decimal import Decimal

from sqlalchemy import String, Date, ForeignKey, Enum, Numeric, Index
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


class TransactionType(str, enum.Enum):
    BUY = "BUY"
    SELL = "SELL"


class AssetKind(str, enum.Enum):
    STOCK = "STOCK"
    BOND = "BOND"
    FUND = "FUND"


class BondType(str, enum.Enum):
    GOVERNMENT = "GOVERNMENT"
    CORPORATE = "CORPORATE"
    MUNICIPAL = "MUNICIPAL"


class FundType(str, enum.Enum):
    ETF = "ETF"
    MUTUAL = "MUTUAL"
    INDEX = "INDEX"
    HEDGE = "HEDGE"
    OTHER = "OTHER"


class Customer(Base):
    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String)

    # Relationship: One Customer has Many Portfolios
    portfolios: Mapped[list["Portfolio"]] = relationship(cascade="all, delete-orphan")


class Portfolio(Base):
    __tablename__ = "portfolios"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    customer_id: Mapped[int] = mapped_column(ForeignKey("customers.id"), index=True)
    name: Mapped[str] = mapped_column(String)

    assets: Mapped[list["Asset"]] = relationship(
        cascade="all, delete-orphan",
        order_by="Asset.id",
    )


class Asset(Base):
    """
    An instrument held in exactly one portfolio.

    All kinds share one table. `kind` tags the row, and only the columns of
    that kind are populated:
    - STOCK: exchange, sector, dividend_yield
    - BOND: coupon_rate, maturity_date, issuer, bond_type
    - FUND: fund_manager, fund_type, expense_ratio
    """
    __tablename__ = "assets"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    portfolio_id: Mapped[int] = mapped_column(ForeignKey("portfolios.id"), index=True)
    ticker: Mapped[str] = mapped_column(String, index=True)  # e.g. "AAPL"
    name: Mapped[str] = mapped_column(String)
    kind: Mapped[AssetKind] = mapped_column(Enum(AssetKind))

    # Stock
    exchange: Mapped[str | None] = mapped_column(String, nullable=True)
    sector: Mapped[str | None] = mapped_column(String, nullable=True)
    dividend_yield: Mapped[Decimal | None] = mapped_column(Numeric(9, 4), nullable=True)

    # Bond
    coupon_rate: Mapped[Decimal | None] = mapped_column(Numeric(9, 4), nullable=True)
    maturity_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    issuer: Mapped[str | None] = mapped_column(String, nullable=True)
    bond_type: Mapped[BondType | None] = mapped_column(Enum(BondType), nullable=True)

    # Fund
    fund_manager: Mapped[str | None] = mapped_column(String, nullable=True)
    fund_type: Mapped[FundType | None] = mapped_column(Enum(FundType), nullable=True)
    expense_ratio: Mapped[Decimal | None] = mapped_column(Numeric(9, 4), nullable=True)

    transactions: Mapped[list["Transaction"]] = relationship(
        cascade="all, delete-orphan",
        order_by=lambda: [Transaction.date, Transaction.id],
    )


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        # Replay reads an asset's transactions in (date, id) order
        Index('ix_transaction_asset_date', 'asset_id', 'date'),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    asset_id: Mapped[int] = mapped_column(ForeignKey("assets.id"), index=True)
    transaction_type: Mapped[TransactionType] = mapped_column(Enum(TransactionType))
    date: Mapped[date] = mapped_column(Date, index=True)  # Calendar day, no time component

    # Numeric(18, 8) supports values up to 9,999,999,999.99999999
    quantity: Mapped[Decimal] = mapped_column(Numeric(18, 8))
    price: Mapped[Decimal] = mapped_column(Numeric(18, 8))
