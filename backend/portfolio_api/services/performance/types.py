# backend/portfolio_api/services/performance/types.py
"""
Data types for the performance engine.

These dataclasses are NOT Pydantic schemas - those are defined in
portfolio_api/schemas/performance.py for API serialization. They are also NOT
ORM models: the loader copies database rows into them, so the engine works on
plain immutable values and never touches a session.

Design Principles:
- Immutable inputs (frozen=True) - the aggregate is read-only for a calculation
- Use Decimal for ALL financial values (never float)
- Use date (not datetime) - valuation has calendar-day granularity
- One-directional ownership: Portfolio -> Assets -> Transactions;
  a transaction refers back to its asset by id only

Type Hierarchy:
    TransactionRecord   - One buy/sell
    StockDetails | BondDetails | FundDetails - Kind-specific asset payload
    AssetRecord         - Common asset fields + kind tag + payload + transactions
    PortfolioAggregate  - Portfolio with its assets
    LedgerState         - Running quantity / cost basis / realized gain / last price
    AssetPerformance    - End-of-range snapshot for one asset
    ValueOverTime       - Portfolio total for one day
    AssetAllocation     - Share of total value for one asset
    ValuationResult     - Engine output (series + snapshots + total)
    PerformanceReport   - Final report returned to callers
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from portfolio_api.models import AssetKind, BondType, FundType, TransactionType

ZERO = Decimal("0")


# =============================================================================
# INPUT AGGREGATE
# =============================================================================

@dataclass(frozen=True)
class TransactionRecord:
    """
    A single buy or sell of an asset.

    Attributes:
        id: Database ID (creation order, used as the same-day tie-break)
        asset_id: Owning asset's ID
        date: Trade date (calendar day)
        quantity: Units traded, non-negative
        price: Unit price
        transaction_type: BUY or SELL
    """

    id: int
    asset_id: int
    date: date
    quantity: Decimal
    price: Decimal
    transaction_type: TransactionType


@dataclass(frozen=True)
class StockDetails:
    exchange: str | None = None
    sector: str | None = None
    dividend_yield: Decimal | None = None


@dataclass(frozen=True)
class BondDetails:
    coupon_rate: Decimal | None = None
    maturity_date: date | None = None
    issuer: str | None = None
    bond_type: BondType | None = None


@dataclass(frozen=True)
class FundDetails:
    fund_manager: str | None = None
    fund_type: FundType | None = None
    expense_ratio: Decimal | None = None


AssetDetails = StockDetails | BondDetails | FundDetails


@dataclass(frozen=True)
class AssetRecord:
    """
    An asset with its full transaction history.

    `kind` tags which payload `details` carries. Valuation only reads
    id, name, ticker and transactions, so it never branches on kind.
    """

    id: int
    ticker: str
    name: str
    kind: AssetKind
    details: AssetDetails
    transactions: tuple[TransactionRecord, ...] = ()


@dataclass(frozen=True)
class PortfolioAggregate:
    """
    A portfolio with its assets, each with its transactions.

    Loaded once per calculation and never mutated by the engine.
    """

    id: int
    name: str
    customer_id: int
    assets: tuple[AssetRecord, ...] = ()


# =============================================================================
# LEDGER
# =============================================================================

@dataclass
class LedgerState:
    """
    Running position of one asset after replaying its transactions.

    Attributes:
        quantity: Units held (negative after an over-sell)
        cost_basis: Cost of the units held, average cost method
        realized_gain: Cumulative gain locked in by sales
        last_price: Price of the most recent transaction applied (0 if none)

    Note:
        The engine has no market prices. An asset is valued at the price of
        its own latest transaction, however old that transaction is.
    """

    quantity: Decimal = ZERO
    cost_basis: Decimal = ZERO
    realized_gain: Decimal = ZERO
    last_price: Decimal = ZERO

    @property
    def value(self) -> Decimal:
        """Position value at the last transacted price."""
        return self.quantity * self.last_price

    @property
    def unrealized_gain(self) -> Decimal:
        """Paper gain: value minus remaining cost basis."""
        return self.value - self.cost_basis

    @property
    def is_oversold(self) -> bool:
        """True if sales exceeded the accumulated quantity."""
        return self.quantity < ZERO

    def snapshot(self) -> LedgerState:
        """Independent copy, safe to keep while this state keeps rolling."""
        return LedgerState(
            quantity=self.quantity,
            cost_basis=self.cost_basis,
            realized_gain=self.realized_gain,
            last_price=self.last_price,
        )


# =============================================================================
# OUTPUT
# =============================================================================

@dataclass(frozen=True)
class AssetPerformance:
    """
    End-of-range performance for one asset.

    Formulas:
        value = quantity × last_price
        unrealized_gain = value - cost_basis
    """

    asset_id: int
    name: str
    ticker: str
    value: Decimal
    realized_gain: Decimal
    unrealized_gain: Decimal


@dataclass(frozen=True)
class ValueOverTime:
    """Total portfolio value on one calendar day."""

    date: date
    value: Decimal


@dataclass(frozen=True)
class AssetAllocation:
    """
    One asset's share of total portfolio value at the end date.

    allocation_percentage is on a 0-100 scale.
    """

    asset_name: str
    value: Decimal
    allocation_percentage: Decimal


@dataclass
class ValuationResult:
    """
    Output of the valuation engine for one date range.

    Attributes:
        value_over_time: One point per calendar day (empty if end < start)
        assets: One snapshot per asset at the end date (empty if end < start)
        total_value: Portfolio value at the end date (0 if end < start)
    """

    value_over_time: list[ValueOverTime] = field(default_factory=list)
    assets: list[AssetPerformance] = field(default_factory=list)
    total_value: Decimal = ZERO


@dataclass
class PerformanceReport:
    """
    Portfolio performance over an inclusive date range.

    Constructed fresh for every call; two calls on unchanged data compare equal.
    """

    portfolio_id: int
    start_date: date
    end_date: date
    total_value: Decimal
    assets: list[AssetPerformance]
    value_over_time: list[ValueOverTime]
    allocation: list[AssetAllocation]

    @property
    def total_points(self) -> int:
        """Number of days in the series."""
        return len(self.value_over_time)
