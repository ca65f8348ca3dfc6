# backend/portfolio_api/services/performance/__init__.py
"""
Performance Service Package.

This package values a portfolio day by day over a date range:
- Value over time (one point per calendar day)
- Per-asset value, realized and unrealized gain at the end date
- Allocation of the end-date value across assets

Usage:
    from portfolio_api.services.performance import PerformanceService

    service = PerformanceService()
    report = service.calculate_performance(
        db,
        portfolio_id=1,
        start_date=date(2024, 1, 1),
        end_date=date(2024, 12, 31),
    )

Architecture:
    performance/
    ├── __init__.py      # This file - package exports
    ├── types.py         # Internal data classes
    ├── loader.py        # PortfolioLoader (database -> aggregate)
    ├── ledger.py        # LedgerReplay (average cost fold)
    ├── engine.py        # ValuationEngine (daily series)
    ├── allocation.py    # AllocationCalculator
    └── service.py       # PerformanceService (orchestrator)

Data Flow:
    Database → PortfolioLoader → PortfolioAggregate
    Transactions → LedgerReplay → LedgerState (per asset, per day)
    LedgerStates → ValuationEngine → ValuationResult
    AssetPerformances → AllocationCalculator → AssetAllocations
    All Above → PerformanceReport
"""

# Calculators (for testing / direct usage)
from portfolio_api.services.performance.allocation import AllocationCalculator
from portfolio_api.services.performance.engine import ValuationEngine
from portfolio_api.services.performance.ledger import LedgerReplay
from portfolio_api.services.performance.loader import PortfolioLoader
# Main service
from portfolio_api.services.performance.service import PerformanceService
# Internal types (for advanced usage / testing)
from portfolio_api.services.performance.types import (
    TransactionRecord,
    StockDetails,
    BondDetails,
    FundDetails,
    AssetRecord,
    PortfolioAggregate,
    LedgerState,
    AssetPerformance,
    ValueOverTime,
    AssetAllocation,
    ValuationResult,
    PerformanceReport,
)

__all__ = [
    # Main service
    "PerformanceService",

    # Data access
    "PortfolioLoader",

    # Data types
    "TransactionRecord",
    "StockDetails",
    "BondDetails",
    "FundDetails",
    "AssetRecord",
    "PortfolioAggregate",
    "LedgerState",
    "AssetPerformance",
    "ValueOverTime",
    "AssetAllocation",
    "ValuationResult",
    "PerformanceReport",

    # Calculators (for testing)
    "LedgerReplay",
    "ValuationEngine",
    "AllocationCalculator",
]
