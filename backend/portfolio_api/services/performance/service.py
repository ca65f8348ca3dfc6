# backend/portfolio_api/services/performance/service.py
"""
Performance Service - report assembler for portfolio performance.

Single entry point for performance calculations:
- calculate_performance(): value-over-time, per-asset gains and allocation
  for an inclusive date range

Design Principles:
- Dependency Injection: data access (PortfolioLoader) injected via constructor
- No HTTP Knowledge: a missing portfolio is signalled by returning None;
  the router turns it into PortfolioNotFoundError
- Composable: ValuationEngine and AllocationCalculator do the math
- No hidden state: nothing is cached, every call builds a fresh report

Usage:
    from portfolio_api.services.performance import PerformanceService

    service = PerformanceService()
    report = service.calculate_performance(
        db, portfolio_id=1,
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 31),
    )
    if report is None:
        ...  # portfolio not found
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from portfolio_api.services.performance.allocation import AllocationCalculator
from portfolio_api.services.performance.engine import ValuationEngine
from portfolio_api.services.performance.types import PerformanceReport

if TYPE_CHECKING:
    from portfolio_api.services.protocols import PortfolioLoaderProtocol

logger = logging.getLogger(__name__)


class PerformanceService:
    """
    Assembles PerformanceReports.

    Attributes:
        _loader: Loads the portfolio aggregate (the only I/O)
        _engine: Daily valuation and end-date snapshots
        _allocation_calc: Allocation percentages
    """

    def __init__(self, loader: PortfolioLoaderProtocol | None = None) -> None:
        """
        Initialize the performance service.

        Args:
            loader: Portfolio aggregate loader.
                    If None, uses the SQLAlchemy PortfolioLoader.
        """
        if loader is None:
            from portfolio_api.services.performance.loader import PortfolioLoader
            loader = PortfolioLoader()

        self._loader: PortfolioLoaderProtocol = loader
        self._engine = ValuationEngine()
        self._allocation_calc = AllocationCalculator()

    def calculate_performance(
            self,
            db: Session,
            portfolio_id: int,
            start_date: date,
            end_date: date,
    ) -> PerformanceReport | None:
        """
        Calculate portfolio performance over [start_date, end_date].

        Args:
            db: Database session
            portfolio_id: Portfolio to evaluate
            start_date: First day of the range
            end_date: Last day of the range (inclusive, not validated
                      against start_date; end < start gives an empty series)

        Returns:
            PerformanceReport, or None if the portfolio does not exist
        """
        logger.info(
            f"Calculating performance for portfolio {portfolio_id} "
            f"from {start_date} to {end_date}"
        )

        portfolio = self._loader.load(db, portfolio_id)
        if portfolio is None:
            logger.warning(f"Portfolio {portfolio_id} not found")
            return None

        valuation = self._engine.run(portfolio, start_date, end_date)
        allocation = self._allocation_calc.calculate(
            valuation.assets, valuation.total_value
        )

        report = PerformanceReport(
            portfolio_id=portfolio.id,
            start_date=start_date,
            end_date=end_date,
            total_value=valuation.total_value,
            assets=valuation.assets,
            value_over_time=valuation.value_over_time,
            allocation=allocation,
        )

        logger.info(
            f"Performance for portfolio {portfolio_id}: "
            f"{report.total_points} points, {len(report.assets)} assets, "
            f"total value {report.total_value}"
        )

        return report
