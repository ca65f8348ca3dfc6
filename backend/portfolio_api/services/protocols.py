# backend/portfolio_api/services/protocols.py
"""
Protocol interfaces for service dependency injection.

Using typing.Protocol enables structural subtyping:
- PortfolioLoader satisfies PortfolioLoaderProtocol without inheriting it
- Test fakes work without touching the database
"""

from __future__ import annotations

from datetime import date
from typing import Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from portfolio_api.services.performance.types import (
        PerformanceReport,
        PortfolioAggregate,
    )


class PortfolioLoaderProtocol(Protocol):
    """Interface required by PerformanceService."""

    def load(self, db: Session, portfolio_id: int) -> PortfolioAggregate | None:
        ...


class PerformanceServiceProtocol(Protocol):
    """Interface required by the performance router."""

    def calculate_performance(
        self,
        db: Session,
        portfolio_id: int,
        start_date: date,
        end_date: date,
    ) -> PerformanceReport | None:
        ...
