# backend/portfolio_api/dependencies.py
"""
Dependency injection module for FastAPI services.

Services are created lazily on first use and shared across requests. The
performance service holds no per-request state, so one instance is enough.

Usage in routers:
    from portfolio_api.dependencies import get_performance_service

    @router.get("/{portfolio_id}/performance")
    def get_performance(
        service: PerformanceService = Depends(get_performance_service),
    ):
        ...

Tests replace it through app.dependency_overrides[get_performance_service].
"""

import logging
from functools import lru_cache

from portfolio_api.services.performance import PerformanceService

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_performance_service() -> PerformanceService:
    """
    Get the singleton PerformanceService instance.

    Uses the default SQLAlchemy PortfolioLoader for data access.
    """
    logger.debug("Initializing singleton PerformanceService")
    return PerformanceService()
