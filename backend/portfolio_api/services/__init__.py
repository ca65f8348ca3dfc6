# backend/portfolio_api/services/__init__.py
"""
Service layer for business logic.

Services:
- Have NO knowledge of HTTP (no HTTPException, no status codes)
- Raise domain-specific exceptions or return None for "not found"
- Receive database sessions as parameters (not via Depends)
- Are easily testable via dependency injection

Usage:
    from portfolio_api.services import PerformanceService
    from portfolio_api.services import PortfolioNotFoundError

Architecture:
    services/
    ├── __init__.py          # This file - main exports
    ├── exceptions.py        # Domain exceptions
    ├── protocols.py         # Service interfaces (Protocol classes)
    └── performance/         # Performance service
        ├── service.py       # Report assembler
        ├── types.py         # Performance data types
        ├── loader.py        # Database -> aggregate
        ├── ledger.py        # Average cost replay
        ├── engine.py        # Daily valuation
        └── allocation.py    # Allocation percentages
"""

from portfolio_api.services.exceptions import (
    ServiceError,
    NotFoundError,
    PortfolioNotFoundError,
)
from portfolio_api.services.performance import PerformanceService, PortfolioLoader

__all__ = [
    # Services
    "PerformanceService",
    "PortfolioLoader",

    # Exceptions
    "ServiceError",
    "NotFoundError",
    "PortfolioNotFoundError",
]
