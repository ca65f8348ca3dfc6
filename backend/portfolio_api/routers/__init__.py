# backend/portfolio_api/routers/__init__.py
"""
API routers for the Portfolio Performance API.

- performance: Portfolio value over time, gains and allocation
- health: Liveness and readiness probes
"""

from portfolio_api.routers.health import router as health_router
from portfolio_api.routers.performance import router as performance_router

__all__ = [
    "health_router",
    "performance_router",
]
