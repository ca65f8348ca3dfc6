# backend/portfolio_api/middleware/__init__.py
"""
ASGI middleware for the Portfolio Performance API.

Usage:
    from portfolio_api.middleware import CorrelationIdMiddleware

    app.add_middleware(CorrelationIdMiddleware)
"""

from portfolio_api.middleware.correlation import (
    CorrelationIdMiddleware,
    CORRELATION_ID_HEADER,
    REQUEST_ID_HEADER,
)

__all__ = [
    "CorrelationIdMiddleware",
    "CORRELATION_ID_HEADER",
    "REQUEST_ID_HEADER",
]
