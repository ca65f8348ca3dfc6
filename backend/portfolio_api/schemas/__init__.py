# backend/portfolio_api/schemas/__init__.py
"""
Pydantic schemas for API responses.

- errors: Error response formats
- performance: Portfolio performance report (camelCase JSON)

Usage:
    from portfolio_api.schemas import PerformanceResponse, ErrorDetail
"""

from portfolio_api.schemas.errors import ErrorDetail, FieldError, ValidationErrorDetail
from portfolio_api.schemas.performance import (
    AssetPerformanceDetail,
    ValueOverTimePoint,
    AssetAllocationDetail,
    PerformanceResponse,
)

__all__ = [
    # Errors
    "ErrorDetail",
    "FieldError",
    "ValidationErrorDetail",
    # Performance
    "AssetPerformanceDetail",
    "ValueOverTimePoint",
    "AssetAllocationDetail",
    "PerformanceResponse",
]
