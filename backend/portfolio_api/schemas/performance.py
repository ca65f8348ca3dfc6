# backend/portfolio_api/schemas/performance.py
"""
Pydantic schemas for Portfolio Performance.

These schemas handle:
- Per-asset performance at the end of the range
- Value over time (one point per calendar day)
- Allocation of the end-date value

Responses are serialized in camelCase (portfolioId, valueOverTime, ...).
Decimals keep their exact digits: pydantic writes them as JSON strings
("1350.00000000"), never as floats.
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema: snake_case in Python, camelCase in JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# ASSET PERFORMANCE
# =============================================================================

class AssetPerformanceDetail(CamelModel):
    """End-of-range performance of one asset."""

    asset_id: int
    name: str
    ticker: str
    value: Decimal = Field(
        ...,
        description="Quantity held × last transacted price"
    )
    realized_gain: Decimal = Field(
        ...,
        description="Cumulative gain from sales (average cost method)"
    )
    unrealized_gain: Decimal = Field(
        ...,
        description="Value minus remaining cost basis"
    )


# =============================================================================
# TIME SERIES
# =============================================================================

class ValueOverTimePoint(CamelModel):
    """Total portfolio value on one calendar day."""

    date: dt.date
    value: Decimal


# =============================================================================
# ALLOCATION
# =============================================================================

class AssetAllocationDetail(CamelModel):
    """One asset's share of the end-date portfolio value."""

    asset_name: str
    value: Decimal
    allocation_percentage: Decimal = Field(
        ...,
        description="Share of total value on a 0-100 scale (0 if total is 0)"
    )


# =============================================================================
# RESPONSE
# =============================================================================

class PerformanceResponse(CamelModel):
    """Portfolio performance over an inclusive date range."""

    portfolio_id: int
    start_date: dt.date
    end_date: dt.date
    total_value: Decimal = Field(
        ...,
        description="Portfolio value at end_date"
    )
    assets: list[AssetPerformanceDetail]
    value_over_time: list[ValueOverTimePoint]
    allocation: list[AssetAllocationDetail]
