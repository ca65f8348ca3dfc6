# backend/portfolio_api/routers/performance.py
"""
Portfolio performance endpoint.

- GET /api/portfolios/{id}/performance?startDate=&endDate=
  Daily value over time, per-asset gains and allocation

Note: Dates are calendar days and the range is inclusive on both ends.
An endDate before startDate is accepted and yields an empty series.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from portfolio_api.database import get_db
from portfolio_api.dependencies import get_performance_service
from portfolio_api.schemas.errors import ErrorDetail
from portfolio_api.schemas.performance import (
    AssetAllocationDetail,
    AssetPerformanceDetail,
    PerformanceResponse,
    ValueOverTimePoint,
)
from portfolio_api.services.exceptions import PortfolioNotFoundError
from portfolio_api.services.performance.types import (
    AssetAllocation,
    AssetPerformance,
    ValueOverTime,
)
from portfolio_api.services.protocols import PerformanceServiceProtocol

# =============================================================================
# ROUTER SETUP
# =============================================================================

router = APIRouter(
    prefix="/api/portfolios",
    tags=["Performance"],
)


# =============================================================================
# MAPPER FUNCTIONS (Internal Types -> Pydantic Schemas)
# =============================================================================

def _map_asset(asset: AssetPerformance) -> AssetPerformanceDetail:
    """Map internal AssetPerformance to Pydantic schema."""
    return AssetPerformanceDetail(
        asset_id=asset.asset_id,
        name=asset.name,
        ticker=asset.ticker,
        value=asset.value,
        realized_gain=asset.realized_gain,
        unrealized_gain=asset.unrealized_gain,
    )


def _map_value_point(point: ValueOverTime) -> ValueOverTimePoint:
    """Map internal ValueOverTime to Pydantic schema."""
    return ValueOverTimePoint(date=point.date, value=point.value)


def _map_allocation(allocation: AssetAllocation) -> AssetAllocationDetail:
    """Map internal AssetAllocation to Pydantic schema."""
    return AssetAllocationDetail(
        asset_name=allocation.asset_name,
        value=allocation.value,
        allocation_percentage=allocation.allocation_percentage,
    )


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get(
    "/{portfolio_id}/performance",
    response_model=PerformanceResponse,
    summary="Get portfolio performance",
    response_description="Daily value, per-asset gains and allocation",
    responses={404: {"model": ErrorDetail, "description": "Portfolio not found"}},
)
def get_portfolio_performance(
        portfolio_id: int,
        start_date: date = Query(
            ...,
            alias="startDate",
            description="First day of the range (ISO date)"
        ),
        end_date: date = Query(
            ...,
            alias="endDate",
            description="Last day of the range, inclusive (ISO date)"
        ),
        db: Session = Depends(get_db),
        service: PerformanceServiceProtocol = Depends(get_performance_service),
) -> PerformanceResponse:
    """
    Get portfolio performance over a date range.

    Returns:
    - **totalValue**: Portfolio value on endDate
    - **assets**: Value, realized and unrealized gain per asset on endDate
    - **valueOverTime**: Portfolio value for every day of the range
    - **allocation**: Share of totalValue per asset (percent)

    Assets are valued at the price of their most recent transaction
    (average cost method for gains).

    Raises **404** if the portfolio does not exist.
    """
    report = service.calculate_performance(
        db=db,
        portfolio_id=portfolio_id,
        start_date=start_date,
        end_date=end_date,
    )

    # Handled globally (404)
    if report is None:
        raise PortfolioNotFoundError(portfolio_id)

    return PerformanceResponse(
        portfolio_id=report.portfolio_id,
        start_date=report.start_date,
        end_date=report.end_date,
        total_value=report.total_value,
        assets=[_map_asset(a) for a in report.assets],
        value_over_time=[_map_value_point(p) for p in report.value_over_time],
        allocation=[_map_allocation(a) for a in report.allocation],
    )
