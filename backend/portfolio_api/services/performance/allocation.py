# backend/portfolio_api/services/performance/allocation.py
"""
Allocation Calculator.

Each asset's share of the portfolio's end-date value:

    allocation_percentage = value / total_value × 100   (0 if total_value <= 0)

Plain Decimal arithmetic with no rounding, so percentages sum to 100 up to
Decimal context precision.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from portfolio_api.services.performance.types import (
    AssetAllocation,
    AssetPerformance,
    ZERO,
)

HUNDRED = Decimal("100")


class AllocationCalculator:
    """Turns end-date asset snapshots into allocation entries."""

    def calculate(
            self,
            assets: Iterable[AssetPerformance],
            total_value: Decimal,
    ) -> list[AssetAllocation]:
        """
        Compute allocation percentages.

        Args:
            assets: End-date snapshots, one per asset
            total_value: Portfolio value at the end date

        Returns:
            One AssetAllocation per asset, in input order
        """
        return [
            AssetAllocation(
                asset_name=asset.name,
                value=asset.value,
                allocation_percentage=self.percentage(asset.value, total_value),
            )
            for asset in assets
        ]

    @staticmethod
    def percentage(value: Decimal, total_value: Decimal) -> Decimal:
        if total_value > ZERO:
            return value / total_value * HUNDRED
        return ZERO
