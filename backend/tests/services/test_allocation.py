# backend/tests/services/test_allocation.py
"""Unit tests for AllocationCalculator."""

from decimal import Decimal

import pytest

from portfolio_api.services.performance.allocation import AllocationCalculator
from portfolio_api.services.performance.types import AssetPerformance


def _perf(asset_id: int, name: str, value: str) -> AssetPerformance:
    return AssetPerformance(
        asset_id=asset_id,
        name=name,
        ticker=name.upper(),
        value=Decimal(value),
        realized_gain=Decimal("0"),
        unrealized_gain=Decimal("0"),
    )


@pytest.fixture
def allocation_calc():
    return AllocationCalculator()


class TestAllocationCalculator:
    """Tests for allocation percentages."""

    def test_two_assets_sum_to_hundred(self, allocation_calc):
        assets = [_perf(1, "Apple", "1500"), _perf(2, "Bond", "500")]

        result = allocation_calc.calculate(assets, Decimal("2000"))

        assert [a.allocation_percentage for a in result] == [Decimal("75"), Decimal("25")]
        assert sum(a.allocation_percentage for a in result) == Decimal("100")

    def test_thirds_sum_to_hundred_within_precision(self, allocation_calc):
        assets = [_perf(i, f"A{i}", "1") for i in range(3)]

        result = allocation_calc.calculate(assets, Decimal("3"))

        total = sum(a.allocation_percentage for a in result)
        assert abs(total - Decimal("100")) < Decimal("1e-20")

    def test_each_entry_is_value_over_total(self, allocation_calc):
        assets = [_perf(1, "Apple", "850"), _perf(2, "Fund", "900")]
        total = Decimal("1750")

        result = allocation_calc.calculate(assets, total)

        for asset, entry in zip(assets, result):
            assert entry.asset_name == asset.name
            assert entry.value == asset.value
            assert entry.allocation_percentage == asset.value / total * 100

    def test_zero_total_gives_zero_percentages(self, allocation_calc):
        assets = [_perf(1, "Apple", "0"), _perf(2, "Bond", "0")]

        result = allocation_calc.calculate(assets, Decimal("0"))

        assert all(a.allocation_percentage == Decimal("0") for a in result)

    def test_negative_total_gives_zero_percentages(self, allocation_calc):
        """An over-sold portfolio can be worth less than nothing."""
        result = allocation_calc.calculate([_perf(1, "Apple", "-600")], Decimal("-600"))

        assert result[0].allocation_percentage == Decimal("0")
        assert result[0].value == Decimal("-600")

    def test_no_assets(self, allocation_calc):
        assert allocation_calc.calculate([], Decimal("0")) == []
