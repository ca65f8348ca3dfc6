# backend/portfolio_api/services/performance/engine.py
"""
Valuation Engine - daily portfolio value over a date range.

For every calendar day in [start_date, end_date] (inclusive) the engine
values each asset at quantity × last transacted price and sums them into
the day's portfolio total. On the last day it also emits a per-asset
performance snapshot.

Rolling State:
    A naive implementation replays each asset's full history for every day,
    O(days × transactions). Instead each asset gets ONE forward sweep
    (LedgerReplay.sweep) that snapshots its state at every day of the range.
    Transactions before start_date are folded in before the first snapshot,
    so the output is identical to a per-day full replay.

Edge Cases:
    - end_date < start_date: no days, empty series, no assets, total 0
    - Portfolio without assets: every day valued at 0, no assets, total 0
    - Asset without transactions up to a day: contributes 0 that day
"""

from __future__ import annotations

import logging
from datetime import date

from portfolio_api.services.performance.ledger import LedgerReplay
from portfolio_api.services.performance.types import (
    AssetPerformance,
    AssetRecord,
    LedgerState,
    PortfolioAggregate,
    ValuationResult,
    ValueOverTime,
    ZERO,
)
from portfolio_api.utils.date_utils import calendar_days

logger = logging.getLogger(__name__)


class ValuationEngine:
    """
    Computes the value-over-time series and end-date asset snapshots.

    Stateless apart from the injected ledger, so one instance can serve
    concurrent calculations for different portfolios.
    """

    def __init__(self, ledger: LedgerReplay | None = None) -> None:
        self._ledger = ledger or LedgerReplay()

    def run(
            self,
            portfolio: PortfolioAggregate,
            start_date: date,
            end_date: date,
    ) -> ValuationResult:
        """
        Value the portfolio on every day of the range.

        Args:
            portfolio: Loaded aggregate (assets with their transactions)
            start_date: First day of the range
            end_date: Last day of the range (inclusive)

        Returns:
            ValuationResult with one series point per day, one AssetPerformance
            per asset and the end-date total
        """
        days = calendar_days(start_date, end_date)
        if not days:
            logger.debug(
                f"Empty range for portfolio {portfolio.id}: "
                f"{start_date} > {end_date}"
            )
            return ValuationResult()

        # Per-asset ledger snapshots, aligned with `days`
        asset_states: list[tuple[AssetRecord, list[LedgerState]]] = [
            (asset, self._ledger.sweep(asset.transactions, days))
            for asset in portfolio.assets
        ]

        value_over_time: list[ValueOverTime] = []
        for day_index, day in enumerate(days):
            daily_total = sum(
                (states[day_index].value for _, states in asset_states),
                ZERO,
            )
            value_over_time.append(ValueOverTime(date=day, value=daily_total))

        # End-date snapshot for every asset, held or not
        last_index = len(days) - 1
        assets = [
            self._to_asset_performance(asset, states[last_index])
            for asset, states in asset_states
        ]
        total_value = value_over_time[last_index].value

        return ValuationResult(
            value_over_time=value_over_time,
            assets=assets,
            total_value=total_value,
        )

    def _to_asset_performance(
            self,
            asset: AssetRecord,
            state: LedgerState,
    ) -> AssetPerformance:
        if state.is_oversold:
            logger.warning(
                f"Asset {asset.ticker} (id={asset.id}) is oversold: "
                f"quantity {state.quantity}"
            )

        return AssetPerformance(
            asset_id=asset.id,
            name=asset.name,
            ticker=asset.ticker,
            value=state.value,
            realized_gain=state.realized_gain,
            unrealized_gain=state.unrealized_gain,
        )
