# backend/portfolio_api/services/performance/ledger.py
"""
Ledger replay for a single asset.

Replays an asset's buy/sell history in chronological order and produces the
position as of a cutoff date: quantity held, cost basis, realized gain and the
last transacted price.

Average Cost Method:
    BUY:  quantity += qty
          cost_basis += qty × price
    SELL: avg_cost = cost_basis / quantity   (0 if quantity <= 0)
          realized_gain += (price - avg_cost) × qty
          quantity -= qty
          cost_basis -= avg_cost × qty

Ordering:
    Transactions are sorted by calendar date with a STABLE sort, so same-day
    transactions keep the order they were supplied in. The loader supplies
    them in creation order (ascending id).

Over-selling is not rejected or clamped: quantity and cost basis go negative
and later replays carry the negative position forward.

Usage:
    ledger = LedgerReplay()
    state = ledger.replay(asset.transactions, cutoff=date(2024, 6, 30))
    value = state.quantity * state.last_price
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import date

from portfolio_api.models import TransactionType
from portfolio_api.services.performance.types import (
    LedgerState,
    TransactionRecord,
    ZERO,
)

logger = logging.getLogger(__name__)


class LedgerReplay:
    """
    Stateless replay of one asset's transactions.

    Two entry points return identical states:
    - replay(): full replay up to one cutoff (point-in-time)
    - sweep(): one forward pass snapshotting at many cutoffs (time series),
      O(T + D) instead of O(T × D)
    """

    @staticmethod
    def order_transactions(
            transactions: Iterable[TransactionRecord],
    ) -> list[TransactionRecord]:
        """Sort by calendar date; same-day ties keep their input order."""
        return sorted(transactions, key=lambda txn: txn.date)

    def apply_transaction(
            self,
            state: LedgerState,
            transaction: TransactionRecord,
    ) -> None:
        """
        Apply a single transaction to the state (mutates state).

        Args:
            state: Running ledger state for the asset
            transaction: Transaction to fold in
        """
        qty = transaction.quantity
        price = transaction.price

        if transaction.transaction_type == TransactionType.BUY:
            state.quantity += qty
            state.cost_basis += qty * price

        elif transaction.transaction_type == TransactionType.SELL:
            avg_cost = state.cost_basis / state.quantity if state.quantity > ZERO else ZERO
            state.realized_gain += (price - avg_cost) * qty
            state.quantity -= qty
            state.cost_basis -= avg_cost * qty

        state.last_price = price

    def replay(
            self,
            transactions: Iterable[TransactionRecord],
            cutoff: date,
    ) -> LedgerState:
        """
        Replay all transactions dated on or before the cutoff.

        Args:
            transactions: The asset's full transaction history, any order
            cutoff: Last calendar day to include

        Returns:
            LedgerState as of the cutoff (all zero if nothing qualifies)
        """
        state = LedgerState()
        for txn in self.order_transactions(transactions):
            if txn.date > cutoff:
                break
            self.apply_transaction(state, txn)
        return state

    def sweep(
            self,
            transactions: Iterable[TransactionRecord],
            dates: Sequence[date],
    ) -> list[LedgerState]:
        """
        Snapshot the ledger at each date using the Rolling State pattern.

        Instead of replaying the whole history for every date, walk the
        ordered transactions once and apply only those dated since the
        previous snapshot.

        Args:
            transactions: The asset's full transaction history, any order
            dates: Snapshot dates, ascending

        Returns:
            One LedgerState per date, equal to replay(transactions, d)
        """
        ordered = self.order_transactions(transactions)
        snapshots: list[LedgerState] = []

        state = LedgerState()
        txn_index = 0
        num_txns = len(ordered)

        for target_date in dates:
            # Apply everything up to and including target_date
            while txn_index < num_txns:
                txn = ordered[txn_index]
                if txn.date > target_date:
                    break
                self.apply_transaction(state, txn)
                txn_index += 1

            snapshots.append(state.snapshot())

        return snapshots
