# payday_ledger/engine.py
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

from payday_ledger import reports
from payday_ledger.core import categories as registry
from payday_ledger.core import ledger
from payday_ledger.core.archive import seal_due_periods
from payday_ledger.core.models import DEFAULT_PAYDAY, ArchiveRecord, EngineState, Transaction
from payday_ledger.core.period import MAX_PAYDAY, MIN_PAYDAY, period_id_for
from payday_ledger.errors import InvalidPayday
from payday_ledger.utils import parse_timestamp

logger = logging.getLogger(__name__)


def validate_payday(day) -> int:
    if isinstance(day, bool) or not isinstance(day, int) or not MIN_PAYDAY <= day <= MAX_PAYDAY:
        raise InvalidPayday(f"Payday must be a day between {MIN_PAYDAY} and {MAX_PAYDAY}, got {day!r}")
    return day


class BudgetEngine:
    """
    Owns the budget, ledger, category registry and archive list.

    All changes go through the methods below. A method either raises before
    touching anything or replaces the state as a whole and writes it to the
    store once. Time-dependent operations take ``now`` from the caller; the
    injected ``clock`` only stamps new transactions.
    """

    def __init__(self, store, state: Optional[EngineState] = None,
                 clock: Callable[[], datetime] = datetime.now):
        self.store = store
        self._state = state or EngineState()
        self._clock = clock

    @classmethod
    def load(cls, store, clock: Callable[[], datetime] = datetime.now,
             default_payday: int = DEFAULT_PAYDAY) -> "BudgetEngine":
        """Build an engine from ``store``; unusable blobs give a fresh state."""
        blob = store.load()
        state = None
        if blob is not None:
            try:
                state = EngineState.from_dict(blob)
            except (ValueError, KeyError, TypeError) as exc:
                logger.warning("Stored state is corrupt, starting empty: %s", exc)
        if state is None:
            state = EngineState(payday=validate_payday(default_payday))
        return cls(store, state=state, clock=clock)

    # -- read access --------------------------------------------------------

    @property
    def budget(self) -> float:
        return self._state.budget

    @property
    def payday(self) -> int:
        return self._state.payday

    @property
    def categories(self) -> Tuple[str, ...]:
        return tuple(self._state.categories)

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        return tuple(self._state.transactions)

    @property
    def archives(self) -> Tuple[ArchiveRecord, ...]:
        return tuple(self._state.archives)

    @property
    def last_archived_period_id(self) -> Optional[str]:
        return self._state.last_archived_period_id

    def to_dict(self) -> Dict[str, object]:
        return self._state.to_dict()

    def get_transaction(self, tx_id: str) -> Transaction:
        return ledger.find_transaction(self._state.transactions, tx_id)

    def filter_transactions(self, text: str = "", category: Optional[str] = None) -> List[Transaction]:
        return ledger.filter_transactions(self._state.transactions, text, category)

    def period_id(self, now: datetime) -> str:
        return period_id_for(parse_timestamp(now), self._state.payday)

    # -- settings -------------------------------------------------------------

    def set_budget(self, amount) -> None:
        value = ledger.validate_budget(amount)
        self._commit(replace(self._state, budget=value))

    def set_payday(self, day) -> None:
        self._commit(replace(self._state, payday=validate_payday(day)))

    # -- categories -----------------------------------------------------------

    def create_category(self, name: str) -> str:
        cats = registry.create_category(self._state.categories, name)
        self._commit(replace(self._state, categories=cats))
        return cats[-1]

    def rename_category(self, old_name: str, new_name: str) -> None:
        cats, txs = registry.rename_category(
            self._state.categories, self._state.transactions, old_name, new_name
        )
        self._commit(replace(self._state, categories=cats, transactions=txs))

    def delete_category(self, name: str) -> None:
        cats, txs = registry.delete_category(
            self._state.categories, self._state.transactions, name
        )
        self._commit(replace(self._state, categories=cats, transactions=txs))

    # -- ledger ---------------------------------------------------------------

    def add_transaction(self, description: str, amount, category: str,
                        timestamp: Optional[datetime] = None) -> Transaction:
        when = parse_timestamp(timestamp if timestamp is not None else self._clock())
        tx = ledger.build_transaction(
            self._state.categories, description, amount, category, when
        )
        self._commit(replace(self._state, transactions=self._state.transactions + [tx]))
        return tx

    def remove_transaction(self, tx_id: str) -> None:
        txs = ledger.remove_transaction(self._state.transactions, tx_id)
        self._commit(replace(self._state, transactions=txs))

    def clear_transactions(self) -> None:
        self._commit(replace(self._state, transactions=[]))

    def total_spent(self) -> float:
        return ledger.total_spent(self._state.transactions)

    def balance(self) -> float:
        return ledger.balance(self._state.budget, self._state.transactions)

    def remaining(self) -> float:
        return ledger.remaining(self._state.budget, self._state.transactions)

    def is_low_remaining(self, threshold: float = ledger.DEFAULT_LOW_THRESHOLD) -> bool:
        return ledger.is_low_remaining(self._state.budget, self._state.transactions, threshold)

    # -- archival -------------------------------------------------------------

    def tick(self, now: datetime) -> List[ArchiveRecord]:
        """
        Seal every period that ended before ``now`` and reset the live
        budget and ledger. Safe to call as often as desired; returns the
        records created by this call.
        """
        result = seal_due_periods(self._state, parse_timestamp(now))
        if result is None:
            return []
        self._commit(result.state)
        for record in result.sealed:
            logger.info(
                "Sealed period %s with %d transaction(s)",
                record.period_id, len(record.transactions),
            )
        return list(result.sealed)

    # -- reporting ------------------------------------------------------------

    def sums_by_category(self) -> Dict[str, float]:
        return reports.sums_by_category(self._state.transactions)

    def percentages_by_category(self) -> Dict[str, float]:
        return reports.percentages_by_category(self._state.transactions)

    def category_breakdown(self) -> Dict[str, object]:
        return reports.category_breakdown(self._state.transactions)

    def summary(self, threshold: float = ledger.DEFAULT_LOW_THRESHOLD) -> Dict[str, object]:
        return reports.summary(self._state.budget, self._state.transactions, threshold)

    def saved_per_period(self, now: datetime) -> List[Dict[str, object]]:
        return reports.saved_per_period(
            self._state.transactions, self._state.budget,
            self._state.payday, parse_timestamp(now),
        )

    def archive_overview(self) -> List[Dict[str, object]]:
        return reports.archive_overview(self._state.archives)

    # -- persistence ----------------------------------------------------------

    def _commit(self, new_state: EngineState) -> None:
        # a failed save leaves the previous state in place
        self.store.save(new_state.to_dict())
        self._state = new_state
        logger.debug("Persisted engine state")
