# payday_ledger/core/ledger.py
from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from payday_ledger.core.models import Transaction
from payday_ledger.errors import (
    InvalidAmount,
    InvalidBudget,
    InvalidDescription,
    NotFound,
    UnknownCategory,
)
from payday_ledger.utils import as_finite_number, new_id

DEFAULT_LOW_THRESHOLD = 200.0


def validate_budget(amount) -> float:
    number = as_finite_number(amount)
    if number is None or number < 0:
        raise InvalidBudget(f"Budget must be a non-negative number, got {amount!r}")
    return number


def build_transaction(
    categories: Sequence[str],
    description: str,
    amount,
    category: str,
    timestamp: datetime,
) -> Transaction:
    """Validate the input and return a new transaction with a fresh id."""
    number = as_finite_number(amount)
    if number is None or number <= 0:
        raise InvalidAmount(f"Amount must be a positive number, got {amount!r}")
    desc = str(description or "").strip()
    if not desc:
        raise InvalidDescription("Description must not be empty")
    if category not in categories:
        raise UnknownCategory(f"Category '{category}' is not registered")
    return Transaction(
        id=new_id("t_"),
        description=desc,
        amount=number,
        category=category,
        timestamp=timestamp,
    )


def remove_transaction(transactions: Sequence[Transaction], tx_id: str) -> List[Transaction]:
    kept = [tx for tx in transactions if tx.id != tx_id]
    if len(kept) == len(transactions):
        raise NotFound(f"Transaction '{tx_id}' not found")
    return kept


def find_transaction(transactions: Iterable[Transaction], tx_id: str) -> Transaction:
    for tx in transactions:
        if tx.id == tx_id:
            return tx
    raise NotFound(f"Transaction '{tx_id}' not found")


def total_spent(transactions: Iterable[Transaction]) -> float:
    return sum(tx.amount for tx in transactions)


def balance(budget: float, transactions: Iterable[Transaction]) -> float:
    """Budget minus spending; negative once the budget is overspent."""
    return budget - total_spent(transactions)


def remaining(budget: float, transactions: Iterable[Transaction]) -> float:
    return max(0.0, balance(budget, transactions))


def is_low_remaining(
    budget: float,
    transactions: Iterable[Transaction],
    threshold: float = DEFAULT_LOW_THRESHOLD,
) -> bool:
    return balance(budget, transactions) < threshold


def filter_transactions(
    transactions: Iterable[Transaction],
    text: str = "",
    category: Optional[str] = None,
) -> List[Transaction]:
    """
    Return transactions matching ``text`` (case-insensitive, in description or
    category) and ``category`` (exact), newest first.
    """
    query = (text or "").lower()
    matches = [
        tx for tx in transactions
        if (not category or tx.category == category)
        and (not query or query in tx.description.lower() or query in tx.category.lower())
    ]
    matches.reverse()
    return matches
