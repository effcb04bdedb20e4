# payday_ledger/core/categories.py
"""
Category registry operations. Each function validates first and returns new
lists; the caller swaps them in together, so a cascade is never half-applied.
"""
from __future__ import annotations

from dataclasses import replace
from typing import List, Sequence, Tuple

from payday_ledger.core.models import Transaction
from payday_ledger.errors import CategoryInUse, DuplicateCategory, NotFound

FALLBACK_CATEGORY = "Sonstiges"


def _clean(name) -> str:
    return str(name or "").strip()


def create_category(categories: Sequence[str], name: str) -> List[str]:
    new_name = _clean(name)
    if not new_name:
        raise DuplicateCategory("Category name must not be empty")
    if new_name in categories:
        raise DuplicateCategory(f"Category '{new_name}' already exists")
    return list(categories) + [new_name]


def rename_category(
    categories: Sequence[str],
    transactions: Sequence[Transaction],
    old_name: str,
    new_name: str,
) -> Tuple[List[str], List[Transaction]]:
    """Rename a category and rewrite every transaction that references it."""
    if old_name not in categories:
        raise NotFound(f"Category '{old_name}' not found")
    target = _clean(new_name)
    if not target:
        raise DuplicateCategory("Category name must not be empty")
    if target == old_name:
        return list(categories), list(transactions)
    if target in categories:
        raise DuplicateCategory(f"Category '{target}' already exists")

    renamed = [target if c == old_name else c for c in categories]
    txs = [
        replace(tx, category=target) if tx.category == old_name else tx
        for tx in transactions
    ]
    return renamed, txs


def delete_category(
    categories: Sequence[str],
    transactions: Sequence[Transaction],
    name: str,
) -> Tuple[List[str], List[Transaction]]:
    """
    Remove a category. Its transactions move to the fallback category, which
    is registered on the spot if it does not exist yet.
    """
    if name not in categories:
        raise NotFound(f"Category '{name}' not found")
    in_use = any(tx.category == name for tx in transactions)
    if name == FALLBACK_CATEGORY and in_use:
        raise CategoryInUse(
            f"'{FALLBACK_CATEGORY}' still has transactions and cannot be deleted"
        )

    remaining = [c for c in categories if c != name]
    if not in_use:
        return remaining, list(transactions)

    txs = [
        replace(tx, category=FALLBACK_CATEGORY) if tx.category == name else tx
        for tx in transactions
    ]
    if FALLBACK_CATEGORY not in remaining:
        remaining.append(FALLBACK_CATEGORY)
    return remaining, txs
