# payday_ledger/reports.py
"""
Read-only aggregations over a set of transactions.

Every function takes the transactions to aggregate as an argument, so the
same helpers work on the live ledger and on an archived snapshot.
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Sequence

from payday_ledger.core.ledger import DEFAULT_LOW_THRESHOLD, balance, remaining, total_spent
from payday_ledger.core.models import ArchiveRecord, Transaction
from payday_ledger.core.period import (
    iter_period_ids,
    next_period_id,
    period_bounds,
    period_id_for,
    period_label,
)


def sums_by_category(transactions: Iterable[Transaction]) -> Dict[str, float]:
    """Total amount per category, in order of first appearance."""
    sums: Dict[str, float] = {}
    for tx in transactions:
        sums[tx.category] = sums.get(tx.category, 0.0) + tx.amount
    return sums


def percentages_by_category(transactions: Iterable[Transaction]) -> Dict[str, float]:
    """
    Share of the grand total per category, as fractions summing to 1.0.
    Empty when nothing has been spent.
    """
    sums = sums_by_category(transactions)
    total = sum(sums.values())
    if not total:
        return {}
    return {cat: value / total for cat, value in sums.items()}


def category_breakdown(transactions: Iterable[Transaction]) -> Dict[str, object]:
    """Transactions grouped by category (sorted by name) with subtotals."""
    grouped: Dict[str, List[Transaction]] = {}
    for tx in transactions:
        grouped.setdefault(tx.category, []).append(tx)
    groups = [
        {
            "category": cat,
            "transactions": grouped[cat],
            "total": total_spent(grouped[cat]),
        }
        for cat in sorted(grouped)
    ]
    return {
        "categories": groups,
        "total": sum(g["total"] for g in groups),
    }


def summary(
    budget: float,
    transactions: Sequence[Transaction],
    threshold: float = DEFAULT_LOW_THRESHOLD,
) -> Dict[str, object]:
    raw = balance(budget, transactions)
    return {
        "budget": budget,
        "spent": total_spent(transactions),
        "balance": raw,
        "remaining": remaining(budget, transactions),
        "low_remaining": raw < threshold,
        "transactions": len(transactions),
    }


def saved_per_period(
    transactions: Sequence[Transaction],
    budget: float,
    payday: int,
    now: datetime,
) -> List[Dict[str, object]]:
    """
    Budget minus spending for each period from the earliest transaction's
    period through the current one. Periods are ``[start, end)`` intervals
    computed with ``payday``; archive records are not consulted.
    """
    current = period_id_for(now, payday)
    first = current
    if transactions:
        earliest = min(tx.timestamp for tx in transactions)
        first = min(period_id_for(earliest, payday), current)

    spent_by_period: Dict[str, float] = {}
    for tx in transactions:
        pid = period_id_for(tx.timestamp, payday)
        spent_by_period[pid] = spent_by_period.get(pid, 0.0) + tx.amount

    records = []
    for pid in iter_period_ids(first, next_period_id(current)):
        start, end = period_bounds(pid, payday)
        spent = spent_by_period.get(pid, 0.0)
        records.append({
            "period": pid,
            "label": period_label(pid),
            "start": start,
            "end": end,
            "spent": spent,
            "saved": budget - spent,
        })
    return records


def archive_overview(archives: Iterable[ArchiveRecord]) -> List[Dict[str, object]]:
    """One row per sealed period: budget, spending and what was saved."""
    rows = []
    for record in archives:
        spent = total_spent(record.transactions)
        rows.append({
            "period": record.period_id,
            "label": record.label,
            "archived_at": record.archived_at,
            "budget": record.budget_at_archive,
            "spent": spent,
            "saved": record.budget_at_archive - spent,
            "transactions": len(record.transactions),
        })
    return rows
