# payday_ledger/core/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from payday_ledger.core.period import validate_period_id
from payday_ledger.utils import as_finite_number, parse_timestamp

DEFAULT_PAYDAY = 1


@dataclass(frozen=True)
class Transaction:
    id: str
    description: str
    amount: float
    category: str
    timestamp: datetime

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "description": self.description,
            "amount": self.amount,
            "category": self.category,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "Transaction":
        if not isinstance(data, dict):
            raise ValueError(f"Transaction entry must be an object, got {data!r}")
        # "desc"/"date" are the keys written by the browser version of the planner
        description = data.get("description", data.get("desc"))
        timestamp = data.get("timestamp", data.get("date"))
        if not data.get("id") or description is None or timestamp is None:
            raise ValueError(f"Incomplete transaction entry: {data}")
        description = str(description).strip()
        amount = as_finite_number(data.get("amount"))
        if not description or amount is None or amount <= 0:
            raise ValueError(f"Invalid transaction entry: {data}")
        return cls(
            id=str(data["id"]),
            description=description,
            amount=amount,
            category=str(data["category"]),
            timestamp=parse_timestamp(timestamp),
        )


@dataclass(frozen=True)
class ArchiveRecord:
    """One sealed period. Snapshots are tuples so a record cannot change."""

    id: str
    period_id: str
    label: str
    archived_at: datetime
    budget_at_archive: float
    transactions: Tuple[Transaction, ...]
    categories: Tuple[str, ...]

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "period_id": self.period_id,
            "label": self.label,
            "archived_at": self.archived_at.isoformat(),
            "budget_at_archive": self.budget_at_archive,
            "transactions": [tx.to_dict() for tx in self.transactions],
            "categories": list(self.categories),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "ArchiveRecord":
        return cls(
            id=str(data["id"]),
            period_id=validate_period_id(data["period_id"]),
            label=str(data.get("label") or data["period_id"]),
            archived_at=parse_timestamp(data["archived_at"]),
            budget_at_archive=float(data.get("budget_at_archive", 0.0)),
            transactions=tuple(
                Transaction.from_dict(t) for t in _as_list(data.get("transactions"), "transactions")
            ),
            categories=tuple(str(c) for c in _as_list(data.get("categories"), "categories")),
        )


@dataclass
class EngineState:
    """The whole persisted surface of the engine."""

    budget: float = 0.0
    transactions: List[Transaction] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    payday: int = DEFAULT_PAYDAY
    archives: List[ArchiveRecord] = field(default_factory=list)
    last_archived_period_id: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "budget": self.budget,
            "transactions": [tx.to_dict() for tx in self.transactions],
            "categories": list(self.categories),
            "payday": self.payday,
            "archives": [rec.to_dict() for rec in self.archives],
            "last_archived_period_id": self.last_archived_period_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "EngineState":
        """Rebuild a state from a stored blob.

        Raises ``ValueError`` (or ``KeyError``/``TypeError`` from malformed
        entries) when the blob cannot be interpreted. Missing keys take their
        defaults and an out-of-range payday falls back to 1.
        """
        if not isinstance(data, dict):
            raise ValueError("Engine state must be a JSON object")

        transactions = [
            Transaction.from_dict(t) for t in _as_list(data.get("transactions"), "transactions")
        ]
        categories: List[str] = []
        for name in _as_list(data.get("categories"), "categories"):
            name = str(name)
            if name not in categories:
                categories.append(name)
        # a transaction may never point at an unregistered category
        for tx in transactions:
            if tx.category not in categories:
                categories.append(tx.category)

        payday = data.get("payday", DEFAULT_PAYDAY)
        if not isinstance(payday, int) or isinstance(payday, bool) or not 1 <= payday <= 28:
            payday = DEFAULT_PAYDAY

        last = data.get("last_archived_period_id")
        return cls(
            budget=float(data.get("budget") or 0.0),
            transactions=transactions,
            categories=categories,
            payday=payday,
            archives=[
                ArchiveRecord.from_dict(r) for r in _as_list(data.get("archives"), "archives")
            ],
            last_archived_period_id=validate_period_id(last) if last is not None else None,
        )


def _as_list(value, name: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"'{name}' must be a list, got {type(value).__name__}")
    return value
