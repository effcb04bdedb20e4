# payday_ledger/__init__.py
from payday_ledger.engine import BudgetEngine
from payday_ledger.storage import JsonFileStore, MemoryStore

__all__ = ["BudgetEngine", "JsonFileStore", "MemoryStore"]
