# payday_ledger/outputs/base.py
from abc import ABC, abstractmethod

class BaseOutput(ABC):
    @abstractmethod
    def write(self, transactions, day=None):
        """Export transactions; return the written path, or None if there was nothing to write."""
        pass
