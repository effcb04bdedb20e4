# payday_ledger/errors.py
"""Typed failures raised by the ledger and archival engine."""


class LedgerError(ValueError):
    """Base exception for caller-input failures; state is left untouched."""
    pass


class InvalidAmount(LedgerError):
    """Amount is not a finite number greater than zero."""
    pass


class InvalidDescription(LedgerError):
    """Description is empty after trimming."""
    pass


class DuplicateCategory(LedgerError):
    """Category name is empty or already registered."""
    pass


class UnknownCategory(LedgerError):
    """Transaction references a category that is not registered."""
    pass


class NotFound(LedgerError):
    """No category or transaction with the given key."""
    pass


class InvalidPayday(LedgerError):
    """Payday is not an integer in [1, 28]."""
    pass


class InvalidBudget(LedgerError):
    """Budget is negative or not finite."""
    pass


class CategoryInUse(LedgerError):
    """The fallback category cannot be deleted while transactions use it."""
    pass


class ArchivalError(Exception):
    """Sealing a period failed; no part of the seal was applied."""
    pass
