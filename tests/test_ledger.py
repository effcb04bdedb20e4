from datetime import datetime

import pytest

from payday_ledger.core.ledger import (
    balance,
    build_transaction,
    filter_transactions,
    find_transaction,
    is_low_remaining,
    remaining,
    remove_transaction,
    total_spent,
    validate_budget,
)
from payday_ledger.core.models import Transaction
from payday_ledger.errors import (
    InvalidAmount,
    InvalidBudget,
    InvalidDescription,
    NotFound,
    UnknownCategory,
)

NOW = datetime(2025, 8, 10, 12, 0)


def test_build_transaction_assigns_id_and_timestamp():
    tx = build_transaction(["Food"], "  Coffee ", 4.5, "Food", NOW)
    assert tx.description == "Coffee"
    assert tx.amount == 4.5
    assert tx.category == "Food"
    assert tx.timestamp == NOW
    assert tx.id

    other = build_transaction(["Food"], "Coffee", 4.5, "Food", NOW)
    assert other.id != tx.id


@pytest.mark.parametrize("amount", [0, -1, float("nan"), float("inf"), "abc", None, True])
def test_build_transaction_rejects_bad_amounts(amount):
    with pytest.raises(InvalidAmount):
        build_transaction(["Food"], "Coffee", amount, "Food", NOW)


def test_build_transaction_rejects_empty_description():
    with pytest.raises(InvalidDescription):
        build_transaction(["Food"], "   ", 4.5, "Food", NOW)


def test_build_transaction_requires_registered_category():
    with pytest.raises(UnknownCategory):
        build_transaction([], "Coffee", 4.5, "Food", NOW)
    with pytest.raises(UnknownCategory):
        build_transaction(["Rent"], "Coffee", 4.5, "Food", NOW)


def test_remove_transaction():
    txs = [Transaction("a", "A", 1.0, "Food", NOW), Transaction("b", "B", 2.0, "Food", NOW)]
    assert [t.id for t in remove_transaction(txs, "a")] == ["b"]
    with pytest.raises(NotFound):
        remove_transaction(remove_transaction(txs, "a"), "a")


def test_find_transaction():
    txs = [Transaction("a", "A", 1.0, "Food", NOW)]
    assert find_transaction(txs, "a").description == "A"
    with pytest.raises(NotFound):
        find_transaction(txs, "zzz")


def test_totals_and_remaining():
    txs = [
        Transaction("a", "Rent", 800.0, "Home", NOW),
        Transaction("b", "Food", 50.0, "Food", NOW),
    ]
    assert total_spent(txs) == 850.0
    assert remaining(1000.0, txs) == 150.0
    assert is_low_remaining(1000.0, txs)
    assert not is_low_remaining(1000.0, txs, threshold=100)


def test_overspent_budget():
    txs = [Transaction("a", "Rent", 1200.0, "Home", NOW)]
    assert remaining(1000.0, txs) == 0.0
    assert balance(1000.0, txs) == -200.0


def test_validate_budget():
    assert validate_budget(0) == 0.0
    assert validate_budget("1500") == 1500.0
    for bad in (-1, float("nan"), "x"):
        with pytest.raises(InvalidBudget):
            validate_budget(bad)


def test_filter_transactions_newest_first():
    txs = [
        Transaction("a", "Coffee", 4.0, "Food", NOW),
        Transaction("b", "Train ticket", 20.0, "Travel", NOW),
        Transaction("c", "Coffee beans", 12.0, "Food", NOW),
    ]
    assert [t.id for t in filter_transactions(txs)] == ["c", "b", "a"]
    assert [t.id for t in filter_transactions(txs, "coffee")] == ["c", "a"]
    assert [t.id for t in filter_transactions(txs, "TRAVEL")] == ["b"]
    assert [t.id for t in filter_transactions(txs, "", "Food")] == ["c", "a"]
    assert [t.id for t in filter_transactions(txs, "beans", "Food")] == ["c"]
    assert filter_transactions(txs, "beans", "Travel") == []
