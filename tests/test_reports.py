from datetime import datetime

import pytest

from payday_ledger.core.models import ArchiveRecord, Transaction
from payday_ledger.reports import (
    archive_overview,
    category_breakdown,
    percentages_by_category,
    saved_per_period,
    summary,
    sums_by_category,
)


def _txs():
    return [
        Transaction("1", "Rent", 800.0, "Home", datetime(2025, 6, 10)),
        Transaction("2", "Lunch", 20.0, "Food", datetime(2025, 7, 4)),
        Transaction("3", "Dinner", 30.0, "Food", datetime(2025, 8, 6)),
    ]


def test_sums_by_category_omits_empty_categories():
    assert sums_by_category(_txs()) == {"Home": 800.0, "Food": 50.0}
    assert sums_by_category([]) == {}


def test_percentages_sum_to_one():
    shares = percentages_by_category(_txs())
    assert shares["Home"] == pytest.approx(800 / 850)
    assert sum(shares.values()) == pytest.approx(1.0)


def test_percentages_empty_when_nothing_spent():
    assert percentages_by_category([]) == {}


def test_category_breakdown_groups_sorted_by_name():
    result = category_breakdown(_txs())
    assert [g["category"] for g in result["categories"]] == ["Food", "Home"]
    assert result["categories"][0]["total"] == 50.0
    assert [t.id for t in result["categories"][0]["transactions"]] == ["2", "3"]
    assert result["total"] == 850.0


def test_summary_reports_raw_balance():
    info = summary(1000.0, _txs(), threshold=200)
    assert info["spent"] == 850.0
    assert info["remaining"] == 150.0
    assert info["balance"] == 150.0
    assert info["low_remaining"] is True

    overspent = summary(500.0, _txs())
    assert overspent["remaining"] == 0.0
    assert overspent["balance"] == -350.0


def test_saved_per_period_covers_earliest_to_current():
    rows = saved_per_period(_txs(), 1000.0, 5, datetime(2025, 8, 20))
    assert [r["period"] for r in rows] == ["2025-06", "2025-07", "2025-08"]
    # Jul 4 is before the payday, so it belongs to June's period
    assert [r["spent"] for r in rows] == [820.0, 0.0, 30.0]
    assert [r["saved"] for r in rows] == [180.0, 1000.0, 970.0]
    assert rows[0]["start"] == datetime(2025, 6, 5)
    assert rows[0]["end"] == datetime(2025, 7, 5)


def test_saved_per_period_without_transactions():
    rows = saved_per_period([], 300.0, 1, datetime(2025, 8, 20))
    assert len(rows) == 1
    assert rows[0]["period"] == "2025-08"
    assert rows[0]["saved"] == 300.0


def test_archive_overview():
    record = ArchiveRecord(
        id="a1",
        period_id="2025-07",
        label="July 2025",
        archived_at=datetime(2025, 8, 5),
        budget_at_archive=1000.0,
        transactions=tuple(_txs()[:2]),
        categories=("Home", "Food"),
    )
    rows = archive_overview([record])
    assert rows == [{
        "period": "2025-07",
        "label": "July 2025",
        "archived_at": datetime(2025, 8, 5),
        "budget": 1000.0,
        "spent": 820.0,
        "saved": 180.0,
        "transactions": 2,
    }]
