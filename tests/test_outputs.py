import csv
from datetime import date, datetime

import pytest

from payday_ledger.core.models import Transaction
from payday_ledger.outputs import get_output
from payday_ledger.outputs.csv_output import CSVOutput
from payday_ledger.outputs.html_output import HTMLOutput


def _txs():
    return [
        Transaction("1", 'Coffee "to go"', 4.5, "Food", datetime(2025, 8, 6, 8, 0)),
        Transaction("2", "Rent", 800.0, "Home", datetime(2025, 8, 6, 9, 0)),
        Transaction("3", "Bread", 3.2, "Food", datetime(2025, 8, 7, 7, 0)),
    ]


def test_csv_output(tmp_path):
    out = CSVOutput({"output_dir": str(tmp_path)})
    path = out.write(_txs(), day=date(2025, 8, 10))
    assert path.endswith("verlauf_2025-08-10.csv")
    with open(path, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["category", "description", "amount", "date"]
    assert rows[1] == ["Food", 'Coffee "to go"', "4.50", "2025-08-06T08:00:00"]
    assert len(rows) == 4


def test_html_output_groups_by_category(tmp_path):
    out = HTMLOutput({"output_dir": str(tmp_path)})
    path = out.write(_txs(), day=date(2025, 8, 10))
    html = open(path, encoding="utf-8").read()
    assert "Total Food" in html
    assert "7.70" in html
    assert "807.70" in html
    assert "&quot;to go&quot;" in html
    assert html.index("Total Food") < html.index("Total Home")


def test_outputs_skip_empty(tmp_path):
    assert CSVOutput({"output_dir": str(tmp_path)}).write([]) is None
    assert HTMLOutput({"output_dir": str(tmp_path)}).write([]) is None
    assert list(tmp_path.iterdir()) == []


def test_get_output_by_name(tmp_path):
    cfg = {
        "output_dir": str(tmp_path),
        "output_modules": {"csv": "payday_ledger.outputs.csv_output.CSVOutput"},
    }
    assert isinstance(get_output("csv", cfg), CSVOutput)


def test_get_output_unknown_name(tmp_path):
    cfg = {
        "output_dir": str(tmp_path),
        "output_modules": {"csv": "payday_ledger.outputs.csv_output.CSVOutput"},
    }
    with pytest.raises(ValueError, match="Unknown output format 'pdf'.*csv"):
        get_output("pdf", cfg)
    with pytest.raises(ValueError, match="configured: none"):
        get_output("csv", {"output_dir": str(tmp_path)})
