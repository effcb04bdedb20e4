# payday_ledger/core/period.py
"""
Period arithmetic. A period runs from one payday to the next and is named
after the year and month of the payday that opens it ("2025-08").
"""
from __future__ import annotations

import re
from datetime import datetime
from typing import Iterator, Tuple

MIN_PAYDAY = 1
MAX_PAYDAY = 28

_PERIOD_ID_RE = re.compile(r"\d{4}-\d{2}")


def _shift_month(year: int, month: int, months: int) -> Tuple[int, int]:
    month_index = month - 1 + months
    return year + month_index // 12, month_index % 12 + 1


def period_start_for(reference: datetime, payday: int) -> datetime:
    """Return the start of the period containing ``reference``."""
    if reference.day >= payday:
        return datetime(reference.year, reference.month, payday)
    year, month = _shift_month(reference.year, reference.month, -1)
    return datetime(year, month, payday)


def period_id_for(reference: datetime, payday: int) -> str:
    start = period_start_for(reference, payday)
    return f"{start.year:04d}-{start.month:02d}"


def parse_period_id(period_id: str) -> Tuple[int, int]:
    year, month = map(int, period_id.split('-'))
    return year, month


def validate_period_id(value) -> str:
    """Return ``value`` if it is a canonical "YYYY-MM" id, else raise ValueError."""
    if not isinstance(value, str) or not _PERIOD_ID_RE.fullmatch(value):
        raise ValueError(f"Not a period id: {value!r}")
    if not 1 <= parse_period_id(value)[1] <= 12:
        raise ValueError(f"Month out of range in period id: {value!r}")
    return value


def period_bounds(period_id: str, payday: int) -> Tuple[datetime, datetime]:
    """Return the half-open interval ``[start, next_start)`` for a period id."""
    year, month = parse_period_id(period_id)
    next_year, next_month = _shift_month(year, month, 1)
    return datetime(year, month, payday), datetime(next_year, next_month, payday)


def next_period_id(period_id: str) -> str:
    year, month = _shift_month(*parse_period_id(period_id), 1)
    return f"{year:04d}-{month:02d}"


def iter_period_ids(first: str, stop: str) -> Iterator[str]:
    """Yield period ids from ``first`` up to but excluding ``stop``."""
    current = first
    while current < stop:
        yield current
        current = next_period_id(current)


def period_label(period_id: str) -> str:
    year, month = parse_period_id(period_id)
    return datetime(year, month, 1).strftime('%B %Y')
