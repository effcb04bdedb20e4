# payday_ledger/utils.py
import math
import uuid
from datetime import date, datetime


def parse_timestamp(value):
    """
    Return a naive local datetime for a datetime, date or ISO-8601 string.
    Aware values are converted to local time first, so every timestamp in a
    state compares against every other one.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        dt = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Unrecognized timestamp: {value!r}")
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def new_id(prefix=''):
    return prefix + uuid.uuid4().hex[:12]


def format_amount(value, currency='CHF'):
    """Format an amount for display, e.g. ``CHF 12.50``."""
    return f"{currency} {float(value or 0):.2f}"


def as_finite_number(value):
    """Return ``value`` as a finite float, or None when it is not one."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None
