# payday_ledger/core/archive.py
"""
Sealing of finished periods.

``seal_due_periods`` never touches the state it is given. It builds the
complete successor state (new archive records appended, live budget and
transactions reset) and hands it back, so the caller applies the archive
and the reset in one assignment or not at all.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Dict, List, Optional

from payday_ledger.core.models import ArchiveRecord, EngineState, Transaction
from payday_ledger.core.period import iter_period_ids, period_id_for, period_label
from payday_ledger.errors import ArchivalError
from payday_ledger.utils import new_id


@dataclass(frozen=True)
class TickResult:
    state: EngineState
    sealed: List[ArchiveRecord]


def seal_due_periods(state: EngineState, now: datetime) -> Optional[TickResult]:
    """
    Return the state after sealing every period that ended before ``now``.

    Returns ``None`` when nothing changes: the current period was already
    reached, or it lies before the last sealed one (the payday moved later
    in the month). On the very first tick the current period only becomes
    the baseline. Each missed period gets its own record holding the live
    transactions dated inside it; transactions dated in the current period
    stay live.
    """
    current = period_id_for(now, state.payday)
    last = state.last_archived_period_id

    if last is None:
        return TickResult(state=replace(state, last_archived_period_id=current), sealed=[])
    if current <= last:
        return None

    try:
        periods = list(iter_period_ids(last, current))
        buckets: Dict[str, List[Transaction]] = {pid: [] for pid in periods}
        carried: List[Transaction] = []
        for tx in state.transactions:
            pid = period_id_for(tx.timestamp, state.payday)
            if pid >= current:
                carried.append(tx)
            else:
                # anything older than the last boundary belongs to the first open period
                buckets[max(pid, periods[0])].append(tx)

        categories = tuple(state.categories)
        sealed = [
            ArchiveRecord(
                id=new_id("a_"),
                period_id=pid,
                label=period_label(pid),
                archived_at=now,
                budget_at_archive=state.budget if idx == 0 else 0.0,
                transactions=tuple(buckets[pid]),
                categories=categories,
            )
            for idx, pid in enumerate(periods)
        ]
    except Exception as exc:
        raise ArchivalError(f"Could not seal periods {last}..{current}: {exc}") from exc

    new_state = EngineState(
        budget=0.0,
        transactions=carried,
        categories=list(state.categories),
        payday=state.payday,
        archives=list(state.archives) + sealed,
        last_archived_period_id=current,
    )
    return TickResult(state=new_state, sealed=sealed)
