from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from ..common.datetime_utils import end_of_week, now_local, start_of_week, to_canonical
from ..common.numbers import to_number
from ..core.constants import LOW_ACTIVITY_ENTRIES, LOW_ACTIVITY_HOURS, LOW_ACTIVITY_LABEL
from ..entries.model import Entry, part_line_cost
from ..entries.repository import EntryRepository
from .model import WeeklyReport, WeeklyRow

logger = logging.getLogger(__name__)


def risk_flag(*, hours: float, entries: int) -> str:
    if hours < LOW_ACTIVITY_HOURS or entries < LOW_ACTIVITY_ENTRIES:
        return LOW_ACTIVITY_LABEL
    return ""


def entry_parts_cost(entry: Entry) -> float:
    parts = entry.parts if isinstance(entry.parts, list) else []
    return sum(part_line_cost(line) for line in parts)


def summarize_by_mechanic(entries: Iterable[Entry]) -> list[WeeklyRow]:
    """Group entries by mechanic and rank by total hours.

    Groups keep first-seen order and the sort is stable, so ties keep that order.
    """
    by_mechanic: dict[Optional[str], WeeklyRow] = {}

    for e in entries:
        row = by_mechanic.get(e.mechanic)
        if row is None:
            row = WeeklyRow(mechanic=e.mechanic)
            by_mechanic[e.mechanic] = row
        row.entries += 1
        row.hours += to_number(e.duration_hours)
        row.parts += entry_parts_cost(e)

    rows = sorted(by_mechanic.values(), key=lambda r: r.hours, reverse=True)
    for row in rows:
        row.risk = risk_flag(hours=row.hours, entries=row.entries)
    return rows


class WeeklyReportService:
    """Use case: current-week rollup per mechanic for admins."""

    def __init__(self, entries: EntryRepository):
        self._entries = entries

    def weekly_report(self, *, now: Optional[datetime] = None) -> WeeklyReport:
        now = now or now_local()
        start = to_canonical(start_of_week(now))
        end = to_canonical(end_of_week(now))

        rows = summarize_by_mechanic(self._entries.list_between(start=start, end=end))
        logger.info("Weekly report %s..%s: %d mechanic(s)", start, end, len(rows))
        return WeeklyReport(start=start, end=end, rows=rows)
