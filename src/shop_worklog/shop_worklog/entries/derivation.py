from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import hours_between, normalize, now_local, to_canonical
from ..common.numbers import parse_leading_number


@dataclass(frozen=True)
class DerivedTimes:
    date: str
    start_time: Optional[str]
    end_time: Optional[str]
    duration_hours: float


def _present(value: Any) -> bool:
    # 0 and False mean "not given", same as blank text
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, (int, float)):
        return value != 0
    return str(value).strip() != ""


def derive_times(
    *,
    start_time: Any,
    end_time: Any,
    labor_hours: Any,
    now: Optional[datetime] = None,
) -> DerivedTimes:
    """Recompute the canonical date and duration of an entry from its raw inputs.

    - date: normalized start time, else the write instant.
    - duration: start->end span when both parse, else the numeric labor hours.
    """
    start_iso = normalize(start_time) if _present(start_time) else None
    end_iso = normalize(end_time) if _present(end_time) else None
    date_iso = start_iso or to_canonical(now or now_local())

    if start_iso and end_iso:
        duration = hours_between(start_iso, end_iso)
    else:
        duration = parse_leading_number(labor_hours)

    return DerivedTimes(
        date=date_iso,
        start_time=start_iso,
        end_time=end_iso,
        duration_hours=max(duration, 0.0),
    )
