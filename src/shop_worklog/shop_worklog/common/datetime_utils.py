from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from dateutil import parser as date_parser

_SECONDS_PER_HOUR = 3600.0


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def to_canonical(value: datetime) -> str:
    """Render an instant as UTC ISO-8601 with milliseconds, e.g. ``2024-03-11T05:00:00.000Z``.

    Naive datetimes are taken as host local time.
    """
    utc = value.astimezone(timezone.utc)
    return utc.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"


def parse_instant(raw: Any) -> Optional[datetime]:
    """Parse date-like input into an aware UTC datetime, or None if it cannot be parsed.

    Accepts datetime objects, epoch milliseconds and any text python-dateutil
    understands (ISO-8601, ``03/14/2024 10:00``, ``Mar 14 2024 10:00 AM``, ...).
    """
    if raw is None or isinstance(raw, bool):
        return None

    try:
        if isinstance(raw, datetime):
            value = raw
        elif isinstance(raw, (int, float)):
            if not math.isfinite(raw):
                return None
            value = datetime.fromtimestamp(raw / 1000.0, tz=timezone.utc)
        else:
            text = str(raw).strip()
            if not text:
                return None
            value = date_parser.parse(text)
        return value.astimezone(timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None


def normalize(raw: Any) -> Optional[str]:
    parsed = parse_instant(raw)
    if parsed is None:
        return None
    return to_canonical(parsed)


def hours_between(a: Any, b: Any) -> float:
    """Elapsed hours from ``a`` to ``b``; 0.0 when either is invalid or the span is not positive."""
    start = parse_instant(a)
    end = parse_instant(b)
    if start is None or end is None or end <= start:
        return 0.0
    return (end - start).total_seconds() / _SECONDS_PER_HOUR


def start_of_week(value: datetime) -> datetime:
    """Monday 00:00:00.000 of the week containing ``value`` (local wall-clock).

    Aware values are converted to naive local time first, so the result follows
    the local calendar across DST changes.
    """
    local = value.astimezone().replace(tzinfo=None) if value.tzinfo else value
    midnight = local.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight - timedelta(days=midnight.weekday())


def end_of_week(value: datetime) -> datetime:
    """Sunday 23:59:59.999 of the week containing ``value`` (local wall-clock)."""
    sunday = start_of_week(value) + timedelta(days=6)
    return sunday.replace(hour=23, minute=59, second=59, microsecond=999000)
