"""Numeric parsing with explicit zero defaults.

Free-text numbers (labor hours, part quantities and costs) come straight
from the shop floor; these helpers keep the fallback visible instead of
hiding it behind try/except at each call site.
"""
from __future__ import annotations

import math
import re
from typing import Any

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _finite_or(value: float, default: float) -> float:
    return value if math.isfinite(value) else default


def to_number(value: Any, default: float = 0.0) -> float:
    """Strict conversion: the whole value must be numeric. Blank text counts as 0."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return _finite_or(float(value), default)

    text = str(value).strip()
    if not text:
        return 0.0
    try:
        return _finite_or(float(text), default)
    except ValueError:
        return default


def parse_leading_number(value: Any, default: float = 0.0) -> float:
    """Lenient conversion: use the leading numeric prefix, so ``"2.5h"`` gives 2.5."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return _finite_or(float(value), default)

    match = _LEADING_NUMBER.match(str(value))
    if not match:
        return default
    return _finite_or(float(match.group(0)), default)
