from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class WeeklyRow:
    """Per-mechanic accumulator for the weekly rollup."""

    mechanic: Optional[str]
    entries: int = 0
    hours: float = 0.0
    parts: float = 0.0
    risk: str = ""

    def to_dict(self) -> dict:
        return {
            "mechanic": self.mechanic,
            "entries": self.entries,
            "hours": self.hours,
            "parts": self.parts,
            "risk": self.risk,
        }


@dataclass(frozen=True)
class WeeklyReport:
    start: str
    end: str
    rows: list[WeeklyRow] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "start": self.start,
            "end": self.end,
            "rows": [r.to_dict() for r in self.rows],
        }
