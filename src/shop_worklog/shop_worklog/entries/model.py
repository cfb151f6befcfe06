from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..common.numbers import to_number


@dataclass(frozen=True)
class Entry:
    """Domain entity: one work order logged by a mechanic against a bus.

    ``date`` and ``duration_hours`` are derived at write time and never taken
    from the caller.
    """

    entry_id: str
    date: str
    mechanic: Optional[str] = None
    bus: Optional[str] = None
    service_type: Optional[str] = None
    odometer: Optional[str] = None
    labor_hours: str = ""
    notes: Optional[str] = None
    photos: list[Any] = field(default_factory=list)
    parts: list[Any] = field(default_factory=list)
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    duration_hours: float = 0.0

    def to_dict(self) -> dict:
        return {
            "id": self.entry_id,
            "date": self.date,
            "mechanic": self.mechanic,
            "bus": self.bus,
            "serviceType": self.service_type,
            "odometer": self.odometer,
            "laborHours": self.labor_hours,
            "notes": self.notes,
            "photos": list(self.photos),
            "parts": list(self.parts),
            "startTime": self.start_time,
            "endTime": self.end_time,
            "durationHours": self.duration_hours,
        }


def part_line_cost(line: Any) -> float:
    """quantity x unit cost of one part line; lines that are not mappings cost nothing.

    The client sends ``qty``/``unit``; ``quantity``/``unitCost`` are accepted too.
    """
    if not isinstance(line, dict):
        return 0.0
    qty = line.get("qty", line.get("quantity"))
    unit = line.get("unit", line.get("unitCost"))
    return to_number(qty) * to_number(unit)
