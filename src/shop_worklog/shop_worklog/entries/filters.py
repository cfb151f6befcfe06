from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from ..core.enums import Role
from .model import Entry


@dataclass(frozen=True)
class Actor:
    """Who is asking: only the role and the display name matter for visibility."""

    role: Optional[str]
    name: Optional[str]

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


@dataclass(frozen=True)
class EntryCriteria:
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    bus: Optional[str] = None
    mechanic: Optional[str] = None
    service_type: Optional[str] = None

    @classmethod
    def from_query(cls, args: Mapping[str, str]) -> "EntryCriteria":
        return cls(
            date_from=args.get("from") or None,
            date_to=args.get("to") or None,
            bus=args.get("bus") or None,
            mechanic=args.get("mech") or None,
            service_type=args.get("type") or None,
        )

    def matches(self, entry: Entry) -> bool:
        if self.date_from and (entry.date is None or entry.date < self.date_from):
            return False
        if self.date_to and (entry.date is None or entry.date > self.date_to):
            return False
        if self.bus and entry.bus != self.bus:
            return False
        if self.mechanic and entry.mechanic != self.mechanic:
            return False
        if self.service_type and entry.service_type != self.service_type:
            return False
        return True


def visible_to(entry: Entry, actor: Actor) -> bool:
    if actor.is_admin:
        return True
    return actor.name is not None and entry.mechanic == actor.name


def filter_entries(entries: Iterable[Entry], actor: Actor, criteria: EntryCriteria) -> list[Entry]:
    """Role visibility first, then every present criterion ANDed together."""
    return [e for e in entries if visible_to(e, actor) and criteria.matches(e)]
