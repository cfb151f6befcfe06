from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Entry


class EntryRepository(Protocol):
    """Repository interface for work-order entries.

    Services depend on this interface, never on a concrete database.
    """

    def save(self, entry: Entry) -> None:
        """Insert or fully replace the entry with the same id in one statement."""

        raise NotImplementedError

    def get_by_id(self, entry_id: str) -> Optional[Entry]:
        raise NotImplementedError

    def delete(self, entry_id: str) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[Entry]:
        """All entries, newest date first."""

        raise NotImplementedError

    def list_between(self, *, start: str, end: str) -> Sequence[Entry]:
        """Entries with start <= date <= end, oldest first."""

        raise NotImplementedError
