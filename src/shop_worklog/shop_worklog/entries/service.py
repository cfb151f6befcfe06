from __future__ import annotations

import logging
import secrets
import string
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import now_local
from ..core.constants import ENTRY_ID_MAX_LENGTH, ENTRY_ID_RANDOM_CHARS
from ..core.exceptions import StorageError, ValidationError
from .codec import as_list
from .derivation import derive_times
from .filters import Actor, EntryCriteria, filter_entries
from .model import Entry
from .repository import EntryRepository

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase


def _to_base36(value: int) -> str:
    if value <= 0:
        return "0"
    out = []
    while value:
        value, rem = divmod(value, 36)
        out.append(_BASE36[rem])
    return "".join(reversed(out))


def generate_entry_id(now: Optional[datetime] = None) -> str:
    """Millisecond clock in base 36 followed by a short random suffix."""
    millis = int((now or now_local()).timestamp() * 1000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(ENTRY_ID_RANDOM_CHARS))
    return _to_base36(millis) + suffix


def _text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


class EntryService:
    """Use cases: record, remove and list work-order entries."""

    def __init__(self, entries: EntryRepository):
        self._entries = entries

    def upsert(self, payload: Mapping[str, Any], *, now: Optional[datetime] = None) -> Entry:
        """Insert or fully replace an entry; derived fields are always recomputed."""
        if not isinstance(payload, Mapping):
            raise ValidationError("Entry payload must be a JSON object")

        now = now or now_local()
        entry_id = str(payload.get("id") or "").strip() or generate_entry_id(now)
        if len(entry_id) > ENTRY_ID_MAX_LENGTH:
            raise ValidationError(f"Entry id longer than {ENTRY_ID_MAX_LENGTH} characters")
        derived = derive_times(
            start_time=payload.get("startTime"),
            end_time=payload.get("endTime"),
            labor_hours=payload.get("laborHours"),
            now=now,
        )

        labor_hours = payload.get("laborHours")
        entry = Entry(
            entry_id=entry_id,
            date=derived.date,
            mechanic=_text(payload.get("mechanic")),
            bus=_text(payload.get("bus")),
            service_type=_text(payload.get("serviceType")),
            odometer=_text(payload.get("odometer")),
            labor_hours="" if labor_hours is None else str(labor_hours),
            notes=_text(payload.get("notes")),
            photos=as_list(payload.get("photos")),
            parts=as_list(payload.get("parts")),
            start_time=derived.start_time,
            end_time=derived.end_time,
            duration_hours=derived.duration_hours,
        )

        self._entries.save(entry)
        saved = self._entries.get_by_id(entry_id)
        if saved is None:
            raise StorageError(f"Entry {entry_id} was not persisted")

        logger.info("Saved entry %s (mechanic=%s, hours=%.2f)", entry_id, entry.mechanic, entry.duration_hours)
        return saved

    def delete(self, entry_id: str) -> None:
        """Remove an entry; deleting an unknown id is a no-op."""
        if self._entries.delete(entry_id):
            logger.info("Deleted entry %s", entry_id)

    def list_entries(self, actor: Actor, criteria: Optional[EntryCriteria] = None) -> list[Entry]:
        return filter_entries(self._entries.list_all(), actor, criteria or EntryCriteria())
