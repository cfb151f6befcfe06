"""JSON text encoding for the list-valued entry columns (photos, parts)."""
from __future__ import annotations

import json
from typing import Any


def as_list(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def encode_list(value: Any) -> str:
    return json.dumps(as_list(value), ensure_ascii=False)


def decode_list(raw: Any) -> list:
    """Decode a stored list; anything malformed or not a JSON array reads as empty."""
    if raw is None or raw == "":
        return []
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        return []
    return value if isinstance(value, list) else []
