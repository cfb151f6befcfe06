from __future__ import annotations

from typing import Any

from ..core.constants import PIN_LENGTH
from ..core.enums import Role
from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_pin(value: Any) -> str:
    pin = "" if value is None else str(value)
    if len(pin) != PIN_LENGTH:
        raise ValidationError(f"name + {PIN_LENGTH}-digit pin required")
    return pin


def require_role(value: Any) -> Role:
    try:
        return Role(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown role: {value!r}")
