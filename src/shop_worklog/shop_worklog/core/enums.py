from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for visibility rules."""

    ADMIN = "admin"
    MECHANIC = "mechanic"
