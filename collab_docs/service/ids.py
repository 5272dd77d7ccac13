"""Identifier helpers."""

from __future__ import annotations

from typing import Any
import uuid


def new_id() -> str:
    return str(uuid.uuid4())


def is_valid_id(value: Any) -> bool:
    """True for a canonical UUID string; anything else is treated as unknown."""
    if not isinstance(value, str):
        return False
    try:
        parsed = uuid.UUID(value)
    except ValueError:
        return False
    return str(parsed) == value.lower()
