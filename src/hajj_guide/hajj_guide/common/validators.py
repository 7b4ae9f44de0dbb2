from __future__ import annotations

from enum import Enum
from typing import Optional, Type, TypeVar

from ..core.exceptions import InvalidInput

E = TypeVar("E", bound=Enum)


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidInput(f"{field_name} is required")
    return str(value).strip()


def optional_text(value: Optional[str]) -> str:
    """Normalize free-text fields that may legitimately be empty."""
    return str(value).strip() if value else ""


def require_int(value, field_name: str) -> int:
    # int(True) and int(30.7) would both succeed silently.
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise InvalidInput(f"{field_name} must be a whole number")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidInput(f"{field_name} must be a whole number")


def require_positive_id(value, field_name: str) -> int:
    number = require_int(value, field_name)
    if number <= 0:
        raise InvalidInput(f"{field_name} must be a positive number")
    return number


def require_in_range(value, field_name: str, *, minimum: int, maximum: Optional[int] = None) -> int:
    number = require_int(value, field_name)
    if number < minimum or (maximum is not None and number > maximum):
        bound = f"between {minimum} and {maximum}" if maximum is not None else f"at least {minimum}"
        raise InvalidInput(f"{field_name} must be {bound}")
    return number


def require_choice(value: Optional[str], enum_cls: Type[E], field_name: str) -> E:
    raw = require_non_empty(value, field_name)
    for member in enum_cls:
        if member.value.lower() == raw.lower():
            return member
    allowed = ", ".join(m.value for m in enum_cls)
    raise InvalidInput(f"{field_name} must be one of: {allowed}")
