from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import BadInputError


def require_non_empty(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise BadInputError(message)
    return value.strip()


def parse_positive_int(value: Any, message: str) -> int:
    """Parse a path/query value into an int >= 1."""

    if isinstance(value, bool):
        raise BadInputError(message)
    try:
        parsed = int(str(value).strip(), 10)
    except (TypeError, ValueError):
        raise BadInputError(message)
    if parsed <= 0:
        raise BadInputError(message)
    return parsed


def optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise BadInputError(f"{field_name} must be an integer.")
    return value


def optional_str(value: Any, field_name: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise BadInputError(f"{field_name} must be a string.")
    return value.strip() or None


def require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise BadInputError(f"{field_name} must be a boolean.")
    return value


_SIZE_UNITS = {"b": 1, "kb": 1024, "mb": 1024 * 1024, "gb": 1024 * 1024 * 1024}


def parse_byte_size(value: Any) -> int:
    """Parse sizes like '10kb', '1mb' or '2048' into a byte count."""

    if isinstance(value, int) and not isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    number = text.rstrip("bkmg")
    unit = text[len(number):] or "b"
    if not number.isdigit() or unit not in _SIZE_UNITS:
        raise ValueError(f"Invalid size: {value!r}")
    return int(number) * _SIZE_UNITS[unit]
