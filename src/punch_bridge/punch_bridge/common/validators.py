from __future__ import annotations

import re
from typing import Any

from ..core.constants import INT64_MAX
from ..core.exceptions import ValidationError
from .coercion import parse_int


def require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field_name}")

    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str) and re.fullmatch(r"[+-]?\d+", value.strip()):
        try:
            parsed = int(value.strip())
        except ValueError as exc:
            raise ValidationError(f"Invalid {field_name}") from exc
    else:
        raise ValidationError(f"Invalid {field_name}")

    if not 0 < parsed <= INT64_MAX:
        raise ValidationError(f"Invalid {field_name}")
    return parsed


def clamp_limit(value: Any, *, default: int, maximum: int) -> int:
    """Clamp a requested page size into ``[1, maximum]``; unparseable → default."""
    parsed = parse_int(value)
    if parsed is None:
        return default
    return max(1, min(parsed, maximum))


def clamp_offset(value: Any, *, default: int = 0) -> int:
    parsed = parse_int(value)
    if parsed is None:
        return default
    return max(0, min(parsed, INT64_MAX))
