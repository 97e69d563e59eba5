"""Best-effort coercion of loosely-typed device fields.

Terminals send numbers as JSON numbers or as strings depending on firmware.
Each parser returns ``None`` instead of raising so one odd field never fails
an event or its batch.
"""

from __future__ import annotations

import math
import re
from typing import Any, Optional

from ..core.constants import INT64_MAX, INT64_MIN

_INT_RE = re.compile(r"^[+-]?\d+$")


def parse_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        return None

    if isinstance(value, str):
        text = value.strip()
        if _INT_RE.match(text):
            try:
                return int(text)
            except ValueError:
                # longer than the interpreter int-string limit
                return None
        number = parse_float(text)
        if number is not None and number.is_integer():
            return int(number)
        return None

    return None


def parse_int64(value: Any) -> Optional[int]:
    """Like ``parse_int`` but absent when the value does not fit a 64-bit column."""
    parsed = parse_int(value)
    if parsed is None or not INT64_MIN <= parsed <= INT64_MAX:
        return None
    return parsed


def parse_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None

    return number if math.isfinite(number) else None


def parse_str(value: Any) -> Optional[str]:
    """Stringify truthy values, absent otherwise."""
    if not value:
        return None
    return value if isinstance(value, str) else str(value)
