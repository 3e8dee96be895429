"""Per-field numeric coercion for raw fill payloads.

Every value that is missing, unparseable or non-finite degrades to a
neutral value; nothing here raises.
"""

from __future__ import annotations

import math
from typing import Any

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1


def coerce_float(value: Any) -> float:
    """Return *value* as a finite float, or ``0.0`` when that is not possible."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(result):
        return 0.0
    return result


def coerce_timestamp(value: Any) -> int:
    """Return *value* as integer milliseconds; unknown timestamps become 0.

    Values outside the int64 range cannot be real epoch times and are
    treated as unknown.
    """
    result = int(coerce_float(value))
    if not _INT64_MIN <= result <= _INT64_MAX:
        return 0
    return result


def coerce_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
