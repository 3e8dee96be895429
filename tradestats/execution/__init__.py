"""Execution-layer value objects and field coercion."""

from tradestats.execution.coercion import coerce_float, coerce_str, coerce_timestamp
from tradestats.execution.models import FillRecord, RoundTrip, WinRateResult

__all__ = [
    "coerce_float",
    "coerce_str",
    "coerce_timestamp",
    "FillRecord",
    "RoundTrip",
    "WinRateResult",
]
