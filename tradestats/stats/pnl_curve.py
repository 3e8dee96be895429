"""Tabular views over aggregated round trips — no side effects, no I/O."""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from tradestats.execution.models import RoundTrip

ROUND_TRIP_COLUMNS: list[str] = [
    "instrument", "end_timestamp", "realized_pnl", "notional_volume",
]
CURVE_COLUMNS: list[str] = ROUND_TRIP_COLUMNS + [
    "cumulative_pnl", "peak_pnl", "drawdown",
]


def round_trips_to_frame(round_trips: Sequence[RoundTrip]) -> pd.DataFrame:
    """One row per round trip, in the given (end-time) order."""
    if not round_trips:
        return pd.DataFrame(columns=ROUND_TRIP_COLUMNS)
    df = pd.DataFrame([rt.to_dict() for rt in round_trips])
    return df[ROUND_TRIP_COLUMNS].reset_index(drop=True)


def cumulative_pnl_curve(round_trips: Sequence[RoundTrip]) -> pd.DataFrame:
    """Running realized PnL across round trips with its drawdown.

    ``peak_pnl`` is the running high-water mark of ``cumulative_pnl``,
    floored at zero (the curve starts flat), and ``drawdown`` is
    ``peak_pnl - cumulative_pnl``, never negative.
    """
    df = round_trips_to_frame(round_trips)
    if df.empty:
        return pd.DataFrame(columns=CURVE_COLUMNS)

    df["cumulative_pnl"] = df["realized_pnl"].cumsum()
    df["peak_pnl"] = df["cumulative_pnl"].cummax().clip(lower=0.0)
    df["drawdown"] = df["peak_pnl"] - df["cumulative_pnl"]
    return df[CURVE_COLUMNS]


def max_drawdown(round_trips: Sequence[RoundTrip]) -> float:
    """Largest peak-to-trough drop of the cumulative PnL curve (0.0 if none)."""
    curve = cumulative_pnl_curve(round_trips)
    if curve.empty:
        return 0.0
    return float(curve["drawdown"].max())
