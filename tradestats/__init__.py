"""tradestats — round-trip reconstruction and win-rate statistics from fills."""

from tradestats.config import EngineConfig
from tradestats.execution.models import FillRecord, RoundTrip, WinRateResult
from tradestats.replay.round_trips import aggregate_round_trips
from tradestats.stats.win_rate import (
    calculate_fill_win_rate,
    calculate_win_rate,
    win_rate_from_round_trips,
)

__all__ = [
    "EngineConfig",
    "FillRecord",
    "RoundTrip",
    "WinRateResult",
    "aggregate_round_trips",
    "calculate_fill_win_rate",
    "calculate_win_rate",
    "win_rate_from_round_trips",
]
