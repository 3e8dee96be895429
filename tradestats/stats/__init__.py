"""Statistics over reconstructed round trips."""

from tradestats.stats.pnl_curve import (
    cumulative_pnl_curve,
    max_drawdown,
    round_trips_to_frame,
)
from tradestats.stats.win_rate import (
    calculate_fill_win_rate,
    calculate_win_rate,
    win_rate_from_round_trips,
    win_rate_percent,
)

__all__ = [
    "calculate_fill_win_rate",
    "calculate_win_rate",
    "cumulative_pnl_curve",
    "max_drawdown",
    "round_trips_to_frame",
    "win_rate_from_round_trips",
    "win_rate_percent",
]
