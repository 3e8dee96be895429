"""Unit tests for tradestats.stats.win_rate."""

from __future__ import annotations

import pytest

from tradestats.config import EngineConfig
from tradestats.execution.models import FillRecord, RoundTrip, WinRateResult
from tradestats.stats.win_rate import (
    calculate_fill_win_rate,
    calculate_win_rate,
    win_rate_from_round_trips,
    win_rate_percent,
)


def _round_trip_fills(pnls: list[float], coin: str = "X") -> list[FillRecord]:
    """Two fills per PnL value: flat → long 1 @100 → flat.

    Trip *i* closes at ``t = 10*i + 1``; volume is ``100 + (100 + pnl)``.
    """
    fills: list[FillRecord] = []
    for i, pnl in enumerate(pnls):
        t = 10 * i
        fills.append(FillRecord(t, coin, 0.0, 0.0, 1.0, 100.0, "Open Long"))
        fills.append(FillRecord(t + 1, coin, pnl, 1.0, 1.0, 100.0 + pnl, "Close Long"))
    return fills


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------


def test_three_wins_seven_losses():
    fills = _round_trip_fills([5, -5, 5, -5, 5, -5, -5, -5, -5, -5])
    result = calculate_win_rate(fills)
    assert result == WinRateResult(
        win_rate_percent=30.0, sample_size=10, win_count=3, loss_count=7,
    )


def test_single_winning_round_trip():
    fills = [
        FillRecord(1, "X", 0.0, 0.0, 10.0, 100.0, "Open Long"),
        FillRecord(2, "X", 100.0, 10.0, 10.0, 110.0, "Close Long"),
    ]
    result = calculate_win_rate(fills)
    assert result is not None
    assert result.win_rate_percent == 100.0
    assert (result.win_count, result.loss_count, result.sample_size) == (1, 0, 1)


@pytest.mark.parametrize(
    "wins, n, expected",
    [
        (1, 32, 3.13),    # 3.125 rounds half-up, not to even
        (1, 800, 0.13),   # 0.125
        (1, 3, 33.33),
        (2, 3, 66.67),
        (1, 6, 16.67),
        (1, 8, 12.5),
        (0, 5, 0.0),
        (5, 5, 100.0),
    ],
)
def test_rounding_rule(wins, n, expected):
    assert win_rate_percent(wins, n) == expected


def test_rounding_through_calculator():
    fills = _round_trip_fills([5] + [-5] * 31)
    result = calculate_win_rate(fills)
    assert result.win_rate_percent == 3.13
    assert result.win_count + result.loss_count == result.sample_size == 32


def test_win_rate_percent_empty_sample():
    assert win_rate_percent(0, 0) == 0.0


# ---------------------------------------------------------------------------
# Windowing
# ---------------------------------------------------------------------------


class TestWindowing:
    def test_most_recent_thousand_of_fifteen_hundred(self):
        recent = [5 if i % 4 == 0 else -5 for i in range(1000)]
        old_wins = _round_trip_fills([5] * 500 + recent)
        old_losses = _round_trip_fills([-5] * 500 + recent)

        a = calculate_win_rate(old_wins, recent_n=1000)
        b = calculate_win_rate(old_losses, recent_n=1000)

        assert a.sample_size == 1000
        assert a.win_count == 250
        assert a.loss_count == 750
        assert a.win_rate_percent == 25.0
        assert a == b

    def test_window_larger_than_history(self):
        result = calculate_win_rate(_round_trip_fills([5, -5, 5]), recent_n=1000)
        assert result.sample_size == 3
        assert result.win_rate_percent == 66.67

    def test_window_from_config(self):
        fills = _round_trip_fills([-5, -5, 5, 5])
        result = calculate_win_rate(fills, config=EngineConfig(recent_n=2))
        assert result.sample_size == 2
        assert result.win_rate_percent == 100.0

    def test_explicit_window_overrides_config(self):
        fills = _round_trip_fills([-5, -5, 5, 5])
        result = calculate_win_rate(fills, recent_n=4, config=EngineConfig(recent_n=2))
        assert result.sample_size == 4

    @pytest.mark.parametrize("recent_n", [0, -1, -1000])
    def test_non_positive_window_has_no_result(self, recent_n):
        assert calculate_win_rate(_round_trip_fills([5, -5]), recent_n=recent_n) is None

    def test_from_round_trips_takes_the_tail(self):
        trips = [
            RoundTrip(realized_pnl=-1.0, notional_volume=200.0, end_timestamp=1),
            RoundTrip(realized_pnl=2.0, notional_volume=200.0, end_timestamp=2),
            RoundTrip(realized_pnl=3.0, notional_volume=200.0, end_timestamp=3),
        ]
        result = win_rate_from_round_trips(trips, recent_n=2)
        assert result == WinRateResult(100.0, 2, 2, 0)


# ---------------------------------------------------------------------------
# No-result sentinel
# ---------------------------------------------------------------------------


class TestInsufficientData:
    def test_empty_input(self):
        assert calculate_win_rate([]) is None
        assert calculate_win_rate(None) is None

    def test_only_malformed_entries(self):
        assert calculate_win_rate([None, 1, "x", [1, 2]]) is None

    def test_all_trips_below_volume_floor(self):
        fills = _round_trip_fills([5, -5])
        assert calculate_win_rate(fills, config=EngineConfig(minimum_volume_threshold=1e6)) is None

    def test_open_position_only(self):
        fills = [FillRecord(1, "X", 0.0, 0.0, 10.0, 100.0, "Open Long")]
        assert calculate_win_rate(fills) is None

    def test_from_empty_round_trips(self):
        assert win_rate_from_round_trips([]) is None


# ---------------------------------------------------------------------------
# Per-fill win rate
# ---------------------------------------------------------------------------


class TestFillWinRate:
    def test_counts_each_closing_fill(self):
        fills = [
            {"time": 4, "closedPnl": "3"},
            {"time": 1, "closedPnl": "10"},
            {"time": 2, "closedPnl": "-5"},
            {"time": 3, "closedPnl": "0"},
        ]
        result = calculate_fill_win_rate(fills)
        assert result == WinRateResult(66.67, 3, 2, 1)

    def test_window_uses_latest_fills(self):
        fills = [
            {"time": 1, "closedPnl": "10"},
            {"time": 2, "closedPnl": "-5"},
            {"time": 3, "closedPnl": "-1"},
        ]
        result = calculate_fill_win_rate(fills, recent_n=2)
        assert result == WinRateResult(0.0, 2, 0, 2)

    def test_scaling_out_differs_from_round_trip_rate(self):
        """One losing trip closed in three winning-then-losing slices."""
        fills = [
            FillRecord(1, "X", 0.0, 0.0, 3.0, 100.0, "Open Long"),
            FillRecord(2, "X", 1.0, 3.0, 1.0, 101.0, "Close Long"),
            FillRecord(3, "X", 1.0, 2.0, 1.0, 101.0, "Close Long"),
            FillRecord(4, "X", -20.0, 1.0, 1.0, 80.0, "Close Long"),
        ]
        assert calculate_fill_win_rate(fills).win_rate_percent == 66.67
        assert calculate_win_rate(fills).win_rate_percent == 0.0

    def test_no_closing_fills(self):
        assert calculate_fill_win_rate([{"time": 1, "closedPnl": "0"}]) is None
