"""Win-rate statistics over the most recent round trips (or fills).

Rounding rule: ``win_rate_percent`` is derived from the integer counts in
exact decimal arithmetic and rounded half away from zero to two decimal
places, so 1 win in 32 samples reports ``3.13`` (never ``3.12``).
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Optional, Sequence

from tradestats.config import DEFAULT_RECENT_N, EngineConfig
from tradestats.execution.models import RoundTrip, WinRateResult
from tradestats.replay.round_trips import aggregate_round_trips
from tradestats.replay.validation import normalize_fills

log = logging.getLogger(__name__)

_TWO_PLACES = Decimal("0.01")


def win_rate_percent(win_count: int, sample_size: int) -> float:
    """Return ``win_count / sample_size * 100`` rounded half-up to 2 dp.

    ``0.0`` when *sample_size* is not positive.
    """
    if sample_size <= 0:
        return 0.0
    pct = Decimal(win_count * 100) / Decimal(sample_size)
    return float(pct.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def _recent_window(items: Sequence[Any], recent_n: int) -> Sequence[Any]:
    if recent_n <= 0:
        return items[:0]
    return items[-recent_n:]


def _summarise(pnls: Sequence[float]) -> Optional[WinRateResult]:
    sample_size = len(pnls)
    if sample_size == 0:
        return None
    wins = sum(1 for pnl in pnls if pnl > 0)
    return WinRateResult(
        win_rate_percent=win_rate_percent(wins, sample_size),
        sample_size=sample_size,
        win_count=wins,
        loss_count=sample_size - wins,
    )


def win_rate_from_round_trips(
    round_trips: Sequence[RoundTrip],
    recent_n: int = DEFAULT_RECENT_N,
) -> Optional[WinRateResult]:
    """Reduce an end-time ordered round-trip list to a win-rate summary.

    Returns ``None`` when the window is empty, which callers must render as
    "insufficient data" rather than 0%.  A non-positive *recent_n* yields an
    empty window.
    """
    recent = _recent_window(round_trips, recent_n)
    return _summarise([rt.realized_pnl for rt in recent])


def calculate_win_rate(
    fills: Iterable[Any] | None,
    recent_n: Optional[int] = None,
    config: Optional[EngineConfig] = None,
) -> Optional[WinRateResult]:
    """Win rate over the most recent *recent_n* round trips in *fills*.

    Parameters
    ----------
    fills : iterable
        Raw fill stream, in any order.
    recent_n : int, optional
        Overrides ``config.recent_n`` (default 1000).
    config : EngineConfig, optional
        Shared thresholds for the aggregator.

    Returns
    -------
    WinRateResult or None
        ``None`` when no round trip survives filtering.
    """
    cfg = (config or EngineConfig()).with_overrides(recent_n=recent_n)
    round_trips = aggregate_round_trips(fills, config=cfg)
    result = win_rate_from_round_trips(round_trips, cfg.recent_n)
    if result is None:
        log.debug("No round trips in window (recent_n=%d)", cfg.recent_n)
    return result


def calculate_fill_win_rate(
    fills: Iterable[Any] | None,
    recent_n: Optional[int] = None,
    config: Optional[EngineConfig] = None,
) -> Optional[WinRateResult]:
    """Per-fill win rate: every fill with non-zero realized PnL is one sample.

    This overstates activity for accounts that scale out in many small
    closes; prefer :func:`calculate_win_rate`.
    """
    cfg = (config or EngineConfig()).with_overrides(recent_n=recent_n)
    closing = [f for f in normalize_fills(fills) if f.realized_pnl != 0]
    closing.sort(key=lambda f: f.timestamp)
    recent = _recent_window(closing, cfg.recent_n)
    return _summarise([f.realized_pnl for f in recent])
