"""Round-trip reconstruction from per-fill position evidence.

Fills are grouped per instrument, replayed in timestamp order, and cut into
flat-to-flat round trips wherever ``position_before`` is (within tolerance)
zero.  Each group is processed independently; the merged output is re-sorted
by end timestamp.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from tradestats.config import EngineConfig
from tradestats.execution.models import FillRecord, RoundTrip
from tradestats.replay.validation import normalize_fills

log = logging.getLogger(__name__)


def group_by_instrument(fills: Iterable[FillRecord]) -> dict[str, list[FillRecord]]:
    """Partition *fills* by instrument, keeping input order inside each group."""
    groups: dict[str, list[FillRecord]] = {}
    for fill in fills:
        groups.setdefault(fill.instrument, []).append(fill)
    return groups


def aggregate_round_trips(
    fills: Iterable[Any] | None,
    minimum_volume_threshold: Optional[float] = None,
    config: Optional[EngineConfig] = None,
) -> list[RoundTrip]:
    """Reconstruct completed round trips from an unordered fill stream.

    Parameters
    ----------
    fills : iterable
        ``FillRecord`` objects or raw mappings (canonical or wire keys).
        Non-record entries are skipped.
    minimum_volume_threshold : float, optional
        Overrides ``config.minimum_volume_threshold``.
    config : EngineConfig, optional
        Thresholds; defaults to :class:`EngineConfig()`.

    Returns
    -------
    list[RoundTrip]
        Trips passing the volume and PnL filters, sorted by
        ``end_timestamp`` ascending, then by instrument.
    """
    cfg = (config or EngineConfig()).with_overrides(
        minimum_volume_threshold=minimum_volume_threshold,
    )
    groups = group_by_instrument(normalize_fills(fills))

    round_trips: list[RoundTrip] = []
    for instrument, group in groups.items():
        round_trips.extend(_replay_group(instrument, group, cfg))

    # end-time ties across instruments break on the instrument name
    round_trips.sort(key=lambda rt: (rt.end_timestamp, rt.instrument))
    log.debug(
        "Aggregated %d round trips from %d instrument groups",
        len(round_trips), len(groups),
    )
    return round_trips


def _replay_group(
    instrument: str,
    fills: list[FillRecord],
    cfg: EngineConfig,
) -> list[RoundTrip]:
    """Replay one instrument's fills and emit its completed round trips."""
    ordered = sorted(fills, key=lambda f: f.timestamp)

    trips: list[RoundTrip] = []
    current_pnl = 0.0
    current_volume = 0.0
    current_end_time = 0
    in_round_trip = False

    for fill in ordered:
        if abs(fill.position_before) < cfg.flat_epsilon:
            if in_round_trip and _passes_filters(current_pnl, current_volume, cfg):
                trips.append(
                    RoundTrip(
                        realized_pnl=current_pnl,
                        notional_volume=current_volume,
                        end_timestamp=current_end_time,
                        instrument=instrument,
                    )
                )
            current_pnl = 0.0
            current_volume = 0.0
            current_end_time = 0
            in_round_trip = True

        current_volume += fill.notional
        current_pnl += fill.realized_pnl
        if fill.realized_pnl != 0:
            current_end_time = fill.timestamp

    # Unterminated tail: only a provable full close counts as completed.
    if (
        ordered
        and in_round_trip
        and _passes_filters(current_pnl, current_volume, cfg)
        and _is_full_close(ordered[-1], cfg)
    ):
        trips.append(
            RoundTrip(
                realized_pnl=current_pnl,
                notional_volume=current_volume,
                end_timestamp=ordered[-1].timestamp,
                instrument=instrument,
            )
        )

    return trips


def _passes_filters(pnl: float, volume: float, cfg: EngineConfig) -> bool:
    return abs(pnl) > cfg.pnl_epsilon and volume >= cfg.minimum_volume_threshold


def _is_full_close(fill: FillRecord, cfg: EngineConfig) -> bool:
    """True when *fill* is a closing fill that consumes the whole prior position.

    Only long positions (``position_before > 0``) qualify.
    """
    start = fill.position_before
    return (
        cfg.close_label in fill.direction_label
        and start > 0
        and abs(start - fill.size) / start < cfg.full_close_tolerance
    )
