"""Execution-layer value objects: FillRecord, RoundTrip and WinRateResult."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from tradestats.execution.coercion import coerce_float, coerce_str, coerce_timestamp

# canonical field -> exchange wire name
WIRE_ALIASES: dict[str, str] = {
    "timestamp": "time",
    "instrument": "coin",
    "realized_pnl": "closedPnl",
    "position_before": "startPosition",
    "size": "sz",
    "price": "px",
    "direction_label": "dir",
}


def _pick(raw: Mapping[str, Any], field: str) -> Any:
    if field in raw:
        return raw[field]
    return raw.get(WIRE_ALIASES[field])


@dataclass(frozen=True)
class FillRecord:
    """One executed trade event for an account.

    ``position_before`` is the signed net position immediately before this
    fill executed; it is the only evidence used to find flat boundaries.
    """

    timestamp: int = 0  # ms since epoch, 0 when unknown
    instrument: str = ""
    realized_pnl: float = 0.0
    position_before: float = 0.0
    size: float = 0.0
    price: float = 0.0
    direction_label: str = ""

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> FillRecord:
        """Build a record from canonical or wire-format keys.

        Numeric values may arrive as strings; anything that does not parse
        becomes ``0``.
        """
        return cls(
            timestamp=coerce_timestamp(_pick(raw, "timestamp")),
            instrument=coerce_str(_pick(raw, "instrument")),
            realized_pnl=coerce_float(_pick(raw, "realized_pnl")),
            position_before=coerce_float(_pick(raw, "position_before")),
            size=coerce_float(_pick(raw, "size")),
            price=coerce_float(_pick(raw, "price")),
            direction_label=coerce_str(_pick(raw, "direction_label")),
        )

    @property
    def notional(self) -> float:
        return abs(self.size) * self.price

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "instrument": self.instrument,
            "realized_pnl": self.realized_pnl,
            "position_before": self.position_before,
            "size": self.size,
            "price": self.price,
            "direction_label": self.direction_label,
        }


@dataclass(frozen=True)
class RoundTrip:
    """One flat-to-flat position lifecycle — maps 1:1 to a round_trips.csv row."""

    realized_pnl: float
    notional_volume: float
    end_timestamp: int
    instrument: str = ""

    @property
    def is_win(self) -> bool:
        return self.realized_pnl > 0

    def to_dict(self) -> dict:
        return {
            "instrument": self.instrument,
            "end_timestamp": self.end_timestamp,
            "realized_pnl": self.realized_pnl,
            "notional_volume": self.notional_volume,
        }


@dataclass(frozen=True)
class WinRateResult:
    """Win-rate summary over the most recent window of samples.

    ``win_count + loss_count == sample_size`` always holds.
    """

    win_rate_percent: float
    sample_size: int
    win_count: int
    loss_count: int

    def to_dict(self) -> dict:
        return {
            "win_rate_percent": self.win_rate_percent,
            "sample_size": self.sample_size,
            "win_count": self.win_count,
            "loss_count": self.loss_count,
        }
