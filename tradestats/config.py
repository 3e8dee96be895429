"""Immutable engine configuration for round-trip aggregation and win rate."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

DEFAULT_MIN_VOLUME = 100.0
DEFAULT_PNL_EPSILON = 1e-9
DEFAULT_FLAT_EPSILON = 1e-9
DEFAULT_FULL_CLOSE_TOLERANCE = 1e-6
DEFAULT_CLOSE_LABEL = "Close"
DEFAULT_RECENT_N = 1000


@dataclass(frozen=True)
class EngineConfig:
    """Thresholds shared by the aggregator and the win-rate calculator.

    * ``minimum_volume_threshold`` — notional floor (inclusive) a round
      trip must reach to be counted.
    * ``pnl_epsilon`` — ``|realized_pnl|`` must exceed this; draws are
      defined out of the statistic.
    * ``flat_epsilon`` — ``|position_before|`` below this means the
      account was flat before the fill.
    * ``full_close_tolerance`` — relative tolerance used when deciding
      whether the last fill of an unterminated group closed everything.
    * ``close_label`` — substring of ``direction_label`` marking a closing
      fill (case-sensitive).
    * ``recent_n`` — win-rate window size.
    """

    minimum_volume_threshold: float = DEFAULT_MIN_VOLUME
    pnl_epsilon: float = DEFAULT_PNL_EPSILON
    flat_epsilon: float = DEFAULT_FLAT_EPSILON
    full_close_tolerance: float = DEFAULT_FULL_CLOSE_TOLERANCE
    close_label: str = DEFAULT_CLOSE_LABEL
    recent_n: int = DEFAULT_RECENT_N

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> EngineConfig:
        """Build a config from a YAML-shaped dict; missing keys keep defaults."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(
                f"Unknown engine config keys {unknown}. Allowed: {sorted(known)}"
            )
        cfg = cls()
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            default = getattr(cfg, key)
            try:
                kwargs[key] = type(default)(value)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"Invalid value for '{key}': {value!r}") from exc
        return replace(cfg, **kwargs)

    @classmethod
    def from_yaml(cls, path: str | Path) -> EngineConfig:
        """Load from a YAML file; an optional top-level ``engine:`` block is unwrapped."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if "engine" in data:
            data = data["engine"]
        return cls.from_dict(data)

    def with_overrides(self, **overrides: Any) -> EngineConfig:
        """Return a copy with every non-``None`` override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}
