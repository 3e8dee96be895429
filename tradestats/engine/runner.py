"""Report runner — orchestrates load → aggregate → win rate → artifacts."""

from __future__ import annotations

import json
import logging
import shutil
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pandas as pd
import yaml

from tradestats.config import EngineConfig
from tradestats.replay.round_trips import aggregate_round_trips
from tradestats.replay.validation import normalize_fills
from tradestats.reporting.plots import plot_cumulative_pnl
from tradestats.stats.pnl_curve import cumulative_pnl_curve, max_drawdown
from tradestats.stats.win_rate import calculate_fill_win_rate, win_rate_from_round_trips

log = logging.getLogger(__name__)

SNAPSHOT_SUFFIXES = (".json", ".csv")


def find_snapshot_files(fills_path: Path) -> list[Path]:
    """Return the fill snapshot files under *fills_path*, sorted by name."""
    if fills_path.is_file():
        return [fills_path]
    if not fills_path.is_dir():
        return []
    return sorted(
        p for p in fills_path.iterdir()
        if p.is_file() and p.suffix.lower() in SNAPSHOT_SUFFIXES
    )


def load_fill_snapshot(path: Path) -> list[Any]:
    """Read raw fill entries from one JSON or CSV snapshot file.

    JSON may hold a list of fill objects or an object with a ``fills`` list.
    CSV columns are taken as field names; empty cells become ``None``.
    A file that cannot be parsed is skipped with a warning.
    """
    if path.suffix.lower() == ".csv":
        try:
            df = pd.read_csv(path)
        except (pd.errors.EmptyDataError, pd.errors.ParserError) as exc:
            log.warning("Ignoring %s: unreadable CSV (%s)", path.name, exc)
            return []
        df = df.astype(object).where(df.notna(), None)
        return df.to_dict(orient="records")

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        log.warning("Ignoring %s: unreadable JSON (%s)", path.name, exc)
        return []
    if isinstance(payload, dict):
        payload = payload.get("fills", [])
    if not isinstance(payload, list):
        log.warning("Ignoring %s: expected a list of fills", path.name)
        return []
    return payload


def run_report(config_path: str) -> str:
    """Compute round trips and win rate for one fill snapshot and write artifacts.

    Parameters
    ----------
    config_path : str
        Path to a YAML config file.  Relative ``fills_path`` / ``output_dir``
        entries are resolved against the config file's directory.

    Returns
    -------
    str
        The generated ``run_id``.
    """
    cfg_path = Path(config_path).resolve()
    with open(cfg_path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}

    base_dir = cfg_path.parent
    fills_path = base_dir / cfg["fills_path"]
    output_dir = base_dir / cfg["output_dir"]
    account: str = cfg.get("account", "")
    engine_cfg = EngineConfig.from_dict(cfg.get("engine"))

    # ── Generate run_id ──────────────────────────────────────────────
    run_id = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    run_dir = output_dir / run_id
    run_dir.mkdir(parents=True, exist_ok=True)
    (run_dir / "plots").mkdir(exist_ok=True)

    log.info("Run ID   : %s", run_id)
    log.info("Account  : %s", account or "-")
    log.info("Output   : %s", run_dir)

    # ── Load fills ───────────────────────────────────────────────────
    snapshot_files = find_snapshot_files(fills_path)
    if not snapshot_files:
        log.error("No fill snapshots found at %s", fills_path)
        sys.exit(1)

    raw_fills: list[Any] = []
    for snapshot in snapshot_files:
        entries = load_fill_snapshot(snapshot)
        raw_fills.extend(entries)
        log.info("  Loaded %s  (%s entries)", snapshot.name, f"{len(entries):,}")

    fills = normalize_fills(raw_fills)
    log.info(
        "Total fills: %s  (%s malformed skipped)",
        f"{len(fills):,}", f"{len(raw_fills) - len(fills):,}",
    )

    # ── Aggregate + statistics ───────────────────────────────────────
    round_trips = aggregate_round_trips(fills, config=engine_cfg)
    win_rate = win_rate_from_round_trips(round_trips, engine_cfg.recent_n)
    fill_win_rate = calculate_fill_win_rate(fills, config=engine_cfg)
    curve = cumulative_pnl_curve(round_trips)

    if win_rate is None:
        log.warning("Insufficient data: no round trips passed the filters")
    else:
        log.info(
            "Win rate : %.2f%%  (%d W / %d L over %d round trips)",
            win_rate.win_rate_percent, win_rate.win_count,
            win_rate.loss_count, win_rate.sample_size,
        )

    # ── Write artifacts ──────────────────────────────────────────────
    # 1. config.yaml
    shutil.copy2(cfg_path, run_dir / "config.yaml")

    # 2. round_trips.csv
    curve.to_csv(run_dir / "round_trips.csv", index=False)
    log.info("Wrote round_trips.csv  (%s round trips)", f"{len(curve):,}")

    # 3. metrics.json
    metrics = {
        "run_id": run_id,
        "account": account,
        "n_fills": len(fills),
        "n_malformed": len(raw_fills) - len(fills),
        "n_round_trips": len(round_trips),
        "total_realized_pnl": float(sum(rt.realized_pnl for rt in round_trips)),
        "max_drawdown": max_drawdown(round_trips),
        "insufficient_data": win_rate is None,
        "win_rate_percent": win_rate.win_rate_percent if win_rate else None,
        "sample_size": win_rate.sample_size if win_rate else None,
        "win_count": win_rate.win_count if win_rate else None,
        "loss_count": win_rate.loss_count if win_rate else None,
        "fill_win_rate_percent": (
            fill_win_rate.win_rate_percent if fill_win_rate else None
        ),
        "engine": engine_cfg.to_dict(),
    }
    (run_dir / "metrics.json").write_text(
        json.dumps(metrics, indent=2), encoding="utf-8",
    )
    log.info("Wrote metrics.json")

    # 4. plots
    plot_cumulative_pnl(curve, run_dir / "plots" / "cumulative_pnl.png")

    log.info("✓ Run complete: %s", run_dir)
    return run_id
