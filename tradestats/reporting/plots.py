"""Plotting utilities for win-rate reporting."""

from __future__ import annotations

import logging
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402

log = logging.getLogger(__name__)


def plot_cumulative_pnl(curve: pd.DataFrame, out_path: str | Path) -> None:
    """Plot cumulative realized PnL per round trip and save as PNG.

    Parameters
    ----------
    curve : pd.DataFrame
        Output of :func:`tradestats.stats.cumulative_pnl_curve`; needs
        ``end_timestamp``, ``cumulative_pnl`` and ``drawdown`` columns.
    out_path : str | Path
        Destination file path (e.g. ``plots/cumulative_pnl.png``).
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(14, 5))
    if curve.empty:
        ax.set_title("Cumulative PnL  (no round trips)")
    else:
        times = pd.to_datetime(
            curve["end_timestamp"].astype("int64"), unit="ms", errors="coerce",
        )
        # end times past the datetime range are left off the axis
        shown = curve[times.notna()]
        times = times[times.notna()]
        if len(shown) < len(curve):
            log.warning("Skipped %d round trips with unplottable end times",
                        len(curve) - len(shown))
        ax.step(times, shown["cumulative_pnl"], where="post",
                linewidth=1.0, color="#4682b4", label="Cumulative PnL")
        ax.fill_between(times, shown["cumulative_pnl"],
                        shown["cumulative_pnl"] + shown["drawdown"],
                        step="post", color="#e74c3c", alpha=0.25, label="Drawdown")
        ax.axhline(0.0, color="grey", linestyle=":", linewidth=1)
        ax.set_title(f"Cumulative PnL  ({len(curve):,} round trips)")
        ax.legend(fontsize=8)
    ax.set_xlabel("Round-trip end time")
    ax.set_ylabel("Realized PnL")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(out_path, dpi=100)
    plt.close(fig)

    log.info("Saved cumulative-PnL plot → %s", out_path)
