"""Reporting package — PNG plots for run artifacts."""

from .plots import plot_cumulative_pnl

__all__ = ["plot_cumulative_pnl"]
