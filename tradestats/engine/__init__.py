"""Batch report runner."""

from .runner import find_snapshot_files, load_fill_snapshot, run_report

__all__ = ["find_snapshot_files", "load_fill_snapshot", "run_report"]
