"""Replay package — fill normalisation and round-trip reconstruction."""

from .round_trips import aggregate_round_trips, group_by_instrument
from .validation import normalize_fills

__all__ = ["aggregate_round_trips", "group_by_instrument", "normalize_fills"]
