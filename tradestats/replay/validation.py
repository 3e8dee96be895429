"""Lenient normalisation of raw fill snapshots.

Unlike bar data, fill snapshots are never rejected: fields are coerced by
:meth:`FillRecord.from_mapping` and entries that are not records at all are
skipped.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from tradestats.execution.models import FillRecord

log = logging.getLogger(__name__)


def normalize_fills(raw: Iterable[Any] | None) -> list[FillRecord]:
    """Turn a raw fill sequence into ``FillRecord`` objects, input order kept.

    ``FillRecord`` instances pass through, mappings are coerced field by
    field, and anything else (``None``, numbers, strings, lists) is dropped.
    """
    if raw is None:
        return []

    fills: list[FillRecord] = []
    skipped = 0
    for entry in raw:
        if isinstance(entry, FillRecord):
            fills.append(entry)
        elif isinstance(entry, Mapping):
            fills.append(FillRecord.from_mapping(entry))
        else:
            skipped += 1

    if skipped:
        log.debug("Skipped %d malformed fill entries", skipped)
    return fills
