"""Summary statistics over assembled diff entries."""

from __future__ import annotations

from typing import Iterable

from textdiff.core.models import DiffEntry, DiffKind, DiffStats


def aggregate(entries: Iterable[DiffEntry]) -> DiffStats:
    """Count entries by kind. ``total`` includes unchanged entries."""
    stats = DiffStats()

    for entry in entries:
        stats.total += 1
        if entry.kind == DiffKind.ADDED:
            stats.additions += 1
        elif entry.kind == DiffKind.REMOVED:
            stats.deletions += 1

    return stats
