"""
TextDiff: a sequence-diff engine for comparing two texts.

Computes a minimal edit script between two token sequences (lines or
words) with a longest-common-subsequence table, classifies every token
as unchanged, added or removed, and summarizes the result.
"""

from textdiff.core.diff import TextDiffEngine, diff
from textdiff.core.models import (
    Action,
    DiffEntry,
    DiffKind,
    DiffMode,
    DiffOptions,
    DiffOutcome,
    DiffStats,
    DiffTooLargeError,
    Token,
)

__version__ = "1.0.0"

__all__ = [
    'diff',
    'TextDiffEngine',
    'Action',
    'DiffEntry',
    'DiffKind',
    'DiffMode',
    'DiffOptions',
    'DiffOutcome',
    'DiffStats',
    'DiffTooLargeError',
    'Token',
]
