"""
Core data models for the text diff engine.

This module defines the data structures shared by every stage:
- Comparison options and modes
- Tokens and edit-script actions
- Diff entries, statistics and the combined outcome
- Error models

All models are:
- UI-agnostic (rendering is left to the caller)
- Created fresh per invocation, never cached or mutated afterwards
- Serializable through ``to_dict`` for export
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import NamedTuple, Optional


# =============================================================================
# Enumerations
# =============================================================================

class DiffMode(Enum):
    """Granularity of the comparison."""
    LINES = "lines"     # One token per line
    WORDS = "words"     # Alternating runs of non-whitespace / whitespace

    @classmethod
    def from_string(cls, value: str) -> 'DiffMode':
        """Create from a value ("lines") or member name ("LINES")."""
        for mode in cls:
            if mode.value == value.lower():
                return mode
        try:
            return cls[value.upper()]
        except KeyError:
            raise ValueError(f"Unknown diff mode: {value!r}") from None


class DiffKind(Enum):
    """Classification of a single diff entry."""
    UNCHANGED = auto()  # Token exists on both sides
    ADDED = auto()      # Token exists only on the right side
    REMOVED = auto()    # Token exists only on the left side
    # The host UI type also names a "modified" kind, but no code path ever
    # produces one: a changed line is always a REMOVED + ADDED pair.


class Action(Enum):
    """One step of the edit script recovered from the LCS table."""
    MATCH = auto()
    DELETE = auto()
    INSERT = auto()


# =============================================================================
# Options
# =============================================================================

@dataclass(frozen=True)
class DiffOptions:
    """Options controlling how tokens are compared."""
    ignore_case: bool = False
    ignore_whitespace: bool = False
    mode: DiffMode = DiffMode.LINES

    def normalize(self, token: str) -> str:
        """
        Build the comparison key for a token.

        Whitespace trimming applies in line mode only. The original token
        text is never modified.
        """
        key = token

        if self.ignore_whitespace and self.mode == DiffMode.LINES:
            key = key.strip()

        if self.ignore_case:
            key = key.lower()

        return key


# =============================================================================
# Diff Models
# =============================================================================

@dataclass(frozen=True)
class Token:
    """A comparable unit: the original text plus its comparison key."""
    text: str
    key: str


@dataclass(frozen=True)
class DiffEntry:
    """
    A single element of a diff result.

    Line numbers are 1-based and only populated in line mode, and only
    for the side(s) the entry exists on.
    """
    kind: DiffKind
    content: str
    left_line: Optional[int] = None
    right_line: Optional[int] = None

    @property
    def is_change(self) -> bool:
        """Check if this entry is an addition or removal."""
        return self.kind != DiffKind.UNCHANGED

    @property
    def prefix(self) -> str:
        """Get the diff prefix character."""
        prefixes = {
            DiffKind.UNCHANGED: ' ',
            DiffKind.ADDED: '+',
            DiffKind.REMOVED: '-',
        }
        return prefixes[self.kind]

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'kind': self.kind.name.lower(),
            'content': self.content,
            'left_line': self.left_line,
            'right_line': self.right_line,
        }


@dataclass
class DiffStats:
    """Aggregate counts over a list of diff entries."""
    additions: int = 0
    deletions: int = 0
    total: int = 0
    # Always 0: adjacent removals and additions are never paired.
    modifications: int = 0

    @property
    def unchanged(self) -> int:
        """Number of entries present on both sides."""
        return self.total - self.additions - self.deletions

    @property
    def has_changes(self) -> bool:
        return self.additions > 0 or self.deletions > 0

    def to_dict(self) -> dict:
        return {
            'additions': self.additions,
            'deletions': self.deletions,
            'modifications': self.modifications,
            'total': self.total,
        }

    def __str__(self) -> str:
        return (f"+{self.additions} -{self.deletions} "
                f"~{self.modifications} ={self.unchanged}")


class DiffOutcome(NamedTuple):
    """Complete result of a diff: the ordered entries and their summary."""
    entries: list[DiffEntry]
    stats: DiffStats

    @property
    def is_identical(self) -> bool:
        """Check if both inputs compared equal under the options used."""
        return not self.stats.has_changes

    def to_dict(self) -> dict:
        return {
            'entries': [entry.to_dict() for entry in self.entries],
            'stats': self.stats.to_dict(),
        }


# =============================================================================
# Error Models
# =============================================================================

class DiffTooLargeError(Exception):
    """Raised when the comparison table would exceed the configured ceiling."""

    def __init__(self, left_count: int, right_count: int, limit: int):
        self.left_count = left_count
        self.right_count = right_count
        self.limit = limit
        cells = (left_count + 1) * (right_count + 1)
        super().__init__(
            f"Inputs too large to compare: {left_count} x {right_count} tokens "
            f"needs {cells} table cells, limit is {limit}"
        )
