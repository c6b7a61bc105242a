"""
Text diff engine.

Provides token-level comparison with support for:
- Line and word granularity
- Case-insensitive comparison
- Whitespace-insensitive comparison (line mode)
- Stable 1-based line numbering
- An optional ceiling on the comparison table size

The engine is pure: it holds only its options and never caches results,
so one instance may be shared between threads.
"""

from __future__ import annotations

import logging
import time
from typing import Optional, Sequence

from textdiff.core.diff.assembler import assemble
from textdiff.core.diff.lcs import LcsTable, compute_actions
from textdiff.core.diff.statistics import aggregate
from textdiff.core.diff.tokenizer import tokenize
from textdiff.core.models import (
    DiffMode,
    DiffOptions,
    DiffOutcome,
    DiffTooLargeError,
    Token,
)


class TextDiffEngine:
    """
    Engine for comparing two texts.

    ``max_cells`` bounds the size of the LCS table; ``None`` leaves the
    comparison unbounded.
    """

    def __init__(
        self,
        options: Optional[DiffOptions] = None,
        max_cells: Optional[int] = None
    ):
        self.options = options or DiffOptions()
        self.max_cells = max_cells

    def compare(self, text_a: str, text_b: str) -> DiffOutcome:
        """
        Compare two texts.

        Args:
            text_a: Left/original text
            text_b: Right/modified text

        Returns:
            DiffOutcome with the ordered entries and their statistics

        Raises:
            DiffTooLargeError: If the inputs exceed ``max_cells``
        """
        tokens_a = tokenize(text_a, self.options)
        tokens_b = tokenize(text_b, self.options)

        if self.options.mode == DiffMode.LINES:
            if not text_a:
                tokens_a = self._drop_unmatched_empty(tokens_a, tokens_b)
            elif not text_b:
                tokens_b = self._drop_unmatched_empty(tokens_b, tokens_a)

        return self.compare_tokens(tokens_a, tokens_b)

    @staticmethod
    def _drop_unmatched_empty(
        empty_side: list[Token],
        other_side: list[Token]
    ) -> list[Token]:
        """
        Drop the lone ``""`` line of an empty text when nothing on the other
        side compares equal to it, so that text is a pure insertion/deletion.
        """
        key = empty_side[0].key
        if any(token.key == key for token in other_side):
            return empty_side
        return []

    def compare_tokens(
        self,
        tokens_a: Sequence[Token],
        tokens_b: Sequence[Token]
    ) -> DiffOutcome:
        """Compare two already tokenized sequences."""
        self.check_size(len(tokens_a), len(tokens_b))

        started = time.perf_counter()
        actions = compute_actions(
            [token.key for token in tokens_a],
            [token.key for token in tokens_b]
        )
        entries = assemble(
            actions,
            [token.text for token in tokens_a],
            [token.text for token in tokens_b],
            self.options.mode
        )
        stats = aggregate(entries)

        logging.debug(
            f"TextDiffEngine - Compared {len(tokens_a)} x {len(tokens_b)} "
            f"{self.options.mode.value} in {time.perf_counter() - started:.4f}s ({stats})"
        )
        return DiffOutcome(entries, stats)

    def swap(self, text_a: str, text_b: str) -> DiffOutcome:
        """Compare with the two sides exchanged."""
        return self.compare(text_b, text_a)

    def check_size(self, left_count: int, right_count: int) -> None:
        """Raise DiffTooLargeError if the table would exceed ``max_cells``."""
        if self.max_cells is None:
            return
        if LcsTable.cell_count(left_count, right_count) > self.max_cells:
            logging.warning(
                f"TextDiffEngine - Refusing {left_count} x {right_count} token comparison "
                f"(limit {self.max_cells} cells)"
            )
            raise DiffTooLargeError(left_count, right_count, self.max_cells)


def diff(
    text_a: str,
    text_b: str,
    options: Optional[DiffOptions] = None,
    max_cells: Optional[int] = None
) -> DiffOutcome:
    """Compare two texts and return ``(entries, stats)``."""
    return TextDiffEngine(options, max_cells).compare(text_a, text_b)
