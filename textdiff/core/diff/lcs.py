"""
Longest common subsequence engine.

Builds the classic O(m*n) dynamic-programming table and backtracks
from the bottom-right corner to recover the edit script.

Backtracking prefers INSERT over DELETE whenever both neighbours hold
the same length, so among equally short scripts the right-side
content surfaces first at every ambiguous point.
"""

from __future__ import annotations

from typing import Hashable, Sequence

from textdiff.core.models import Action


class LcsTable:
    """
    LCS length table stored as one flat row-major list.

    ``table[i, j]`` is the LCS length of ``a[:i]`` and ``b[:j]``.
    """

    def __init__(self, a: Sequence[Hashable], b: Sequence[Hashable]):
        self.rows = len(a) + 1
        self.cols = len(b) + 1
        self._cells = [0] * (self.rows * self.cols)
        self._fill(a, b)

    @staticmethod
    def cell_count(left_count: int, right_count: int) -> int:
        """Number of cells a table for the given sequence lengths needs."""
        return (left_count + 1) * (right_count + 1)

    def _fill(self, a: Sequence[Hashable], b: Sequence[Hashable]) -> None:
        cells = self._cells
        cols = self.cols

        for i in range(1, self.rows):
            row = i * cols
            prev = row - cols
            item = a[i - 1]
            for j in range(1, cols):
                if item == b[j - 1]:
                    cells[row + j] = cells[prev + j - 1] + 1
                else:
                    up = cells[prev + j]
                    left = cells[row + j - 1]
                    cells[row + j] = up if up > left else left

    def __getitem__(self, index: tuple[int, int]) -> int:
        i, j = index
        return self._cells[i * self.cols + j]

    @property
    def length(self) -> int:
        """Length of the longest common subsequence."""
        return self._cells[-1]


def compute_actions(
    keys_a: Sequence[Hashable],
    keys_b: Sequence[Hashable]
) -> list[Action]:
    """
    Compute the edit script turning ``keys_a`` into ``keys_b``.

    Returns actions in forward order. The number of MATCH actions equals
    the LCS length; every element of ``keys_a`` is consumed by exactly one
    MATCH or DELETE and every element of ``keys_b`` by one MATCH or INSERT.
    """
    table = LcsTable(keys_a, keys_b)
    actions: list[Action] = []

    i, j = len(keys_a), len(keys_b)
    while i > 0 or j > 0:
        if i > 0 and j > 0 and keys_a[i - 1] == keys_b[j - 1]:
            actions.append(Action.MATCH)
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or table[i, j - 1] >= table[i - 1, j]):
            actions.append(Action.INSERT)
            j -= 1
        else:
            actions.append(Action.DELETE)
            i -= 1

    actions.reverse()
    return actions
