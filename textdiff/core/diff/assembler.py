"""
Diff assembler.

Walks an edit script alongside the two original token sequences and
emits one DiffEntry per action.
"""

from __future__ import annotations

from typing import Sequence

from textdiff.core.models import Action, DiffEntry, DiffKind, DiffMode


def assemble(
    actions: Sequence[Action],
    original_a: Sequence[str],
    original_b: Sequence[str],
    mode: DiffMode
) -> list[DiffEntry]:
    """
    Build diff entries from an edit script.

    In line mode ``left_line`` / ``right_line`` come from two running
    counters that start at 1 and advance only when a token is consumed
    from that side. Word mode leaves both fields as None.
    """
    numbered = mode == DiffMode.LINES
    entries: list[DiffEntry] = []

    i = j = 0
    left_line = right_line = 1

    for action in actions:
        if action == Action.MATCH:
            entries.append(DiffEntry(
                kind=DiffKind.UNCHANGED,
                content=original_a[i],
                left_line=left_line if numbered else None,
                right_line=right_line if numbered else None,
            ))
            i += 1
            j += 1
            left_line += 1
            right_line += 1
        elif action == Action.DELETE:
            entries.append(DiffEntry(
                kind=DiffKind.REMOVED,
                content=original_a[i],
                left_line=left_line if numbered else None,
            ))
            i += 1
            left_line += 1
        else:
            entries.append(DiffEntry(
                kind=DiffKind.ADDED,
                content=original_b[j],
                right_line=right_line if numbered else None,
            ))
            j += 1
            right_line += 1

    return entries
