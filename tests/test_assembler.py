"""Tests for building diff entries from an edit script."""

from textdiff.core.diff.assembler import assemble
from textdiff.core.models import Action, DiffEntry, DiffKind, DiffMode

M, D, I = Action.MATCH, Action.DELETE, Action.INSERT


def test_line_entries_carry_side_numbers():
    entries = assemble([M, D, I], ["a", "b"], ["a", "c"], DiffMode.LINES)

    assert entries == [
        DiffEntry(DiffKind.UNCHANGED, "a", left_line=1, right_line=1),
        DiffEntry(DiffKind.REMOVED, "b", left_line=2),
        DiffEntry(DiffKind.ADDED, "c", right_line=2),
    ]


def test_line_counters_advance_independently():
    entries = assemble([I, I, M, D], ["x", "y"], ["p", "q", "x"], DiffMode.LINES)

    assert [(e.kind, e.content, e.left_line, e.right_line) for e in entries] == [
        (DiffKind.ADDED, "p", None, 1),
        (DiffKind.ADDED, "q", None, 2),
        (DiffKind.UNCHANGED, "x", 1, 3),
        (DiffKind.REMOVED, "y", 2, None),
    ]


def test_unchanged_content_comes_from_left():
    entries = assemble([M], [" Hello"], ["hello"], DiffMode.LINES)
    assert entries[0].content == " Hello"


def test_word_entries_have_no_line_numbers():
    entries = assemble([M, D, I], ["the", "cat"], ["the", "dog"], DiffMode.WORDS)

    assert [e.content for e in entries] == ["the", "cat", "dog"]
    assert all(e.left_line is None and e.right_line is None for e in entries)


def test_empty_script():
    assert assemble([], [], [], DiffMode.LINES) == []


def test_entry_helpers():
    removed = DiffEntry(DiffKind.REMOVED, "old", left_line=4)
    unchanged = DiffEntry(DiffKind.UNCHANGED, "same", left_line=1, right_line=1)

    assert removed.prefix == "-"
    assert removed.is_change
    assert unchanged.prefix == " "
    assert not unchanged.is_change
    assert DiffEntry(DiffKind.ADDED, "new").prefix == "+"
    assert removed.to_dict() == {
        "kind": "removed",
        "content": "old",
        "left_line": 4,
        "right_line": None,
    }
