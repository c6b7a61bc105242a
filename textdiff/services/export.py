"""
Export of diff outcomes as plain text or JSON.

Plain text in line mode writes one entry per line, prefixed with
``"+ "``, ``"- "`` or ``"  "``. Word mode output keeps the text flowing
and marks changes inline as ``[-removed-]`` and ``{+added+}``.
"""

from __future__ import annotations

import json

from textdiff.core.models import DiffEntry, DiffKind, DiffMode, DiffOutcome
from textdiff.services.settings import OutputFormat


def format_line(entry: DiffEntry, show_line_numbers: bool = False) -> str:
    """Format a single line-mode entry."""
    line = f"{entry.prefix} {entry.content}"
    if not show_line_numbers:
        return line

    left = str(entry.left_line) if entry.left_line is not None else ""
    right = str(entry.right_line) if entry.right_line is not None else ""
    return f"{left:>5} {right:>5} {line}"


def format_words(outcome: DiffOutcome) -> str:
    """Format a word-mode outcome as inline-marked text."""
    parts = []
    for entry in outcome.entries:
        if entry.kind == DiffKind.REMOVED:
            parts.append(f"[-{entry.content}-]")
        elif entry.kind == DiffKind.ADDED:
            parts.append(f"{{+{entry.content}+}}")
        else:
            parts.append(entry.content)
    return "".join(parts)


def format_plain(
    outcome: DiffOutcome,
    mode: DiffMode = DiffMode.LINES,
    show_line_numbers: bool = False,
    show_stats: bool = False
) -> str:
    """Render an outcome as plain text."""
    if mode == DiffMode.WORDS:
        body = format_words(outcome)
    else:
        body = "\n".join(format_line(entry, show_line_numbers) for entry in outcome.entries)

    if show_stats:
        stats = outcome.stats
        summary = (f"{stats.additions} addition(s), {stats.deletions} deletion(s), "
                   f"{stats.total} total")
        return f"{body}\n\n{summary}" if body else summary
    return body


def format_json(outcome: DiffOutcome, mode: DiffMode = DiffMode.LINES) -> str:
    """Render an outcome as a JSON document."""
    data = outcome.to_dict()
    data['mode'] = mode.value
    return json.dumps(data, indent=2, ensure_ascii=False)


def export(
    outcome: DiffOutcome,
    output_format: OutputFormat,
    mode: DiffMode = DiffMode.LINES,
    show_line_numbers: bool = False,
    show_stats: bool = False
) -> str:
    """Render an outcome in the requested format."""
    if output_format == OutputFormat.JSON:
        return format_json(outcome, mode)
    return format_plain(outcome, mode, show_line_numbers, show_stats)
