"""
Tokenizer for the text diff engine.

Splits raw text into comparable units and pairs each unit with the
comparison key used by the LCS engine.

Line mode splits on ``\\n`` only. A Windows ``\\r\\n`` ending therefore
leaves a trailing ``\\r`` on the line, and that ``\\r`` is part of the
comparison key unless ``ignore_whitespace`` is set.
"""

from __future__ import annotations

import re
from typing import Optional

from textdiff.core.models import DiffMode, DiffOptions, Token


WORD_PATTERN = re.compile(r'\S+|\s+')


def split_tokens(text: str, mode: DiffMode) -> list[str]:
    """
    Split text into its original token strings.

    Line mode always yields at least one token (``""`` becomes ``[""]``).
    Word mode yields alternating runs of non-whitespace and whitespace, so
    joining the tokens reproduces the text; ``""`` yields no tokens.
    """
    if mode == DiffMode.LINES:
        return text.split('\n')
    return WORD_PATTERN.findall(text)


def normalize(token: str, options: DiffOptions) -> str:
    """Get the comparison key for a token under the given options."""
    return options.normalize(token)


def tokenize(text: str, options: Optional[DiffOptions] = None) -> list[Token]:
    """Split text and build a Token (original text + key) for each unit."""
    options = options or DiffOptions()
    return [
        Token(text=piece, key=options.normalize(piece))
        for piece in split_tokens(text, options.mode)
    ]
