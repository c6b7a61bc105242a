"""
Diff module for text comparison operations.

Provides the stages of the text diff pipeline:
- Tokenizer (lines or word/whitespace runs)
- LCS engine (edit script recovery)
- Assembler (entries with line numbers)
- Statistics aggregation
"""

from textdiff.core.diff.assembler import assemble
from textdiff.core.diff.lcs import LcsTable, compute_actions
from textdiff.core.diff.statistics import aggregate
from textdiff.core.diff.text_diff import TextDiffEngine, diff
from textdiff.core.diff.tokenizer import normalize, split_tokens, tokenize

__all__ = [
    # Pipeline stages
    'split_tokens',
    'normalize',
    'tokenize',
    'LcsTable',
    'compute_actions',
    'assemble',
    'aggregate',
    # Entry points
    'TextDiffEngine',
    'diff',
]
