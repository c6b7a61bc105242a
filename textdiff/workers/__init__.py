"""
Background workers for non-blocking diff computation.

Provides QThread-based workers for:
- Comparing in-memory text
- Comparing text files
- Debounced recomputation for interactive callers

All workers use Qt signals for thread-safe communication
with the calling thread.
"""

from textdiff.workers.base_worker import (
    BaseWorker,
    CancelledException,
    WorkerSignals,
    WorkerState,
    WorkerThread,
)
from textdiff.workers.diff_worker import (
    DebouncedDiffScheduler,
    FileDiffWorker,
    TextDiffWorker,
)

__all__ = [
    # Base
    'BaseWorker',
    'CancelledException',
    'WorkerSignals',
    'WorkerState',
    'WorkerThread',
    # Diff
    'TextDiffWorker',
    'FileDiffWorker',
    'DebouncedDiffScheduler',
]
