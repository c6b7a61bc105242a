"""
Workers for running text diffs off the calling thread.

The engine itself has no timeout or cancellation: a cancelled worker
still runs its comparison to completion, then drops the result.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal, pyqtSlot

from textdiff.core.diff.text_diff import TextDiffEngine
from textdiff.core.models import DiffOptions, DiffOutcome
from textdiff.services.file_io import FileIOService
from textdiff.services.settings import ComparisonSettings
from textdiff.workers.base_worker import BaseWorker, WorkerThread


class TextDiffWorker(BaseWorker):
    """
    Worker for comparing text content already in memory.
    """

    def __init__(
        self,
        left_text: str,
        right_text: str,
        options: Optional[DiffOptions] = None,
        max_cells: Optional[int] = None,
        job_id: int = 0,
        parent: Optional[QObject] = None
    ):
        super().__init__(job_id=job_id, parent=parent)
        self.left_text = left_text
        self.right_text = right_text
        self.options = options or DiffOptions()
        self.max_cells = max_cells

    def do_work(self) -> DiffOutcome:
        """Perform text comparison."""
        self.check_cancelled()
        self.report_status("Computing differences...")

        engine = TextDiffEngine(self.options, self.max_cells)
        return engine.compare(self.left_text, self.right_text)


class FileDiffWorker(BaseWorker):
    """
    Worker for comparing two text files.

    Reads both files through FileIOService, then runs the engine.
    """

    def __init__(
        self,
        left_path: str | Path,
        right_path: str | Path,
        options: Optional[DiffOptions] = None,
        max_cells: Optional[int] = None,
        encoding: Optional[str] = None,
        job_id: int = 0,
        parent: Optional[QObject] = None
    ):
        super().__init__(job_id=job_id, parent=parent)
        self.left_path = Path(left_path)
        self.right_path = Path(right_path)
        self.options = options or DiffOptions()
        self.max_cells = max_cells
        self.encoding = encoding

    def do_work(self) -> DiffOutcome:
        """Read both files and compare them."""
        file_io_service = FileIOService()

        self.report_status(f"Reading {self.left_path.name}...")
        left_text = self._read(file_io_service, self.left_path)
        self.check_cancelled()

        self.report_status(f"Reading {self.right_path.name}...")
        right_text = self._read(file_io_service, self.right_path)
        self.check_cancelled()

        self.report_status("Computing differences...")
        engine = TextDiffEngine(self.options, self.max_cells)
        return engine.compare(left_text, right_text)

    def _read(self, file_io_service: FileIOService, path: Path) -> str:
        read_result = file_io_service.read_file(path, encoding=self.encoding)
        if not read_result.success:
            if read_result.is_binary:
                raise IOError(f"File appears to be binary and cannot be compared as text: {path}")
            raise IOError(f"Failed to read {path}: {read_result.error}")
        return read_result.content.content


class DebouncedDiffScheduler(QObject):
    """
    Recomputes a diff for an interactive caller.

    Each ``request`` restarts a single-shot timer; only when the inputs
    have been quiet for ``delay_ms`` does a worker start. Starting a new
    job cancels the previous one, and results are only published for the
    newest job, so a slow stale diff can never overwrite a fresh one.

    With ``threaded=False`` jobs run synchronously in the caller's thread.
    """

    # Newest result: DiffOutcome
    diff_ready = pyqtSignal(object)

    # Newest job failed: (error_type, message)
    diff_failed = pyqtSignal(str, str)

    def __init__(
        self,
        options: Optional[DiffOptions] = None,
        delay_ms: int = 300,
        max_cells: Optional[int] = None,
        threaded: bool = True,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.options = options or DiffOptions()
        self.max_cells = max_cells
        self.threaded = threaded

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(delay_ms)
        self._timer.timeout.connect(self._start_pending)

        self._pending: Optional[tuple[str, str]] = None
        self._generation = 0
        self._active: Optional[TextDiffWorker] = None
        self._threads: list[WorkerThread] = []

    @classmethod
    def from_settings(
        cls,
        settings: ComparisonSettings,
        threaded: bool = True,
        parent: Optional[QObject] = None
    ) -> 'DebouncedDiffScheduler':
        """Create a scheduler using the options, ceiling and delay in ``settings``."""
        return cls(
            settings.to_options(),
            delay_ms=settings.debounce_ms,
            max_cells=settings.max_cells,
            threaded=threaded,
            parent=parent
        )

    @property
    def delay_ms(self) -> int:
        """Quiet period before a request starts a job."""
        return self._timer.interval()

    @property
    def generation(self) -> int:
        """Id of the most recently started job (0 before the first)."""
        return self._generation

    @property
    def is_pending(self) -> bool:
        """Check if a request is waiting for the debounce delay."""
        return self._pending is not None

    def set_options(self, options: DiffOptions) -> None:
        """Use new options for subsequent jobs."""
        self.options = options

    def request(self, left_text: str, right_text: str) -> None:
        """Schedule a diff, replacing any request still waiting."""
        self._pending = (left_text, right_text)
        self._timer.start()

    def flush(self) -> None:
        """Start the waiting request now instead of after the delay."""
        self._timer.stop()
        self._start_pending()

    def cancel(self) -> None:
        """Drop the waiting request and cancel the running job."""
        self._timer.stop()
        self._pending = None
        if self._active is not None:
            self._active.cancel()
            self._active = None

    def shutdown(self, timeout_ms: int = 5000) -> None:
        """Cancel everything and wait for worker threads to exit."""
        self.cancel()
        for thread in self._threads:
            thread.cancel()
            thread.quit()
            thread.wait(timeout_ms)
        self._threads.clear()

    @pyqtSlot()
    def _start_pending(self) -> None:
        if self._pending is None:
            return

        left_text, right_text = self._pending
        self._pending = None

        if self._active is not None:
            self._active.cancel()

        self._generation += 1
        worker = TextDiffWorker(
            left_text,
            right_text,
            self.options,
            self.max_cells,
            job_id=self._generation
        )
        worker.signals.finished.connect(self._on_finished)
        worker.signals.error.connect(self._on_error)
        self._active = worker

        if self.threaded:
            thread = WorkerThread(worker)
            thread.finished.connect(self._reap_threads)
            self._threads.append(thread)
            thread.start()
        else:
            worker.run()

    @pyqtSlot(int, object)
    def _on_finished(self, job_id: int, outcome: DiffOutcome) -> None:
        if job_id != self._generation:
            logging.debug(f"DebouncedDiffScheduler - Dropping stale result of job {job_id}")
            return
        self._active = None
        self.diff_ready.emit(outcome)

    @pyqtSlot(int, str, str)
    def _on_error(self, job_id: int, error_type: str, message: str) -> None:
        if job_id != self._generation:
            return
        self._active = None
        self.diff_failed.emit(error_type, message)

    @pyqtSlot()
    def _reap_threads(self) -> None:
        self._threads = [thread for thread in self._threads if not thread.isFinished()]
