"""
Base worker classes for background diff computation.

Provides common functionality for all workers:
- Job identification
- Cancellation (the result of a cancelled job is discarded)
- Error handling
- State management
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Any, Optional

from PyQt6.QtCore import Qt, QObject, QThread, pyqtSignal, pyqtSlot, QMutex, QMutexLocker


class WorkerState(Enum):
    """State of a worker."""
    PENDING = auto()
    RUNNING = auto()
    CANCELLING = auto()
    CANCELLED = auto()
    COMPLETED = auto()
    FAILED = auto()


class WorkerSignals(QObject):
    """
    Signals for worker communication.

    Every payload starts with the job id so that a receiver juggling
    several jobs can tell stale results from current ones.
    """
    # Status message: (job_id, message)
    status = pyqtSignal(int, str)

    # Worker started: (job_id)
    started = pyqtSignal(int)

    # Worker finished successfully: (job_id, result)
    finished = pyqtSignal(int, object)

    # Worker failed: (job_id, error_type, message)
    error = pyqtSignal(int, str, str)

    # Worker was cancelled: (job_id)
    cancelled = pyqtSignal(int)

    # State changed: (job_id, WorkerState)
    state_changed = pyqtSignal(int, object)


class CancelledException(Exception):
    """Raised when a worker notices it was cancelled."""
    pass


class WorkerMeta(type(QObject), type(ABC)):
    pass


class BaseWorker(QObject, ABC, metaclass=WorkerMeta):
    """
    Base class for workers that run in a QThread.

    Subclass and implement ``do_work``.

    Usage:
        worker = MyWorker(args)
        thread = WorkerThread(worker)
        worker.signals.finished.connect(on_result)
        thread.start()
    """

    def __init__(self, job_id: int = 0, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.job_id = job_id
        self.signals = WorkerSignals()
        self._state = WorkerState.PENDING
        self._cancelled = False
        self._mutex = QMutex()
        self._result: Any = None
        self._error: Optional[tuple[str, str]] = None

    @property
    def state(self) -> WorkerState:
        """Current worker state."""
        with QMutexLocker(self._mutex):
            return self._state

    @state.setter
    def state(self, value: WorkerState) -> None:
        with QMutexLocker(self._mutex):
            self._state = value
        self.signals.state_changed.emit(self.job_id, value)

    @property
    def is_cancelled(self) -> bool:
        """Check if cancellation was requested."""
        with QMutexLocker(self._mutex):
            return self._cancelled

    @property
    def result(self) -> Any:
        """Get the result (after completion)."""
        return self._result

    @property
    def error(self) -> Optional[tuple[str, str]]:
        """Get error info (after failure)."""
        return self._error

    def cancel(self) -> None:
        """Request cancellation."""
        with QMutexLocker(self._mutex):
            self._cancelled = True
            if self._state == WorkerState.RUNNING:
                self._state = WorkerState.CANCELLING
        self.signals.state_changed.emit(self.job_id, WorkerState.CANCELLING)

    @pyqtSlot()
    def run(self) -> None:
        """
        Main worker execution method.

        Subclasses should not override this, override ``do_work`` instead.
        """
        self.state = WorkerState.RUNNING
        self.signals.started.emit(self.job_id)

        try:
            result = self.do_work()
        except CancelledException:
            self._mark_cancelled()
            return
        except Exception as e:
            logging.error(f"{type(self).__name__} - Job {self.job_id} failed: {e}")
            self._error = (type(e).__name__, str(e))
            self.state = WorkerState.FAILED
            self.signals.error.emit(self.job_id, type(e).__name__, str(e))
            return

        if self.is_cancelled:
            self._mark_cancelled()
        else:
            self._result = result
            self.state = WorkerState.COMPLETED
            self.signals.finished.emit(self.job_id, result)

    def _mark_cancelled(self) -> None:
        logging.debug(f"{type(self).__name__} - Job {self.job_id} cancelled, result discarded")
        self.state = WorkerState.CANCELLED
        self.signals.cancelled.emit(self.job_id)

    @abstractmethod
    def do_work(self) -> Any:
        """
        Perform the actual work.

        Should call ``check_cancelled`` between expensive steps.

        Returns:
            The result of the work.
        """
        pass

    def report_status(self, message: str) -> None:
        """Report a status message."""
        self.signals.status.emit(self.job_id, message)

    def check_cancelled(self) -> None:
        """Raise CancelledException if cancellation was requested."""
        if self.is_cancelled:
            raise CancelledException("Operation cancelled")


class WorkerThread(QThread):
    """
    Convenience class for running a worker in its own thread.

    Usage:
        thread = WorkerThread(my_worker)
        thread.start()
        thread.wait()
    """

    def __init__(
        self,
        worker: BaseWorker,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.worker = worker
        self.worker.moveToThread(self)

        # quit() is thread-safe; a direct connection ends the thread even
        # when the owning thread is not running an event loop
        direct = Qt.ConnectionType.DirectConnection
        self.started.connect(self.worker.run)
        self.worker.signals.finished.connect(self.quit, direct)
        self.worker.signals.error.connect(self.quit, direct)
        self.worker.signals.cancelled.connect(self.quit, direct)

    def cancel(self) -> None:
        """Cancel the worker."""
        self.worker.cancel()

    @property
    def result(self) -> Any:
        """Get the worker's result."""
        return self.worker.result

    @property
    def error(self) -> Optional[tuple[str, str]]:
        """Get error info if failed."""
        return self.worker.error
