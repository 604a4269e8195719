"""Run grid source reads off the owning thread.

A dispatcher takes a blocking job plus two callbacks and guarantees that
exactly one of the callbacks runs later, on the thread that submitted the
job.  The viewport controller relies on that: all of its state is mutated
from a single thread, and completions arrive as ordinary queued events.
"""

from __future__ import annotations

import itertools
import logging
import time
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

from PySide6.QtCore import QCoreApplication, QObject, QRunnable, QThreadPool, Signal, Slot

from ...errors import DispatchError

_LOGGER = logging.getLogger(__name__)

SuccessCallback = Callable[[Any], None]
FailureCallback = Callable[[BaseException], None]


class FetchDispatcher(Protocol):
    """Minimal protocol for the asynchronous boundary."""

    def submit(
        self,
        job: Callable[[], Any],
        on_success: SuccessCallback,
        on_failure: FailureCallback,
    ) -> None: ...


class _FetchSignals(QObject):
    """Signals exposed by :class:`_FetchWorker`.

    Created on the submitting thread and kept separate from the runnable so
    the dispatcher's slots run there, whichever pool thread ran the job.
    """

    succeeded = Signal(int, object)
    failed = Signal(int, object)


class _FetchWorker(QRunnable):
    def __init__(self, ticket: int, job: Callable[[], Any], signals: _FetchSignals) -> None:
        super().__init__()
        self.setAutoDelete(True)
        self._ticket = ticket
        self._job = job
        self._signals = signals

    def run(self) -> None:  # type: ignore[override]
        try:
            result = self._job()
        except Exception as exc:
            self._signals.failed.emit(self._ticket, exc)
            return
        self._signals.succeeded.emit(self._ticket, result)


class QtFetchDispatcher(QObject):
    """Dispatcher backed by a :class:`QThreadPool`.

    Must be created on the thread that owns the viewport; completions are
    delivered through queued connections into this object.
    """

    def __init__(
        self,
        pool: Optional[QThreadPool] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._pool = pool or QThreadPool.globalInstance()
        self._tickets = itertools.count(1)
        self._inflight: Dict[int, Tuple[_FetchSignals, SuccessCallback, FailureCallback]] = {}

    @property
    def pending_count(self) -> int:
        return len(self._inflight)

    def submit(
        self,
        job: Callable[[], Any],
        on_success: SuccessCallback,
        on_failure: FailureCallback,
    ) -> None:
        ticket = next(self._tickets)
        signals = _FetchSignals()
        signals.succeeded.connect(self._handle_succeeded)
        signals.failed.connect(self._handle_failed)
        self._inflight[ticket] = (signals, on_success, on_failure)
        self._pool.start(_FetchWorker(ticket, job, signals))

    def wait_for_idle(self, timeout_ms: int = 5000) -> bool:
        """Pump the event loop until every submitted job has completed.

        Callbacks may submit further jobs; those are waited for as well.
        Returns ``False`` if work is still pending after *timeout_ms*.
        """
        deadline = time.monotonic() + timeout_ms / 1000.0
        while self._inflight:
            remaining_ms = int((deadline - time.monotonic()) * 1000)
            if remaining_ms <= 0:
                return False
            self._pool.waitForDone(min(remaining_ms, 50))
            QCoreApplication.processEvents()
        return True

    @Slot(int, object)
    def _handle_succeeded(self, ticket: int, result: object) -> None:
        entry = self._inflight.pop(ticket, None)
        if entry is None:
            return
        _signals, on_success, _on_failure = entry
        on_success(result)

    @Slot(int, object)
    def _handle_failed(self, ticket: int, error: object) -> None:
        entry = self._inflight.pop(ticket, None)
        if entry is None:
            return
        _signals, _on_success, on_failure = entry
        if not isinstance(error, BaseException):
            error = DispatchError(str(error))
        on_failure(error)


__all__ = ["FetchDispatcher", "QtFetchDispatcher"]
