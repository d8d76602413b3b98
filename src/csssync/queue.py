"""ChangeQueue: one worker thread draining change events in arrival order."""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Callable
from concurrent.futures import Future
from typing import Any

from csssync.model.result import PatchResult

logger = logging.getLogger(__name__)

_STOP = object()


class ChangeQueue:
    """FIFO of pending work executed strictly one item at a time.

    Every read-modify-write of a stylesheet goes through here, so two
    changes to the same file can never interleave. ``delay`` is a pause
    between items to keep a burst of edits from hammering the disk; it
    plays no part in ordering.
    """

    def __init__(self, apply: Callable[[Any], PatchResult], delay: float = 0.1) -> None:
        self._apply = apply
        self._delay = delay
        self._queue: queue.Queue[Any] = queue.Queue()
        self._worker: threading.Thread | None = None
        self._lock = threading.Lock()
        self._stopping = False

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    @property
    def running(self) -> bool:
        return self._worker is not None and self._worker.is_alive()

    def start(self) -> None:
        with self._lock:
            if self.running:
                return
            self._worker = threading.Thread(target=self._drain, name="csssync-queue", daemon=True)
            self._worker.start()

    def stop(self, timeout: float | None = None) -> None:
        """Finish the queued items, then stop the worker.

        New work is refused until the worker has exited, even when *timeout*
        runs out first.
        """
        with self._lock:
            worker = self._worker
            if worker is None:
                return
            if not self._stopping:
                self._stopping = True
                self._queue.put(_STOP)
        worker.join(timeout)

    def submit(self, event: Any) -> Future[PatchResult]:
        """Queue a change event; the future resolves to its PatchResult."""
        return self.submit_task(self._apply, event)

    def submit_task(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future[Any]:
        """Queue arbitrary work that must not overlap with change application."""
        future: Future[Any] = Future()
        with self._lock:
            if self._stopping:
                raise RuntimeError("Change queue is stopping")
            self._queue.put((future, fn, args, kwargs))
        self.start()
        return future

    def apply(self, event: Any, timeout: float | None = None) -> PatchResult:
        """Queue *event* and wait for its result."""
        return self.submit(event).result(timeout=timeout)

    def _drain(self) -> None:
        while True:
            item = self._queue.get()
            if item is _STOP:
                with self._lock:
                    self._worker = None
                    self._stopping = False
                return
            future, fn, args, kwargs = item
            if future.set_running_or_notify_cancel():
                try:
                    future.set_result(fn(*args, **kwargs))
                except Exception as exc:
                    logger.exception("Queued task failed")
                    future.set_exception(exc)
            if self._delay and not self._queue.empty():
                time.sleep(self._delay)
