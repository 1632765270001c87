"""Task handle for in-flight requests."""

from __future__ import annotations

import itertools
import logging
import threading
from concurrent.futures import CancelledError, Future
from enum import Enum
from typing import Any, Optional

from .protocols import NO_STATUS, EngineRequest, ResponseCallback

logger = logging.getLogger(__name__)


class TaskState(str, Enum):
    """Lifecycle states of a DataTask."""

    RUNNING = "running"
    CANCELING = "canceling"
    COMPLETED = "completed"


class DataTask:
    """
    Handle for one in-flight request.

    Sessions create the task, start the work, then bind the engine future
    with _bind(). Whatever happens to the request (response, transport
    error, cancellation), the completion callback runs exactly once.

    Example:
        task = session.submit(request, on_complete)
        if not task.wait(timeout=5):
            task.cancel()
    """

    _ids = itertools.count(1)

    def __init__(self, request: EngineRequest, completion: ResponseCallback) -> None:
        self.task_id = next(self._ids)
        self.request = request
        self.status_code: int = NO_STATUS
        self.error: Optional[BaseException] = None

        self._completion = completion
        self._future: Optional[Future[Any]] = None
        self._lock = threading.Lock()
        self._completed = False
        self._cancel_requested = False
        self._finished = threading.Event()

    def __repr__(self) -> str:
        return f"<DataTask #{self.task_id} {self.request.method} {self.request.url} {self.state.value}>"

    @property
    def state(self) -> TaskState:
        """Current lifecycle state."""
        with self._lock:
            if self._completed:
                return TaskState.COMPLETED
            if self._cancel_requested:
                return TaskState.CANCELING
            return TaskState.RUNNING

    def _bind(self, future: Future[Any]) -> None:
        """Attach the engine future backing this task."""
        with self._lock:
            self._future = future
        future.add_done_callback(self._on_future_done)

    def _on_future_done(self, future: Future[Any]) -> None:
        # Futures cancelled before their work started never reach _finish otherwise
        if future.cancelled():
            self._finish(None, NO_STATUS, CancelledError())

    def _finish(self, body: Optional[bytes], status_code: int, error: Optional[BaseException]) -> None:
        """Record the outcome and invoke the completion callback once."""
        with self._lock:
            if self._completed:
                return
            self._completed = True
            self.status_code = status_code
            self.error = error

        if error is not None:
            logger.debug(f"Task #{self.task_id} failed for {self.request.url}: {error!r}")
        else:
            logger.debug(f"Task #{self.task_id} got {status_code} for {self.request.url}")

        try:
            self._completion(body, status_code, error)
        except Exception:
            logger.exception(f"Completion handler for task #{self.task_id} raised")
        finally:
            self._finished.set()

    def cancel(self) -> bool:
        """
        Ask the engine to cancel the request.

        Returns:
            True if the engine accepted the cancellation. A request the
            engine cannot interrupt runs to completion as usual.
        """
        with self._lock:
            if self._completed or self._future is None:
                return False
            self._cancel_requested = True
            future = self._future
        # Outside the lock: a successful cancel runs _finish via the done callback
        return future.cancel()

    def done(self) -> bool:
        """Whether the completion callback has run."""
        return self._finished.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the completion callback has run.

        Args:
            timeout: Maximum seconds to wait (None = forever)

        Returns:
            True if the task completed within the timeout
        """
        return self._finished.wait(timeout)
