"""Thread-pool engine session backed by requests."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from types import TracebackType
from typing import Optional

import requests
from requests.adapters import HTTPAdapter

from .protocols import NO_STATUS, EngineRequest, ResponseCallback
from .task import DataTask

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "htclient/1.0"


class RequestsSession:
    """
    Engine session that performs blocking requests on a thread pool.

    Each submitted request runs on a worker thread; the completion callback
    is invoked from that worker thread, never from the caller's.

    Example:
        with RequestsSession(max_workers=4) as session:
            task = session.submit(EngineRequest(url="https://example.com"), on_complete)
            task.wait()
    """

    def __init__(
        self,
        max_workers: int = 4,
        max_connections: int = 10,
        default_timeout: float = 60.0,
        user_agent: Optional[str] = None,
        proxy: Optional[str] = None,
        http: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize the session.

        Args:
            max_workers: Number of worker threads performing requests
            max_connections: Connection pool size per host
            default_timeout: Timeout in seconds for requests without their own
            user_agent: Custom User-Agent string
            proxy: Proxy URL applied to http and https
            http: Pre-built requests.Session to use instead of a new one
        """
        self.max_workers = max_workers
        self.default_timeout = default_timeout

        if http is None:
            http = requests.Session()
            adapter = HTTPAdapter(pool_connections=max_connections, pool_maxsize=max_connections)
            http.mount("http://", adapter)
            http.mount("https://", adapter)
            http.headers["User-Agent"] = user_agent or DEFAULT_USER_AGENT
        if proxy:
            http.proxies.update({"http": proxy, "https": proxy})
        self._http = http

        self._executor: Optional[ThreadPoolExecutor] = None
        self._executor_lock = threading.Lock()
        self._worker = threading.local()
        self._closed = False

    @property
    def executor(self) -> ThreadPoolExecutor:
        """Get or create the thread pool executor."""
        with self._executor_lock:
            if self._closed:
                raise RuntimeError("Session is closed.")
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.max_workers,
                    thread_name_prefix="htclient-io-",
                )
            return self._executor

    def submit(self, request: EngineRequest, completion: ResponseCallback) -> DataTask:
        """
        Start a request on the worker pool.

        Args:
            request: The request to perform
            completion: Called exactly once with (body, status_code, error)

        Returns:
            DataTask handle; cancellation only succeeds before a worker picks it up

        Raises:
            RuntimeError: If the session has been closed
        """
        task = DataTask(request, completion)
        future = self.executor.submit(self._run, task)
        task._bind(future)
        return task

    def _run(self, task: DataTask) -> None:
        self._worker.active = True
        try:
            self._perform(task)
        finally:
            self._worker.active = False

    def _perform(self, task: DataTask) -> None:
        request = task.request
        try:
            response = self._http.request(
                request.method,
                request.url,
                headers=request.headers or None,
                data=request.body,
                timeout=request.timeout if request.timeout is not None else self.default_timeout,
            )
        except Exception as e:
            task._finish(None, NO_STATUS, e)
            return
        task._finish(response.content, response.status_code, None)

    def close(self) -> None:
        """
        Wait for running requests, then release the pool and connections.

        Called from a completion handler, close() returns at once and the
        shutdown finishes on a separate thread, since a worker cannot wait
        for its own pool.
        """
        with self._executor_lock:
            self._closed = True
            executor, self._executor = self._executor, None

        if getattr(self._worker, "active", False):
            threading.Thread(
                target=self._shutdown,
                args=(executor,),
                name="htclient-close",
                daemon=True,
            ).start()
            return

        self._shutdown(executor)

    def _shutdown(self, executor: Optional[ThreadPoolExecutor]) -> None:
        try:
            if executor is not None:
                executor.shutdown(wait=True)
        finally:
            self._http.close()
            logger.debug("Requests session closed")

    def __enter__(self) -> RequestsSession:
        """Enter sync context."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit sync context and close the session."""
        self.close()
