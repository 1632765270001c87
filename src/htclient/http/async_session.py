"""Event-loop engine session backed by aiohttp."""

from __future__ import annotations

import asyncio
import logging
import threading
from concurrent.futures import CancelledError
from types import TracebackType
from typing import Optional

import aiohttp

from .protocols import NO_STATUS, EngineRequest, ResponseCallback
from .session import DEFAULT_USER_AGENT
from .task import DataTask

logger = logging.getLogger(__name__)


class AiohttpSession:
    """
    Engine session that runs aiohttp on a private event loop thread.

    Callers stay synchronous: submit() schedules the request on the loop
    and returns at once. Completion callbacks run on the loop thread, so
    they should hand heavy work off rather than block.

    Example:
        with AiohttpSession(default_timeout=10) as session:
            task = session.submit(EngineRequest(url="https://example.com"), on_complete)
            task.wait()
    """

    def __init__(
        self,
        max_connections: int = 10,
        default_timeout: float = 60.0,
        user_agent: Optional[str] = None,
        proxy: Optional[str] = None,
    ) -> None:
        """
        Initialize the session.

        The event loop thread and the aiohttp.ClientSession are created
        lazily on the first submit().

        Args:
            max_connections: Total connection limit for the connector
            default_timeout: Timeout in seconds for requests without their own
            user_agent: Custom User-Agent string
            proxy: Proxy URL (http:// only, as supported by aiohttp)
        """
        self.max_connections = max_connections
        self.default_timeout = default_timeout
        self._user_agent = user_agent or DEFAULT_USER_AGENT
        self._proxy = proxy

        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._client: Optional[aiohttp.ClientSession] = None
        self._closing: Optional[asyncio.Task[None]] = None
        self._lock = threading.Lock()
        self._closed = False

    def _ensure_loop(self) -> asyncio.AbstractEventLoop:
        """Get or start the background event loop."""
        with self._lock:
            if self._closed:
                raise RuntimeError("Session is closed.")
            if self._loop is None:
                loop = asyncio.new_event_loop()
                thread = threading.Thread(
                    target=self._run_loop,
                    args=(loop,),
                    name="htclient-loop",
                    daemon=True,
                )
                thread.start()
                self._loop, self._thread = loop, thread
                logger.debug("Started aiohttp event loop thread")
            return self._loop

    @staticmethod
    def _run_loop(loop: asyncio.AbstractEventLoop) -> None:
        asyncio.set_event_loop(loop)
        try:
            loop.run_forever()
        finally:
            loop.close()

    async def _get_client(self) -> aiohttp.ClientSession:
        # Only touched from the loop thread
        if self._client is None:
            connector = aiohttp.TCPConnector(limit=self.max_connections)
            self._client = aiohttp.ClientSession(
                connector=connector,
                headers={"User-Agent": self._user_agent},
            )
        return self._client

    def submit(self, request: EngineRequest, completion: ResponseCallback) -> DataTask:
        """
        Schedule a request on the event loop.

        Args:
            request: The request to perform
            completion: Called exactly once with (body, status_code, error)

        Returns:
            DataTask handle; cancel() interrupts the request while in flight

        Raises:
            RuntimeError: If the session has been closed
        """
        loop = self._ensure_loop()
        task = DataTask(request, completion)
        future = asyncio.run_coroutine_threadsafe(self._run(task), loop)
        task._bind(future)
        return task

    async def _run(self, task: DataTask) -> None:
        request = task.request
        timeout = request.timeout if request.timeout is not None else self.default_timeout
        try:
            client = await self._get_client()
            async with client.request(
                request.method,
                request.url,
                headers=request.headers or None,
                data=request.body,
                proxy=self._proxy,
                timeout=aiohttp.ClientTimeout(total=timeout),
            ) as response:
                body = await response.read()
                status = response.status
        except asyncio.CancelledError:
            task._finish(None, NO_STATUS, CancelledError())
            raise
        except Exception as e:
            task._finish(None, NO_STATUS, e)
            return
        task._finish(body, status, None)

    async def _shutdown(self) -> None:
        current = asyncio.current_task()
        pending = [t for t in asyncio.all_tasks() if t is not current]
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def _shutdown_and_stop(self) -> None:
        try:
            await self._shutdown()
        finally:
            asyncio.get_running_loop().stop()
            logger.debug("aiohttp session closed")

    def close(self) -> None:
        """
        Wait for running requests, close the client, and stop the loop thread.

        Called from a completion handler (which runs on the loop thread),
        close() only schedules the shutdown and returns; the loop thread
        exits once the remaining requests have finished.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            loop, thread = self._loop, self._thread
            self._loop, self._thread = None, None

        if loop is None or thread is None:
            return

        if threading.current_thread() is thread:
            self._closing = loop.create_task(self._shutdown_and_stop())
            return

        asyncio.run_coroutine_threadsafe(self._shutdown(), loop).result()
        loop.call_soon_threadsafe(loop.stop)
        thread.join()
        logger.debug("aiohttp session closed")

    def __enter__(self) -> AiohttpSession:
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
