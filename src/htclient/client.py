"""HTClient facade: session ownership and request dispatch."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from .http.protocols import EngineRequest, ResponseCallback, Session
from .http.request import build_engine_request, build_url_only_request
from .http.shared import shared_session
from .http.task import DataTask
from .models.config import RequestConfig

logger = logging.getLogger(__name__)


def dispatch(
    request: RequestConfig,
    handler: ResponseCallback,
    session: Optional[Session] = None,
    *,
    url_only: bool = False,
) -> DataTask:
    """
    Begin an HTTP request for a request configuration.

    The request starts executing before this returns. The handler is called
    exactly once, later, from an engine thread:

    - response received: (body, status_code, None) for any status code
    - transport failure or cancellation: (None, NO_STATUS, error)

    Args:
        request: The request configuration
        handler: Completion callback taking (body, status_code, error)
        session: Engine session to use (defaults to the shared session)
        url_only: Send a bare GET built from request.url only, ignoring
            method, headers, body, timeout and cellular flag (legacy behavior)

    Returns:
        DataTask handle for the in-flight request

    Raises:
        InvalidURLError: If request.url is malformed. Nothing is sent and
            the handler is not called.
    """
    if url_only:
        engine_request = build_url_only_request(request)
    else:
        engine_request = build_engine_request(request)

    if session is None:
        session = shared_session()

    return _submit(session, engine_request, handler)


def _submit(session: Session, engine_request: EngineRequest, handler: ResponseCallback) -> DataTask:
    task = session.submit(engine_request, handler)
    logger.debug(f"Dispatched task #{task.task_id}: {engine_request.method} {engine_request.url}")
    return task


class HTClient:
    """
    Client that dispatches requests through a replaceable engine session.

    The held session reference is guarded by a lock. Swapping it does not
    affect requests already in flight; each request uses whichever session
    was held when it was dispatched.

    Example:
        client = HTClient()
        client.dispatch(
            RequestConfig(url="https://example.com/x", method="GET"),
            lambda body, status, error: print(status, error),
        )
    """

    def __init__(
        self,
        session: Optional[Session] = None,
        *,
        default_session: Callable[[], Session] = shared_session,
    ) -> None:
        """
        Initialize the client.

        Args:
            session: Session to hold initially (None = use the default)
            default_session: Provider for the session used while none is held
        """
        self._session_lock = threading.Lock()
        self._session = session
        self._default_session = default_session

    @property
    def session(self) -> Session:
        """The held session, or the default session if none is held."""
        with self._session_lock:
            session = self._session
        if session is None:
            return self._default_session()
        return session

    @session.setter
    def session(self, session: Optional[Session]) -> None:
        with self._session_lock:
            self._session = session

    def get_session(self) -> Session:
        """Return the session requests are currently dispatched through."""
        return self.session

    def set_session(self, session: Optional[Session]) -> None:
        """
        Replace the held session.

        Args:
            session: New session, or None to fall back to the default
        """
        self.session = session

    def update_session(self, session: Session) -> None:
        """Set the client's active session."""
        self.set_session(session)

    def dispatch(self, request: RequestConfig, handler: ResponseCallback) -> DataTask:
        """
        Begin an HTTP request through the held session.

        See the module-level dispatch() for the callback contract.

        Raises:
            InvalidURLError: If request.url is malformed
        """
        # A rejected URL must not resolve the default session
        engine_request = build_engine_request(request)
        return _submit(self.session, engine_request, handler)
