"""Session construction and the process-wide default session."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from ..models.config import SessionConfig
from .async_session import AiohttpSession
from .protocols import Session
from .session import RequestsSession

logger = logging.getLogger(__name__)

_shared: Optional[Session] = None
_shared_lock = threading.Lock()


def build_session(config: Optional[SessionConfig] = None) -> Session:
    """
    Create an engine session from configuration.

    Args:
        config: Session configuration (defaults to SessionConfig())

    Returns:
        A RequestsSession or AiohttpSession, depending on config.engine
    """
    config = config or SessionConfig()

    if config.engine == "aiohttp":
        return AiohttpSession(
            max_connections=config.max_connections,
            default_timeout=config.default_timeout,
            user_agent=config.user_agent,
            proxy=config.proxy,
        )

    return RequestsSession(
        max_workers=config.max_workers,
        max_connections=config.max_connections,
        default_timeout=config.default_timeout,
        user_agent=config.user_agent,
        proxy=config.proxy,
    )


def shared_session() -> Session:
    """
    Get the process-wide default session, creating it on first use.

    Returns:
        The same session instance on every call until reset_shared_session()
    """
    global _shared
    with _shared_lock:
        if _shared is None:
            _shared = build_session()
            logger.debug("Created shared default session")
        return _shared


def reset_shared_session() -> None:
    """Close and forget the shared default session."""
    global _shared
    with _shared_lock:
        session, _shared = _shared, None
    if session is not None:
        session.close()
