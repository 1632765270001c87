"""
htclient - A small callback-style HTTP client facade.

Usage:
    from htclient import HTClient, RequestConfig

    client = HTClient()

    def on_complete(body, status_code, error):
        if error is not None:
            print(f"Failed: {error}")
        else:
            print(status_code, body)

    task = client.dispatch(
        RequestConfig(url="https://example.com/x", method="GET"),
        on_complete,
    )
    task.wait()
"""

__version__ = "1.0.0"

from .client import HTClient, dispatch
from .errors import HTClientError, InvalidURLError
from .http import (
    NO_STATUS,
    AiohttpSession,
    DataTask,
    EngineRequest,
    RequestsSession,
    ResponseCallback,
    Session,
    TaskState,
    build_engine_request,
    build_session,
    reset_shared_session,
    shared_session,
)
from .logging_config import setup_logging
from .models.config import RequestConfig, SessionConfig

__all__ = [
    "__version__",
    # Core
    "HTClient",
    "dispatch",
    # Config
    "RequestConfig",
    "SessionConfig",
    # Engine
    "NO_STATUS",
    "AiohttpSession",
    "DataTask",
    "EngineRequest",
    "RequestsSession",
    "ResponseCallback",
    "Session",
    "TaskState",
    "build_engine_request",
    "build_session",
    "reset_shared_session",
    "shared_session",
    # Errors
    "HTClientError",
    "InvalidURLError",
    # Logging
    "setup_logging",
]
