"""HTTP engine sessions and request translation for htclient."""

from .async_session import AiohttpSession
from .protocols import NO_STATUS, EngineRequest, ResponseCallback, Session
from .request import build_engine_request, build_url_only_request
from .session import RequestsSession
from .shared import build_session, reset_shared_session, shared_session
from .task import DataTask, TaskState

__all__ = [
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
    "build_url_only_request",
    "reset_shared_session",
    "shared_session",
]
