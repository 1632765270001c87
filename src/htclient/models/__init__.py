"""htclient configuration models."""

from .config import RequestConfig, SessionConfig

__all__ = [
    "RequestConfig",
    "SessionConfig",
]
