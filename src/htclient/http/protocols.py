"""Protocol definitions for the HTTP engine abstraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Optional, Protocol

if TYPE_CHECKING:
    from .task import DataTask

# Status code handed to the callback when no response was received
NO_STATUS = -1

ResponseCallback = Callable[[Optional[bytes], int, Optional[BaseException]], None]
"""Caller-facing callback: (body, status_code, error)."""


@dataclass(frozen=True)
class EngineRequest:
    """
    Immutable request handed to a Session.

    Attributes:
        url: Target URL
        method: HTTP method
        headers: Request headers
        body: Request payload (None = no payload)
        allow_cellular: Whether metered network paths may be used
        timeout: Timeout in seconds (None = engine default)
    """

    url: str
    method: str = "GET"
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None
    allow_cellular: bool = True
    timeout: float | None = None


class Session(Protocol):
    """
    Protocol for HTTP engine sessions.

    This abstraction allows for:
    - Fake engines in tests
    - Different backends (requests, aiohttp)
    - A single dispatch path regardless of backend
    """

    def submit(self, request: EngineRequest, completion: ResponseCallback) -> DataTask:
        """
        Start executing a request.

        Execution begins immediately; there is no separate start step.

        Args:
            request: The request to perform
            completion: Called exactly once with (body, status_code, error)

        Returns:
            Handle for the in-flight request
        """
        ...

    def close(self) -> None:
        """Release engine resources."""
        ...
