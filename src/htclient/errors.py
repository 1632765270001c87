"""Exceptions raised by htclient."""


class HTClientError(Exception):
    """Base class for htclient errors."""


class InvalidURLError(HTClientError, ValueError):
    """Raised when a request URL is rejected before any I/O is attempted."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Invalid URL {url!r}: {reason}")
        self.url = url
        self.reason = reason
