"""Translation of RequestConfig into engine requests."""

from __future__ import annotations

import logging

from ..errors import InvalidURLError
from ..models.config import RequestConfig
from ..security.url_validator import UrlValidator
from .protocols import EngineRequest

logger = logging.getLogger(__name__)

_validator = UrlValidator()


def _checked_url(url: str, validator: UrlValidator | None) -> str:
    result = (validator or _validator).validate(url)
    if not result.is_valid:
        logger.warning(f"Rejected request URL {url!r}: {result.rejection_reason}")
        raise InvalidURLError(url, result.rejection_reason or "invalid URL")
    return url


def build_engine_request(
    config: RequestConfig,
    *,
    validator: UrlValidator | None = None,
) -> EngineRequest:
    """
    Build an engine request from a request configuration.

    Method, cellular flag, body and headers are copied verbatim. Headers
    are not validated; rejecting malformed ones is up to the engine.

    Args:
        config: The request configuration
        validator: Optional URL validator (defaults to http/https syntax check)

    Returns:
        EngineRequest ready for Session.submit()

    Raises:
        InvalidURLError: If the URL is malformed. Raised before any I/O.
    """
    url = _checked_url(config.url, validator)

    timeout = float(config.timeout_seconds) if config.timeout_seconds > 0 else None

    return EngineRequest(
        url=url,
        method=config.method,
        headers=dict(config.headers or {}),
        body=config.body,
        allow_cellular=config.allow_cellular,
        timeout=timeout,
    )


def build_url_only_request(
    config: RequestConfig,
    *,
    validator: UrlValidator | None = None,
) -> EngineRequest:
    """
    Build a bare GET request from the configuration's URL alone.

    Method, headers, body, timeout and cellular flag are ignored. This
    matches what the legacy static dispatch path sent and is only used when
    a caller asks for it explicitly.

    Raises:
        InvalidURLError: If the URL is malformed
    """
    return EngineRequest(url=_checked_url(config.url, validator))
