#!/usr/bin/env python
"""Build ``RequestDescriptor`` values from structured input."""

from __future__ import annotations

from collections.abc import Mapping

import httpx

from adconnect.core.exceptions import InvalidURLError
from adconnect.core.types import HttpMethod, RequestDescriptor
from adconnect.utils.config import ALLOWED_URL_SCHEMES, CONTENT_LENGTH_HEADER, DEFAULT_TIMEOUT_SECONDS
from adconnect.utils.loguru_setup import logger

__all__ = [
    "build_request",
    "validate_url",
]


def validate_url(url: str) -> httpx.URL:
    """Parse ``url`` and check that it is an absolute http(s) URL.

    Args:
        url: URL string to validate

    Returns:
        The parsed URL

    Raises:
        InvalidURLError: If the URL cannot be parsed, is relative, or uses a
            scheme other than http/https
    """
    if not isinstance(url, str):
        raise InvalidURLError(repr(url), "URL must be a string")
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise InvalidURLError(url, str(e)) from e

    if not parsed.scheme:
        raise InvalidURLError(url, "URL is not absolute")
    if parsed.scheme not in ALLOWED_URL_SCHEMES:
        raise InvalidURLError(url, f"unsupported scheme {parsed.scheme!r}")
    if not parsed.host:
        raise InvalidURLError(url, "URL has no host")
    return parsed


def build_request(
    url: str,
    headers: Mapping[str, str] | None = None,
    body: bytes | None = None,
    method: HttpMethod | str = HttpMethod.GET,
    *,
    timeout_seconds: float | None = None,
) -> RequestDescriptor:
    """Build an immutable request descriptor.

    Headers are copied verbatim; a later duplicate key overwrites an earlier
    one. When a body is given, ``Content-Length`` is derived from its byte
    count and any caller-supplied ``Content-Length`` is discarded.

    Args:
        url: Absolute http(s) URL
        headers: Optional request headers
        body: Optional request body
        method: HTTP method, as ``HttpMethod`` or its name
        timeout_seconds: Request timeout, defaults to 60 seconds

    Returns:
        RequestDescriptor ready for dispatch

    Raises:
        InvalidURLError: If ``url`` is not a valid absolute http(s) URL
        ValueError: If ``method`` is not supported
    """
    validate_url(url)
    resolved_method = HttpMethod.from_value(method)

    request_headers: dict[str, str] = {}
    if headers:
        for key, value in headers.items():
            if key.lower() == CONTENT_LENGTH_HEADER.lower():
                continue
            request_headers[key] = value

    if body is not None:
        body = bytes(body)
        request_headers[CONTENT_LENGTH_HEADER] = str(len(body))

    descriptor = RequestDescriptor(
        url=url,
        method=resolved_method,
        headers=request_headers,
        body=body,
        timeout_seconds=DEFAULT_TIMEOUT_SECONDS if timeout_seconds is None else timeout_seconds,
    )
    logger.debug(f"Built {resolved_method.value} request for {url} with {len(request_headers)} headers")
    return descriptor
