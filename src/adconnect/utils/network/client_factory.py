#!/usr/bin/env python
"""HTTP client factory functions."""

from __future__ import annotations

from typing import Any

import httpx
from httpx import Limits, Timeout

from adconnect.utils.config import (
    DEFAULT_ACCEPT_HEADER,
    DEFAULT_MAX_CONNECTIONS,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    MAX_CONNECT_TIMEOUT_SECONDS,
)
from adconnect.utils.loguru_setup import logger

__all__ = [
    "Client",
    "create_client",
    "safely_close_client",
]

Client = httpx.AsyncClient


def create_client(
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    max_connections: int = DEFAULT_MAX_CONNECTIONS,
    headers: dict[str, str] | None = None,
    follow_redirects: bool = True,
    **kwargs: Any,
) -> httpx.AsyncClient:
    """Create an httpx AsyncClient for dispatching requests.

    Args:
        timeout: Request timeout in seconds
        max_connections: Maximum number of connections
        headers: Optional headers to include in all requests
        follow_redirects: Whether redirects are followed
        **kwargs: Additional keyword arguments to pass to AsyncClient

    Returns:
        httpx.AsyncClient: An initialized HTTP client
    """
    timeout_obj = Timeout(
        connect=min(timeout, MAX_CONNECT_TIMEOUT_SECONDS),
        read=timeout,
        write=timeout,
        pool=timeout,
    )

    limits = Limits(
        max_connections=max_connections,
        max_keepalive_connections=max(max_connections // 2, 1),
    )

    if headers is None:
        headers = {
            "User-Agent": DEFAULT_USER_AGENT,
            "Accept": DEFAULT_ACCEPT_HEADER,
        }

    client = httpx.AsyncClient(
        timeout=timeout_obj,
        limits=limits,
        headers=headers,
        follow_redirects=follow_redirects,
        **kwargs,
    )

    logger.debug(f"Created httpx AsyncClient with timeout={timeout}s, max_connections={max_connections}")
    return client


async def safely_close_client(client: httpx.AsyncClient | None) -> None:
    """Close an HTTP client, logging instead of raising on I/O errors.

    Args:
        client: HTTP client to close
    """
    if client is None:
        return

    try:
        await client.aclose()
        logger.debug("HTTP client closed successfully")
    except OSError as e:
        logger.warning(f"Error while closing HTTP client: {e}")
