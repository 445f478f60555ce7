#!/usr/bin/env python
"""Transport: submits a request descriptor to the network.

The ``Transport`` protocol is the seam between the dispatcher and the HTTP
client. ``HttpxTransport`` is the production implementation; tests substitute
a double or wrap ``httpx.MockTransport``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

import attr
import httpx

from adconnect.utils.config import DEFAULT_ACCEPT_HEADER
from adconnect.utils.loguru_setup import logger
from adconnect.utils.network.client_factory import create_client, safely_close_client
from adconnect.utils.network.exceptions import TransportFailure

if TYPE_CHECKING:
    from adconnect.core.types import RequestDescriptor
    from adconnect.utils.facade_config import FacadeConfig

__all__ = [
    "HttpxTransport",
    "Transport",
    "TransportResponse",
]


@attr.define(slots=True, frozen=True)
class TransportResponse:
    """What the network returned: a status code, headers and the full body."""

    status_code: int
    body: bytes
    headers: Mapping[str, str] = attr.field(factory=dict)


class Transport(Protocol):
    """Anything that can send a ``RequestDescriptor`` and await the response."""

    async def send(self, descriptor: RequestDescriptor) -> TransportResponse:
        """Send the request.

        Raises:
            TransportFailure: If no status code was received
        """
        ...


class HttpxTransport:
    """Transport backed by ``httpx.AsyncClient``.

    A client passed in is borrowed and left open; a client created here is
    closed by ``aclose()`` or on leaving ``async with``.
    """

    def __init__(self, client: httpx.AsyncClient | None = None, config: FacadeConfig | None = None) -> None:
        self._client_is_external = client is not None
        if client is None:
            kwargs: dict[str, Any] = {}
            if config is not None:
                kwargs = {
                    "timeout": config.timeout_seconds,
                    "max_connections": config.max_connections,
                    "follow_redirects": config.follow_redirects,
                    "headers": {"User-Agent": config.user_agent, "Accept": DEFAULT_ACCEPT_HEADER},
                }
            client = create_client(**kwargs)
        self.client = client

    async def __aenter__(self) -> HttpxTransport:
        return self

    async def __aexit__(self, _exc_type: type | None, _exc_val: BaseException | None, _exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the client if this transport created it."""
        if not self._client_is_external:
            await safely_close_client(self.client)

    async def send(self, descriptor: RequestDescriptor) -> TransportResponse:
        """Send ``descriptor`` and read the whole response body.

        Raises:
            TransportFailure: On headers httpx cannot encode, connection
                errors, timeouts and protocol errors
        """
        try:
            request = self.client.build_request(
                descriptor.method.value,
                descriptor.url,
                headers=dict(descriptor.headers),
                content=descriptor.body,
                timeout=descriptor.timeout_seconds,
            )
        except (UnicodeEncodeError, httpx.InvalidURL, TypeError) as e:
            logger.warning(f"Cannot encode {descriptor.method.value} {descriptor.url}: {e}")
            raise TransportFailure(e) from e

        try:
            response = await self.client.send(request)
        except httpx.TimeoutException as e:
            logger.warning(f"{descriptor.method.value} {descriptor.url} timed out after {descriptor.timeout_seconds}s")
            raise TransportFailure(e, timed_out=True) from e
        except (httpx.HTTPError, OSError) as e:
            logger.warning(f"{descriptor.method.value} {descriptor.url} failed: {e}")
            raise TransportFailure(e) from e

        return TransportResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )
