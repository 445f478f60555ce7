#!/usr/bin/env python
"""Request descriptor and outcome types.

A ``RequestDescriptor`` describes one HTTP request before dispatch. Every
dispatch or decode produces exactly one outcome value from a closed set:

- ``SuccessBytes``: status 200, raw body
- ``SuccessList`` / ``SuccessMap``: status 200, body decoded as a JSON array / object
- ``TransportError``: the request never produced a status code (includes timeouts)
- ``HttpStatusError``: any status other than 200
- ``JsonDecodeError``: status 200 but the body is not a JSON array or object
- ``Offline``: no network route, nothing was sent
- ``Cancelled``: the dispatch was cancelled before it completed

Outcomes are frozen and are returned, never raised.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar

import attr

from adconnect.utils.config import CONTENT_LENGTH_HEADER, DEFAULT_TIMEOUT_SECONDS, JSON_ERROR_DOMAIN

__all__ = [
    "Cancelled",
    "HttpMethod",
    "HttpStatusError",
    "JsonDecodeError",
    "Offline",
    "Outcome",
    "RequestDescriptor",
    "SuccessBytes",
    "SuccessList",
    "SuccessMap",
    "TransportError",
]


class HttpMethod(str, Enum):
    """HTTP methods supported by the façade."""

    GET = "GET"
    POST = "POST"

    @classmethod
    def from_value(cls, value: HttpMethod | str) -> HttpMethod:
        """Resolve an ``HttpMethod`` from an enum member or a case-insensitive name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ValueError(f"Unsupported HTTP method {value!r}; expected one of {[m.value for m in cls]}") from None


def _freeze_headers(headers: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType(dict(headers or {}))


@attr.define(slots=True, frozen=True)
class RequestDescriptor:
    """Immutable description of a single HTTP request.

    Attributes:
        url: Absolute http(s) URL.
        method: HTTP method.
        headers: Read-only header mapping, keys kept exactly as supplied.
        body: Optional request body.
        timeout_seconds: Timeout applied to the whole request.

    A body always comes with a matching ``Content-Length`` header, and a
    ``Content-Length`` header never comes without a body. Use
    ``adconnect.core.request_builder.build_request`` rather than constructing
    this class directly.
    """

    url: str = attr.field(validator=attr.validators.instance_of(str))
    method: HttpMethod = attr.field(default=HttpMethod.GET, converter=HttpMethod.from_value)
    headers: Mapping[str, str] = attr.field(factory=dict, converter=_freeze_headers)
    body: bytes | None = attr.field(
        default=None,
        validator=attr.validators.optional(attr.validators.instance_of(bytes)),
    )
    timeout_seconds: float = attr.field(default=DEFAULT_TIMEOUT_SECONDS, converter=float)

    def __attrs_post_init__(self) -> None:
        length_keys = [key for key in self.headers if key.lower() == CONTENT_LENGTH_HEADER.lower()]
        if any(key != CONTENT_LENGTH_HEADER for key in length_keys):
            raise ValueError(f"Content-Length header must be spelled {CONTENT_LENGTH_HEADER!r}, got {length_keys!r}")
        content_length = self.headers.get(CONTENT_LENGTH_HEADER)
        if self.body is None:
            if content_length is not None:
                raise ValueError("Content-Length header supplied without a body")
        elif content_length != str(len(self.body)):
            raise ValueError(
                f"Content-Length header {content_length!r} does not match body length {len(self.body)}"
            )
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {self.timeout_seconds!r}")


@attr.define(slots=True, frozen=True)
class SuccessBytes:
    """Status 200 with the raw response body."""

    is_success: ClassVar[bool] = True

    data: bytes


@attr.define(slots=True, frozen=True)
class SuccessList:
    """Status 200 with a body that decoded to a JSON array."""

    is_success: ClassVar[bool] = True

    items: list[Any]


@attr.define(slots=True, frozen=True)
class SuccessMap:
    """Status 200 with a body that decoded to a JSON object."""

    is_success: ClassVar[bool] = True

    mapping: dict[str, Any]


@attr.define(slots=True, frozen=True)
class TransportError:
    """The request failed before a status code was received."""

    is_success: ClassVar[bool] = False

    cause: BaseException = attr.field(eq=False)
    timed_out: bool = False


@attr.define(slots=True, frozen=True)
class HttpStatusError:
    """The server answered with a status other than 200."""

    is_success: ClassVar[bool] = False

    status_code: int
    body: bytes | None = None


@attr.define(slots=True, frozen=True)
class JsonDecodeError:
    """The body was not a JSON array or object."""

    is_success: ClassVar[bool] = False

    code: int
    message: str
    cause: BaseException | None = attr.field(default=None, eq=False)
    domain: str = JSON_ERROR_DOMAIN


@attr.define(slots=True, frozen=True)
class Offline:
    """No network route was available; nothing was sent."""

    is_success: ClassVar[bool] = False


@attr.define(slots=True, frozen=True)
class Cancelled:
    """The dispatch was cancelled before it completed."""

    is_success: ClassVar[bool] = False


Outcome = (
    SuccessBytes | SuccessList | SuccessMap | TransportError | HttpStatusError | JsonDecodeError | Offline | Cancelled
)
