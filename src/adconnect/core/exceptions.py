#!/usr/bin/env python3
"""Exceptions raised while preparing a request.

These cover input that is rejected before any network I/O happens: malformed
URLs and text that cannot be percent-encoded or decoded. Failures that happen
after a request is dispatched are never raised; they come back as outcome
values (see ``adconnect.core.types``).

All exceptions carry a `.details` dict (default `{}`) for machine-parseable
error context.
"""

from __future__ import annotations

from typing import Any

from adconnect.utils.loguru_setup import logger


class FacadeError(ValueError):
    """Base exception for rejected request input.

    Attributes:
        message: Human-readable error message.
        details: Machine-parseable error context (dict, default ``{}``).
    """

    def __init__(self, message="Request input rejected", *, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)
        logger.debug(f"{type(self).__name__}: {message}")


class InvalidURLError(FacadeError):
    """Raised when a string is not a valid absolute http(s) URL."""

    def __init__(self, url: str, reason: str | None = None) -> None:
        self.url = url
        message = f"Invalid URL {url!r}" + (f": {reason}" if reason else "")
        super().__init__(message, details={"url": url, "reason": reason})


class EncodingError(FacadeError):
    """Raised when text cannot be represented for percent-encoding."""

    def __init__(self, value: str, reason: str | None = None) -> None:
        self.value = value
        message = "Cannot percent-encode value" + (f": {reason}" if reason else "")
        super().__init__(message, details={"reason": reason})


class DecodingError(FacadeError):
    """Raised on malformed percent-escapes or escapes that are not valid UTF-8."""

    def __init__(self, value: str, reason: str | None = None) -> None:
        self.value = value
        message = f"Cannot percent-decode {value!r}" + (f": {reason}" if reason else "")
        super().__init__(message, details={"value": value, "reason": reason})
