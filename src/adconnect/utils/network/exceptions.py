#!/usr/bin/env python
"""Network-related exception classes."""

__all__ = [
    "TransportFailure",
]


class TransportFailure(Exception):
    """Raised by a transport when a request could not be completed.

    Covers connection errors, timeouts and protocol errors: anything where no
    HTTP status code was received.

    Attributes:
        cause: The underlying exception.
        timed_out: Whether the failure was a timeout.
    """

    def __init__(self, cause: BaseException, *, timed_out: bool = False) -> None:
        self.cause = cause
        self.timed_out = timed_out
        kind = "timed out" if timed_out else "failed"
        super().__init__(f"Request {kind}: {cause}")
