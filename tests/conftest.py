#!/usr/bin/env python
"""Root conftest.py providing test doubles for the façade.

Fixtures:
1. ``make_transport``: transport double that records every descriptor it is sent
2. ``online`` / ``offline``: fixed reachability answers
3. ``notifier``: UI notifier double that records the signals it receives
"""

import pytest

from adconnect.utils.network.exceptions import TransportFailure
from adconnect.utils.network.transport import TransportResponse


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: mark tests that integrate with external services")


class RecordingTransport:
    """Transport double returning a fixed response or raising a fixed error."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    async def send(self, descriptor):
        self.calls.append(descriptor)
        if self.error is not None:
            raise self.error
        return self.response

    async def aclose(self):
        self.closed = True


class StaticReachability:
    """Reachability double with a fixed answer."""

    def __init__(self, available):
        self.available = available
        self.checks = 0

    def is_available(self):
        self.checks += 1
        return self.available


class RecordingNotifier:
    """UI notifier double recording (signal, args) tuples."""

    def __init__(self):
        self.signals = []

    def notify_offline(self):
        self.signals.append(("offline",))

    def notify_indicator(self, show):
        self.signals.append(("indicator", show))


@pytest.fixture
def make_transport():
    """Factory for RecordingTransport.

    ``make_transport(200, b"{}")`` answers with a status and body,
    ``make_transport(error=ConnectionError("refused"))`` fails with a TransportFailure.
    """

    def _make(status_code=200, body=b"", *, error=None, timed_out=False):
        if error is not None:
            if not isinstance(error, TransportFailure):
                error = TransportFailure(error, timed_out=timed_out)
            return RecordingTransport(error=error)
        return RecordingTransport(response=TransportResponse(status_code=status_code, body=body))

    return _make


@pytest.fixture
def online():
    return StaticReachability(True)


@pytest.fixture
def offline():
    return StaticReachability(False)


@pytest.fixture
def notifier():
    return RecordingNotifier()
