"""Tests for dispatch and outcome classification."""

import asyncio

import pytest

from adconnect.core.dispatcher import Dispatcher
from adconnect.core.request_builder import build_request
from adconnect.core.types import (
    Cancelled,
    HttpMethod,
    HttpStatusError,
    JsonDecodeError,
    Offline,
    SuccessBytes,
    SuccessList,
    SuccessMap,
    TransportError,
)
from adconnect.utils.network.exceptions import TransportFailure
from adconnect.utils.network.transport import TransportResponse

URL = "https://api.example.com/items"


@pytest.fixture
def request_descriptor():
    return build_request(URL, headers={"Accept": "application/json"})


class BlockingTransport:
    """Transport whose requests never finish until cancelled."""

    def __init__(self):
        self.started = asyncio.Event()

    async def send(self, descriptor):
        self.started.set()
        await asyncio.Event().wait()


class ExplodingTransport:
    """Transport raising something other than TransportFailure."""

    async def send(self, descriptor):
        raise RuntimeError("bug in transport")


class BrokenReachability:
    def is_available(self):
        raise OSError("routing table unavailable")


class BrokenNotifier:
    def notify_offline(self):
        raise RuntimeError("no window")

    def notify_indicator(self, show):
        raise RuntimeError("no window")


@pytest.mark.asyncio
class TestReachabilityGate:
    """Nothing is sent when the network is unavailable."""

    async def test_offline_never_calls_transport(self, make_transport, offline, notifier, request_descriptor):
        transport = make_transport(200, b"{}")
        dispatcher = Dispatcher(transport, offline, notifier)

        outcome = await dispatcher.dispatch(request_descriptor)

        assert outcome == Offline()
        assert transport.calls == []
        assert offline.checks == 1

    async def test_offline_notifies_ui(self, make_transport, offline, notifier, request_descriptor):
        dispatcher = Dispatcher(make_transport(), offline, notifier)
        await dispatcher.dispatch(request_descriptor)
        assert notifier.signals == [("offline",), ("indicator", False)]

    async def test_offline_passes_through_json_dispatch(self, make_transport, offline, request_descriptor):
        dispatcher = Dispatcher(make_transport(200, b"{}"), offline)
        assert await dispatcher.dispatch_json(request_descriptor) == Offline()

    async def test_failing_reachability_check_counts_as_offline(self, make_transport, request_descriptor):
        transport = make_transport(200, b"{}")
        dispatcher = Dispatcher(transport, BrokenReachability())
        assert await dispatcher.dispatch(request_descriptor) == Offline()
        assert transport.calls == []

    async def test_failing_notifier_does_not_change_outcome(self, make_transport, offline, request_descriptor):
        dispatcher = Dispatcher(make_transport(), offline, BrokenNotifier())
        assert await dispatcher.dispatch(request_descriptor) == Offline()

    async def test_reachability_checked_on_every_dispatch(self, make_transport, online, request_descriptor):
        dispatcher = Dispatcher(make_transport(200, b""), online)
        await dispatcher.dispatch(request_descriptor)
        await dispatcher.dispatch(request_descriptor)
        assert online.checks == 2


@pytest.mark.asyncio
class TestClassification:
    """Mapping transport results onto outcomes."""

    async def test_status_200_gives_bytes(self, make_transport, online, request_descriptor):
        transport = make_transport(200, b"raw body")
        outcome = await Dispatcher(transport, online).dispatch(request_descriptor)

        assert outcome == SuccessBytes(b"raw body")
        assert transport.calls == [request_descriptor]

    async def test_status_200_empty_body(self, make_transport, online, request_descriptor):
        outcome = await Dispatcher(make_transport(200, b""), online).dispatch(request_descriptor)
        assert outcome == SuccessBytes(b"")

    async def test_status_404_is_not_dropped(self, make_transport, online, notifier, request_descriptor):
        dispatcher = Dispatcher(make_transport(404, b"missing"), online, notifier)

        outcome = await dispatcher.dispatch(request_descriptor)

        assert outcome == HttpStatusError(status_code=404, body=b"missing")
        assert notifier.signals == [("indicator", False)]

    @pytest.mark.parametrize("status_code", [101, 201, 204, 301, 304, 400, 500, 503])
    async def test_every_other_status_is_an_error(self, make_transport, online, request_descriptor, status_code):
        outcome = await Dispatcher(make_transport(status_code, b""), online).dispatch(request_descriptor)
        assert outcome == HttpStatusError(status_code=status_code, body=None)

    async def test_connection_failure_carries_cause(self, make_transport, online, notifier, request_descriptor):
        cause = ConnectionRefusedError("connection refused")
        dispatcher = Dispatcher(make_transport(error=cause), online, notifier)

        outcome = await dispatcher.dispatch(request_descriptor)

        assert isinstance(outcome, TransportError)
        assert outcome.cause is cause
        assert outcome.timed_out is False
        assert notifier.signals == [("indicator", False)]

    async def test_timeout_maps_to_transport_error(self, make_transport, online, request_descriptor):
        cause = TimeoutError("read timed out")
        outcome = await Dispatcher(make_transport(error=cause, timed_out=True), online).dispatch(request_descriptor)
        assert isinstance(outcome, TransportError)
        assert outcome.timed_out is True

    async def test_success_does_not_touch_indicator(self, make_transport, online, notifier, request_descriptor):
        await Dispatcher(make_transport(200, b"ok"), online, notifier).dispatch(request_descriptor)
        assert notifier.signals == []

    async def test_unexpected_transport_error_is_returned_not_raised(self, online, notifier, request_descriptor):
        """Awaiting dispatch directly never lets an exception escape."""
        outcome = await Dispatcher(ExplodingTransport(), online, notifier).dispatch(request_descriptor)

        assert isinstance(outcome, TransportError)
        assert isinstance(outcome.cause, RuntimeError)
        assert outcome.timed_out is False
        assert notifier.signals == [("indicator", False)]


@pytest.mark.asyncio
class TestDispatchJson:
    """JSON decoding is applied only to SuccessBytes."""

    async def test_object(self, make_transport, online, request_descriptor):
        outcome = await Dispatcher(make_transport(200, b'{"a":1}'), online).dispatch_json(request_descriptor)
        assert outcome == SuccessMap({"a": 1})

    async def test_array(self, make_transport, online, request_descriptor):
        outcome = await Dispatcher(make_transport(200, b"[1,2,3]"), online).dispatch_json(request_descriptor)
        assert outcome == SuccessList([1, 2, 3])

    async def test_not_json(self, make_transport, online, request_descriptor):
        outcome = await Dispatcher(make_transport(200, b"not json"), online).dispatch_json(request_descriptor)
        assert isinstance(outcome, JsonDecodeError)

    async def test_status_error_passes_through_unchanged(self, make_transport, online, request_descriptor):
        outcome = await Dispatcher(make_transport(500, b'{"error": "boom"}'), online).dispatch_json(request_descriptor)
        assert outcome == HttpStatusError(status_code=500, body=b'{"error": "boom"}')

    async def test_unexpected_transport_error(self, online, request_descriptor):
        outcome = await Dispatcher(ExplodingTransport(), online).dispatch_json(request_descriptor)
        assert isinstance(outcome, TransportError)

    async def test_transport_error_passes_through_unchanged(self, make_transport, online, request_descriptor):
        cause = ConnectionResetError("reset")
        outcome = await Dispatcher(make_transport(error=cause), online).dispatch_json(request_descriptor)
        assert isinstance(outcome, TransportError)
        assert outcome.cause is cause


@pytest.mark.asyncio
class TestUploadPhoto:
    async def test_upload_sends_multipart_post(self, make_transport, online, request_descriptor):
        transport = make_transport(200, b"stored")

        outcome = await Dispatcher(transport, online).upload_photo(request_descriptor, b"\x89PNG")

        assert outcome == SuccessBytes(b"stored")
        (sent,) = transport.calls
        assert sent.method is HttpMethod.POST
        assert sent.headers["Content-Type"].startswith("multipart/form-data; boundary=")
        assert b'name="uploadedfile"; filename="abc.png"' in sent.body


@pytest.mark.asyncio
class TestSubmit:
    """Callback-style dispatch with single resolution and cancellation."""

    async def test_handler_called_once_with_outcome(self, make_transport, online, request_descriptor):
        received = []
        dispatcher = Dispatcher(make_transport(200, b"[1]"), online)

        task = dispatcher.submit(request_descriptor, received.append, json=True)
        outcome = await task.outcome()

        assert outcome == SuccessList([1])
        assert received == [SuccessList([1])]
        assert task.done()

    async def test_submit_returns_before_completion(self, online, request_descriptor):
        transport = BlockingTransport()
        task = Dispatcher(transport, online).submit(request_descriptor)

        assert not task.done()
        task.cancel()
        await task.outcome()

    async def test_cancel_gives_cancelled(self, online, request_descriptor):
        received = []
        transport = BlockingTransport()
        task = Dispatcher(transport, online).submit(request_descriptor, received.append)
        await transport.started.wait()

        assert task.cancel() is True
        outcome = await task.outcome()

        assert outcome == Cancelled()
        assert received == [Cancelled()]

    async def test_cancel_after_completion_is_a_no_op(self, make_transport, online, request_descriptor):
        received = []
        task = Dispatcher(make_transport(200, b"done"), online).submit(request_descriptor, received.append)
        await task.outcome()

        assert task.cancel() is False
        assert await task.outcome() == SuccessBytes(b"done")
        assert received == [SuccessBytes(b"done")]

    async def test_unexpected_error_becomes_transport_error(self, online, request_descriptor):
        received = []
        task = Dispatcher(ExplodingTransport(), online).submit(request_descriptor, received.append)

        outcome = await task.outcome()

        assert isinstance(outcome, TransportError)
        assert isinstance(outcome.cause, RuntimeError)
        assert received == [outcome]

    async def test_concurrent_dispatches_are_independent(self, online):
        class EchoTransport:
            async def send(self, descriptor):
                await asyncio.sleep(0)
                return TransportResponse(status_code=200, body=descriptor.url.encode())

        dispatcher = Dispatcher(EchoTransport(), online)
        urls = [f"https://example.com/{i}" for i in range(5)]
        tasks = [dispatcher.submit(build_request(url)) for url in urls]

        outcomes = [await task.outcome() for task in tasks]

        assert outcomes == [SuccessBytes(url.encode()) for url in urls]


def test_submit_requires_running_loop(make_transport, online, request_descriptor):
    with pytest.raises(RuntimeError):
        Dispatcher(make_transport(), online).submit(request_descriptor)


def test_transport_failure_message():
    error = TransportFailure(TimeoutError("slow"), timed_out=True)
    assert "timed out" in str(error)
    assert isinstance(error.cause, TimeoutError)
