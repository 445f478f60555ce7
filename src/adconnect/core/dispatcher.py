#!/usr/bin/env python
"""Dispatch request descriptors and classify the result.

Every dispatch resolves to exactly one outcome. Failures are returned as
outcome values, never raised:

    reachability gate ──no route──> Offline
          │
       transport ──TransportFailure──> TransportError
          │
    status == 200 ──> SuccessBytes ──(dispatch_json)──> SuccessMap | SuccessList | JsonDecodeError
    status != 200 ──> HttpStatusError

``dispatch`` and ``dispatch_json`` are coroutines. ``submit`` wraps one of
them in a ``DispatchTask`` for callback-style callers and adds cancellation,
which resolves to ``Cancelled``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from adconnect.core.json_decoder import parse_json_data
from adconnect.core.multipart import build_photo_upload
from adconnect.core.types import (
    Cancelled,
    HttpStatusError,
    Offline,
    Outcome,
    RequestDescriptor,
    SuccessBytes,
    TransportError,
)
from adconnect.ui.notifier import NullNotifier, UINotifier
from adconnect.utils.config import HTTP_OK
from adconnect.utils.loguru_setup import logger
from adconnect.utils.network.exceptions import TransportFailure
from adconnect.utils.network.reachability import DefaultRouteReachability, ReachabilityChecker
from adconnect.utils.network.transport import Transport

__all__ = [
    "DispatchTask",
    "Dispatcher",
    "OutcomeHandler",
]

OutcomeHandler = Callable[[Outcome], Any]


class DispatchTask:
    """Handle for one submitted dispatch.

    The handler, if any, is called exactly once with the final outcome, on the
    event loop that ran the dispatch.
    """

    def __init__(self, coro: Awaitable[Outcome], handler: OutcomeHandler | None = None) -> None:
        self._handler = handler
        self._outcome: Outcome | None = None
        self._task = asyncio.get_running_loop().create_task(coro)
        self._task.add_done_callback(self._on_done)

    def _resolve(self) -> Outcome:
        if self._outcome is None:
            if self._task.cancelled():
                self._outcome = Cancelled()
            elif (error := self._task.exception()) is not None:
                logger.opt(exception=error).error(f"Dispatch raised unexpectedly: {error!r}")
                self._outcome = TransportError(cause=error)
            else:
                self._outcome = self._task.result()
        return self._outcome

    def _on_done(self, _task: asyncio.Future) -> None:
        outcome = self._resolve()
        if self._handler is not None:
            self._handler(outcome)

    def cancel(self) -> bool:
        """Cancel the in-flight dispatch. Returns False if it already finished."""
        return self._task.cancel()

    def done(self) -> bool:
        return self._task.done()

    async def outcome(self) -> Outcome:
        """Wait for the dispatch to finish and return its outcome."""
        await asyncio.wait([self._task])
        return self._resolve()


class Dispatcher:
    """Submits requests through a transport, gated by a reachability check.

    Args:
        transport: Sends descriptors to the network
        reachability: Checked before every dispatch; defaults to the default-route probe
        notifier: Receives offline and indicator signals; defaults to a no-op
    """

    def __init__(
        self,
        transport: Transport,
        reachability: ReachabilityChecker | None = None,
        notifier: UINotifier | None = None,
    ) -> None:
        self.transport = transport
        self.reachability = reachability if reachability is not None else DefaultRouteReachability()
        self.notifier = notifier if notifier is not None else NullNotifier()

    def is_available(self) -> bool:
        """Run the reachability check; a failing check counts as unavailable."""
        try:
            return bool(self.reachability.is_available())
        except Exception as e:
            logger.warning(f"Reachability check failed, treating network as unavailable: {e!r}")
            return False

    def notify(self, signal: str, *args: Any) -> None:
        """Send a UI signal; a failing notifier is logged and never raises."""
        try:
            getattr(self.notifier, signal)(*args)
        except Exception as e:
            logger.warning(f"UI notifier {signal} failed: {e!r}")

    async def dispatch(self, descriptor: RequestDescriptor) -> Outcome:
        """Send ``descriptor`` and classify the response.

        Returns:
            Offline, TransportError, SuccessBytes or HttpStatusError
        """
        request_line = f"{descriptor.method.value} {descriptor.url}"

        if not self.is_available():
            logger.warning(f"Network unavailable, not sending {request_line}")
            self.notify("notify_offline")
            self.notify("notify_indicator", False)
            return Offline()

        logger.debug(f"Dispatching {request_line}")
        try:
            response = await self.transport.send(descriptor)
        except TransportFailure as e:
            self.notify("notify_indicator", False)
            return TransportError(cause=e.cause, timed_out=e.timed_out)
        except Exception as e:
            logger.opt(exception=e).error(f"Transport raised unexpectedly for {request_line}: {e!r}")
            self.notify("notify_indicator", False)
            return TransportError(cause=e)

        if response.status_code == HTTP_OK:
            logger.debug(f"{request_line} returned {len(response.body)} bytes")
            return SuccessBytes(response.body)

        logger.warning(f"{request_line} returned status {response.status_code}")
        self.notify("notify_indicator", False)
        return HttpStatusError(status_code=response.status_code, body=response.body or None)

    async def dispatch_json(self, descriptor: RequestDescriptor) -> Outcome:
        """Dispatch, then decode a successful body as JSON.

        Only ``SuccessBytes`` is decoded; every other outcome passes through.
        """
        outcome = await self.dispatch(descriptor)
        if isinstance(outcome, SuccessBytes):
            return parse_json_data(outcome.data)
        return outcome

    async def upload_photo(self, descriptor: RequestDescriptor, image: bytes) -> Outcome:
        """POST ``image`` as multipart/form-data to the descriptor's URL."""
        return await self.dispatch(build_photo_upload(descriptor, image))

    def submit(
        self,
        descriptor: RequestDescriptor,
        handler: OutcomeHandler | None = None,
        *,
        json: bool = False,
    ) -> DispatchTask:
        """Start a dispatch on the running event loop and return immediately.

        Args:
            descriptor: Request to send
            handler: Called once with the outcome
            json: Decode a successful body as JSON

        Returns:
            DispatchTask that can be awaited or cancelled

        Raises:
            RuntimeError: If called outside a running event loop
        """
        asyncio.get_running_loop()
        coro = self.dispatch_json(descriptor) if json else self.dispatch(descriptor)
        return DispatchTask(coro, handler)
