#!/usr/bin/env python
"""ConnectionManager: one object bundling the whole request/response façade.

Example:
    >>> async with ConnectionManager.create() as manager:
    ...     request = manager.generate_request(
    ...         "https://api.example.com/items" + manager.generate_query_string({"page": "1"}),
    ...         dictionary_of_headers={"Accept": "application/json"},
    ...     )
    ...     outcome = await manager.dispatch_json(request)
    ...     match outcome:
    ...         case SuccessMap(mapping):
    ...             ...
    ...         case HttpStatusError(status_code=404):
    ...             ...
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from adconnect.core import query_codec
from adconnect.core.dispatcher import Dispatcher, DispatchTask, OutcomeHandler
from adconnect.core.json_decoder import parse_json_data
from adconnect.core.multipart import build_photo_upload
from adconnect.core.request_builder import build_request
from adconnect.core.types import HttpMethod, Outcome, RequestDescriptor
from adconnect.ui.notifier import UINotifier
from adconnect.utils.facade_config import FacadeConfig
from adconnect.utils.loguru_setup import logger
from adconnect.utils.network.reachability import DefaultRouteReachability, ReachabilityChecker
from adconnect.utils.network.transport import HttpxTransport, Transport

__all__ = [
    "ConnectionManager",
]


class ConnectionManager:
    """Request building, query encoding, dispatch and JSON decoding in one place.

    Args:
        dispatcher: Dispatcher used for every request
        config: Settings; the request timeout comes from here
    """

    generate_string = staticmethod(query_codec.generate_string)
    generate_query_string = staticmethod(query_codec.generate_query_string)
    add_url_encoding = staticmethod(query_codec.add_url_encoding)
    remove_url_encoding = staticmethod(query_codec.remove_url_encoding)
    parse_json_data = staticmethod(parse_json_data)

    def __init__(self, dispatcher: Dispatcher, config: FacadeConfig | None = None) -> None:
        self.dispatcher = dispatcher
        self.config = config if config is not None else FacadeConfig()

    @classmethod
    def create(
        cls,
        config: FacadeConfig | None = None,
        *,
        transport: Transport | None = None,
        reachability: ReachabilityChecker | None = None,
        notifier: UINotifier | None = None,
    ) -> ConnectionManager:
        """Wire a manager from configuration, creating whatever is not supplied.

        A supplied ``config`` also sets the package log level from
        ``config.log_level``.
        """
        if config is None:
            config = FacadeConfig()
        else:
            logger.configure_level(config.log_level)
        if transport is None:
            transport = HttpxTransport(config=config)
        if reachability is None:
            reachability = DefaultRouteReachability(config.probe_host, config.probe_port)
        logger.debug(f"Creating ConnectionManager with {config.to_dict()}")
        return cls(Dispatcher(transport, reachability, notifier), config)

    async def __aenter__(self) -> ConnectionManager:
        return self

    async def __aexit__(self, _exc_type: type | None, _exc_val: BaseException | None, _exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the transport if it supports closing."""
        aclose = getattr(self.dispatcher.transport, "aclose", None)
        if aclose is not None:
            await aclose()

    def generate_request(
        self,
        url_string: str,
        dictionary_of_headers: Mapping[str, str] | None = None,
        post_data: bytes | None = None,
        request_type: HttpMethod | str = HttpMethod.GET,
    ) -> RequestDescriptor:
        """Build a request using the configured timeout.

        Raises:
            InvalidURLError: If ``url_string`` is not a valid absolute http(s) URL
        """
        return build_request(
            url_string,
            headers=dictionary_of_headers,
            body=post_data,
            method=request_type,
            timeout_seconds=self.config.timeout_seconds,
        )

    async def dispatch(self, request: RequestDescriptor) -> Outcome:
        return await self.dispatcher.dispatch(request)

    async def dispatch_json(self, request: RequestDescriptor) -> Outcome:
        return await self.dispatcher.dispatch_json(request)

    def get_data_from_server(self, request: RequestDescriptor, handler: OutcomeHandler) -> DispatchTask:
        """Dispatch ``request`` and pass the raw outcome to ``handler``."""
        return self.dispatcher.submit(request, handler)

    def invoke_request_for_json(self, request: RequestDescriptor, handler: OutcomeHandler) -> DispatchTask:
        """Dispatch ``request`` and pass the JSON-decoded outcome to ``handler``."""
        return self.dispatcher.submit(request, handler, json=True)

    def upload_photo(self, request: RequestDescriptor, image: bytes, handler: OutcomeHandler) -> DispatchTask:
        """POST ``image`` as multipart/form-data and pass the raw outcome to ``handler``.

        Raises:
            ValueError: If ``image`` is empty or not bytes
        """
        return self.dispatcher.submit(build_photo_upload(request, image), handler)

    def is_internet_available(self) -> bool:
        """Run the dispatcher's reachability check once."""
        return self.dispatcher.is_available()

    def show_indicator(self) -> None:
        self.dispatcher.notify("notify_indicator", True)

    def hide_indicator(self) -> None:
        self.dispatcher.notify("notify_indicator", False)
