"""adconnect - a small HTTP request/response façade.

Build a request, dispatch it asynchronously and get back exactly one outcome
value describing what happened. Nothing is raised across the asynchronous
boundary: offline networks, transport failures, non-200 statuses and JSON
decoding problems all come back as outcomes.

Quick Start:
    >>> import asyncio
    >>> from adconnect import ConnectionManager, SuccessMap
    >>>
    >>> async def main():
    ...     async with ConnectionManager.create() as manager:
    ...         request = manager.generate_request("https://httpbin.org/json")
    ...         outcome = await manager.dispatch_json(request)
    ...         if isinstance(outcome, SuccessMap):
    ...             print(outcome.mapping)
    >>>
    >>> asyncio.run(main())
"""

__version__ = "0.1.0"

from typing import Any

_CORE_EXPORTS = {
    "Cancelled",
    "ConnectionManager",
    "DispatchTask",
    "Dispatcher",
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
}


# Lazy imports keep `import adconnect` cheap and free of httpx until needed
def __getattr__(name: str) -> Any:
    """Lazy import for main package exports."""
    if name in _CORE_EXPORTS:
        from . import core

        return getattr(core, name)
    if name == "build_request":
        from .core.request_builder import build_request

        return build_request
    if name == "parse_json_data":
        from .core.json_decoder import parse_json_data

        return parse_json_data
    if name in ("InvalidURLError", "EncodingError", "DecodingError", "FacadeError"):
        from .core import exceptions

        return getattr(exceptions, name)
    if name == "FacadeConfig":
        from .utils.facade_config import FacadeConfig

        return FacadeConfig
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


__all__ = [
    "Cancelled",
    "ConnectionManager",
    "DecodingError",
    "DispatchTask",
    "Dispatcher",
    "EncodingError",
    "FacadeConfig",
    "FacadeError",
    "HttpMethod",
    "HttpStatusError",
    "InvalidURLError",
    "JsonDecodeError",
    "Offline",
    "Outcome",
    "RequestDescriptor",
    "SuccessBytes",
    "SuccessList",
    "SuccessMap",
    "TransportError",
    "build_request",
    "parse_json_data",
]
