"""Core request/response façade: descriptors, outcomes, dispatch and decoding."""

from .connection_manager import ConnectionManager
from .dispatcher import Dispatcher, DispatchTask
from .types import (
    Cancelled,
    HttpMethod,
    HttpStatusError,
    JsonDecodeError,
    Offline,
    Outcome,
    RequestDescriptor,
    SuccessBytes,
    SuccessList,
    SuccessMap,
    TransportError,
)

__all__ = [
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
]
