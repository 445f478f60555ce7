#!/usr/bin/env python
"""Network utilities subpackage.

This subpackage provides:
- HTTP client factory functions
- The transport seam between the dispatcher and httpx
- Default-route reachability checks
"""

from adconnect.utils.network.client_factory import (
    Client,
    create_client,
    safely_close_client,
)
from adconnect.utils.network.exceptions import TransportFailure
from adconnect.utils.network.reachability import (
    DefaultRouteReachability,
    ReachabilityChecker,
    is_internet_available,
)
from adconnect.utils.network.transport import (
    HttpxTransport,
    Transport,
    TransportResponse,
)

__all__ = [
    "Client",
    "DefaultRouteReachability",
    "HttpxTransport",
    "ReachabilityChecker",
    "Transport",
    "TransportFailure",
    "TransportResponse",
    "create_client",
    "is_internet_available",
    "safely_close_client",
]
