#!/usr/bin/env python
"""Point-in-time network reachability checks.

``DefaultRouteReachability`` asks the operating system whether a default route
exists by connecting a UDP socket toward a probe address. Connecting a UDP
socket only performs route selection; no packet leaves the machine.

The result is never cached. Connectivity can change at any moment, so check
immediately before use.
"""

from __future__ import annotations

import ipaddress
import socket
from typing import Protocol

from adconnect.utils.config import DEFAULT_PROBE_HOST, DEFAULT_PROBE_PORT
from adconnect.utils.loguru_setup import logger

__all__ = [
    "DefaultRouteReachability",
    "ReachabilityChecker",
    "is_internet_available",
]


class ReachabilityChecker(Protocol):
    """Reports whether outbound connectivity is currently available."""

    def is_available(self) -> bool: ...


class DefaultRouteReachability:
    """Reachability based on the kernel's route to a probe address.

    Reachable means the route lookup succeeds. An additional connection step is
    needed when the kernel picks a route but cannot assign a usable source
    address (unspecified address). Only reachable and no extra step counts as
    available; any failure to determine the state counts as unavailable.
    """

    def __init__(self, probe_host: str = DEFAULT_PROBE_HOST, probe_port: int = DEFAULT_PROBE_PORT) -> None:
        self.probe_host = probe_host
        self.probe_port = probe_port

    def is_available(self) -> bool:
        try:
            family = socket.AF_INET6 if ipaddress.ip_address(self.probe_host).version == 6 else socket.AF_INET
        except ValueError:
            logger.warning(f"Reachability probe host {self.probe_host!r} is not an IP address")
            return False

        try:
            with socket.socket(family, socket.SOCK_DGRAM) as sock:
                sock.connect((self.probe_host, self.probe_port))
                local_address = sock.getsockname()[0]
            needs_connection = ipaddress.ip_address(local_address.split("%", 1)[0]).is_unspecified
        except (OSError, ValueError) as e:
            logger.debug(f"No route to {self.probe_host}: {e}")
            return False

        if needs_connection:
            logger.debug(f"Route to {self.probe_host} has no usable local address")
        return not needs_connection


def is_internet_available(probe_host: str = DEFAULT_PROBE_HOST, probe_port: int = DEFAULT_PROBE_PORT) -> bool:
    """Check the default route once."""
    return DefaultRouteReachability(probe_host, probe_port).is_available()
