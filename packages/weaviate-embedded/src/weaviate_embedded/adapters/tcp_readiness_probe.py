"""TCP connect implementation of the ReadinessProbePort."""

from __future__ import annotations

import socket

from weaviate_embedded.adapters.ports import ReadinessProbePort
from weaviate_embedded.domain.config import BindAddress


class TcpReadinessProbe:
    """Adapter that reports readiness once a TCP connection succeeds.

    A wildcard bind address (0.0.0.0 or ::) is probed through the matching
    loopback address, since connecting to the wildcard itself is not portable.

    Attributes:
        timeout: Per-attempt connect timeout in seconds.
    """

    def __init__(self, timeout: float = 1.0) -> None:
        self.timeout = timeout

    def is_accepting(self, address: BindAddress) -> bool:
        host = address.host
        if host == "0.0.0.0":
            host = "127.0.0.1"
        elif host == "::":
            host = "::1"

        try:
            with socket.create_connection((host, address.port), timeout=self.timeout):
                return True
        except OSError:
            return False


# Runtime protocol check
assert isinstance(TcpReadinessProbe(), ReadinessProbePort)
