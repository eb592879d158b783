"""Port allocator use case: resolve, probe and check engine ports."""

from __future__ import annotations

import errno
import logging
import socket

from weaviate_embedded.domain.config import AddressInput, BindAddress, validate_port
from weaviate_embedded.domain.defaults import DEFAULTS, EngineDefaults
from weaviate_embedded.domain.exceptions import InvalidAddressError, SocketError

logger = logging.getLogger(__name__)

# OS errors that mean "someone else has this address", as opposed to a
# failure of the probe itself.
UNAVAILABLE_ERRNOS = frozenset(
    code
    for code in (
        errno.EADDRINUSE,
        errno.ECONNREFUSED,
        getattr(errno, "WSAEADDRINUSE", None),
        getattr(errno, "WSAECONNREFUSED", None),
    )
    if code is not None
)


class PortAllocator:
    """Use case for the engine's REST address and gRPC port.

    Port 0 on either endpoint is replaced by an OS-assigned free port. The
    probe releases the port before returning it, so another process can
    still take it before the engine binds; this race is not prevented.
    """

    def __init__(self, defaults: EngineDefaults = DEFAULTS) -> None:
        self._defaults = defaults

    def resolve(
        self,
        bind: AddressInput | None = None,
        grpc_port: int | None = None,
    ) -> tuple[BindAddress, int]:
        """Resolve the REST bind address and gRPC port.

        Args:
            bind: Requested REST address, or None for the default loopback
                 address and REST port.
            grpc_port: Requested gRPC port, or None for the default.

        Returns:
            (bind_address, grpc_port) with no zero ports.

        Raises:
            InvalidAddressError: If the address is malformed or both
                endpoints end up on the same port.
            SocketError: If probing for a free port fails.
        """
        if bind is None:
            address = BindAddress(self._defaults.host, self._defaults.rest_port)
        else:
            address = BindAddress.from_value(bind, self._defaults.rest_port)
        if address.port == 0:
            address = address.with_port(self.probe_free_port(address.host))

        grpc = self._defaults.grpc_port if grpc_port is None else grpc_port
        grpc = validate_port(grpc)
        if grpc == 0:
            grpc = self.probe_free_port(address.host)
            if grpc == address.port:
                grpc = self.probe_free_port(address.host)

        if grpc == address.port:
            raise InvalidAddressError(
                f"REST port and gRPC port must differ, both are {grpc}", value=grpc
            )
        logger.debug("Resolved ports: rest=%s grpc=%d", address, grpc)
        return address, grpc

    def probe_free_port(self, host: str) -> int:
        """Return a port the OS reports as free on ``host``.

        Raises:
            SocketError: If the ephemeral bind fails.
        """
        family = self._family(host)
        try:
            with socket.socket(family, socket.SOCK_STREAM) as sock:
                sock.bind((host, 0))
                return sock.getsockname()[1]
        except OSError as e:
            raise SocketError(
                f"Cannot probe a free port on {host}: {e}", value=host, original_error=e
            ) from e

    def can_bind(self, address: BindAddress) -> bool:
        """Return whether ``address`` can be bound right now.

        Returns:
            True if the bind succeeded (the socket is released at once),
            False if the address is in use or the connection was refused.

        Raises:
            SocketError: For any other OS failure, e.g. permission denied.
        """
        family = self._family(address.host)
        try:
            with socket.socket(family, socket.SOCK_STREAM) as sock:
                sock.bind((address.host, address.port))
        except OSError as e:
            if e.errno in UNAVAILABLE_ERRNOS:
                logger.debug("Address %s is unavailable: %s", address, e)
                return False
            raise SocketError(
                f"Cannot bind {address}: {e}", value=str(address), original_error=e
            ) from e
        return True

    @staticmethod
    def _family(host: str) -> socket.AddressFamily:
        return socket.AF_INET6 if ":" in host else socket.AF_INET
