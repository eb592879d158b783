"""Engine configuration domain entities.

EngineConfig is the frozen result of ConfigBuilder.finalize() and the only
input to artifact provisioning and process start.
"""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Tuple, Union

from weaviate_embedded.domain.exceptions import (
    EmbeddedEngineError,
    InvalidAddressError,
    InvalidVersionError,
)
from weaviate_embedded.domain.image import ImageTarget
from weaviate_embedded.domain.platform import PlatformIdentifier
from weaviate_embedded.domain.version import LATEST

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
AddressInput = Union[str, "BindAddress", Tuple[Union[str, IPAddress], int], IPAddress]


def validate_port(port: object) -> int:
    """Return ``port`` if it is an int in 0..65535, else raise InvalidAddressError."""
    if isinstance(port, bool) or not isinstance(port, int):
        raise InvalidAddressError(f"port must be an integer, got: {port!r}", value=port)
    if not 0 <= port <= 65535:
        raise InvalidAddressError(
            f"port must be between 0 and 65535, got: {port}", value=port
        )
    return port


@dataclass(frozen=True)
class BindAddress:
    """IP address and port the engine's REST API listens on.

    Port 0 means "pick a free port" and is replaced during port resolution.

    Attributes:
        host: Literal IPv4 or IPv6 address.
        port: TCP port (0-65535).
    """

    host: str
    port: int

    def __post_init__(self) -> None:
        """Validate host and port."""
        try:
            ipaddress.ip_address(self.host)
        except ValueError as e:
            raise InvalidAddressError(
                f"host must be a literal IP address, got: {self.host!r}",
                value=self.host,
                original_error=e,
            ) from e
        validate_port(self.port)

    @classmethod
    def parse(cls, text: str, default_port: int) -> BindAddress:
        """Parse 'ip:port', '[ipv6]:port' or a bare IP.

        A bare IP inherits ``default_port``.

        Raises:
            InvalidAddressError: If the text is not a valid address.
        """
        value = text.strip()
        try:
            return cls(str(ipaddress.ip_address(value)), default_port)
        except ValueError:
            pass

        if value.startswith("["):
            host, sep, port_text = value[1:].partition("]")
            if not sep or (port_text and not port_text.startswith(":")):
                raise InvalidAddressError(f"Invalid address: {text!r}", value=text)
            if not port_text:
                return cls(host, default_port)
            port_text = port_text[1:]
        else:
            host, sep, port_text = value.rpartition(":")
            if not sep:
                raise InvalidAddressError(f"Invalid address: {text!r}", value=text)

        try:
            port = int(port_text)
        except ValueError as e:
            raise InvalidAddressError(
                f"Invalid port in address: {text!r}", value=text, original_error=e
            ) from e
        return cls(host, port)

    @classmethod
    def from_value(cls, value: AddressInput, default_port: int) -> BindAddress:
        """Build a BindAddress from any accepted input form.

        Accepted forms: an 'ip:port' string, a bare IP string or
        ``ipaddress`` object (inherits ``default_port``), an ``(ip, port)``
        tuple, or a BindAddress.
        """
        if isinstance(value, BindAddress):
            return value
        if isinstance(value, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
            return cls(str(value), default_port)
        if isinstance(value, tuple):
            if len(value) != 2:
                raise InvalidAddressError(
                    f"Address tuple must be (ip, port), got: {value!r}", value=value
                )
            host, port = value
            return cls(str(host), validate_port(port))
        if isinstance(value, str):
            return cls.parse(value, default_port)
        raise InvalidAddressError(f"Unsupported address value: {value!r}", value=value)

    @property
    def is_ipv6(self) -> bool:
        return ipaddress.ip_address(self.host).version == 6

    def with_port(self, port: int) -> BindAddress:
        return replace(self, port=port)

    def __str__(self) -> str:
        if self.is_ipv6:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class EngineConfig:
    """Frozen engine configuration.

    Immutable value object produced once per provisioning request. Never
    mutated after creation.

    Attributes:
        version: Normalized release tag, e.g. 'v1.21.1'. Never 'latest'.
        image: Where the engine archive comes from.
        platform: Platform the artifact is built for.
        bind_address: REST address the engine listens on.
        grpc_port: Secondary (gRPC) port.
        binary_dir: Absolute directory installed binaries are cached in.
        data_dir: Absolute directory the engine persists data to.
        extras: Extra environment overrides as unique (key, value) pairs.
            Uses tuple for immutability.
        startup_timeout: Seconds to wait for the engine to accept connections.
        shutdown_grace_period: Seconds between terminate and kill on stop.
    """

    version: str
    image: ImageTarget
    platform: PlatformIdentifier
    bind_address: BindAddress
    grpc_port: int
    binary_dir: Path
    data_dir: Path
    extras: tuple[tuple[str, str], ...] = ()
    startup_timeout: float = 30.0
    shutdown_grace_period: float = 10.0

    def __post_init__(self) -> None:
        """Validate configuration."""
        self._validate_version()
        self._validate_ports()
        self._validate_directories()
        self._validate_extras()
        self._validate_timeouts()

    def _validate_version(self) -> None:
        if not self.version or self.version == LATEST:
            raise InvalidVersionError(
                f"version must be a resolved tag, got: {self.version!r}",
                value=self.version,
            )

    def _validate_ports(self) -> None:
        validate_port(self.grpc_port)
        if self.bind_address.port == 0 or self.grpc_port == 0:
            raise InvalidAddressError(
                "ports must be resolved before building the configuration",
                value=(self.bind_address.port, self.grpc_port),
            )
        if self.bind_address.port == self.grpc_port:
            raise InvalidAddressError(
                f"REST port and gRPC port must differ, both are {self.grpc_port}",
                value=self.grpc_port,
            )

    def _validate_directories(self) -> None:
        for name, path in (("binary_dir", self.binary_dir), ("data_dir", self.data_dir)):
            if not path.is_absolute():
                raise EmbeddedEngineError(f"{name} must be absolute, got: {path}")

    def _validate_extras(self) -> None:
        keys = [key for key, _ in self.extras]
        duplicates = sorted({key for key in keys if keys.count(key) > 1})
        if duplicates:
            raise EmbeddedEngineError(f"extras keys must be unique, duplicated: {duplicates}")

    def _validate_timeouts(self) -> None:
        if self.startup_timeout <= 0:
            raise EmbeddedEngineError(
                f"startup_timeout must be positive, got: {self.startup_timeout}"
            )
        if self.shutdown_grace_period < 0:
            raise EmbeddedEngineError(
                f"shutdown_grace_period must be non-negative, got: {self.shutdown_grace_period}"
            )

    @property
    def url(self) -> str:
        """Base URL of the engine's REST API."""
        return f"http://{self.bind_address}"

    @property
    def extras_dict(self) -> dict[str, str]:
        return dict(self.extras)
