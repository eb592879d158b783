"""Default values for provisioning the embedded engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineDefaults:
    """Every built-in default in one immutable object.

    Attributes:
        product: Artifact product name used in archive and binary names.
        release_base: Base URL that release archives are served from.
        registry_owner: Owner of the release repository.
        registry_repo: Name of the release repository.
        version: Tag used by ``ConfigBuilder.default_version()``.
        host: Default bind host (loopback).
        rest_port: Default REST port.
        grpc_port: Default gRPC (secondary) port.
        binary_dir: Home-relative cache directory for installed binaries.
        data_dir: Home-relative directory for engine data.
        startup_timeout: Seconds to wait for the engine to accept connections.
        shutdown_grace_period: Seconds between terminate and kill on stop.
        poll_interval: Seconds between readiness probes.
    """

    product: str = "weaviate"
    release_base: str = "https://github.com/weaviate/weaviate/releases/download"
    registry_owner: str = "weaviate"
    registry_repo: str = "weaviate"
    version: str = "v1.21.1"
    host: str = "127.0.0.1"
    rest_port: int = 8079
    grpc_port: int = 50060
    binary_dir: str = "~/.cache/weaviate-embedded"
    data_dir: str = "~/.local/share/weaviate"
    startup_timeout: float = 30.0
    shutdown_grace_period: float = 10.0
    poll_interval: float = 0.25


DEFAULTS = EngineDefaults()
