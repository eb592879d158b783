"""Factory functions wiring use cases to their production adapters.

Handles optional dependency imports gracefully.
"""

from __future__ import annotations

import os

import httpx

from weaviate_embedded.adapters.host_detector import OsHostDetector
from weaviate_embedded.adapters.httpx_artifact_acquirer import HttpxArtifactAcquirer
from weaviate_embedded.adapters.httpx_release_registry import HttpxReleaseRegistry
from weaviate_embedded.adapters.metrics_port import MetricsPort
from weaviate_embedded.adapters.subprocess_process_runner import SubprocessProcessRunner
from weaviate_embedded.adapters.tcp_readiness_probe import TcpReadinessProbe
from weaviate_embedded.domain.config import EngineConfig
from weaviate_embedded.domain.defaults import DEFAULTS, EngineDefaults
from weaviate_embedded.usecases.artifact_provisioner import ArtifactProvisioner
from weaviate_embedded.usecases.config_builder import BuildPipeline
from weaviate_embedded.usecases.directory_provisioner import DirectoryProvisioner
from weaviate_embedded.usecases.embedded_engine import EmbeddedEngine
from weaviate_embedded.usecases.image_resolver import ImageResolver
from weaviate_embedded.usecases.port_allocator import PortAllocator
from weaviate_embedded.usecases.process_lifecycle import ProcessLifecycle
from weaviate_embedded.usecases.system_resolver import SystemResolver
from weaviate_embedded.usecases.version_resolver import VersionResolver

GITHUB_TOKEN_ENV = "GITHUB_TOKEN"


class PrometheusNotInstalledError(ImportError):
    """Raised when Prometheus metrics are requested but not installed.

    Install with: pip install weaviate-embedded[metrics]
    """

    def __init__(self) -> None:
        super().__init__(
            "prometheus-client is not installed. "
            "Install with: pip install weaviate-embedded[metrics]"
        )


def create_build_pipeline(
    defaults: EngineDefaults = DEFAULTS,
    client: httpx.Client | None = None,
) -> BuildPipeline:
    """Create the resolvers ConfigBuilder.finalize() runs.

    The release registry reads an optional token from GITHUB_TOKEN to lift
    the anonymous API rate limit.

    Args:
        defaults: Defaults shared by every resolver.
        client: Optional httpx.Client for the release registry.

    Returns:
        BuildPipeline backed by the host, GitHub and the local filesystem.
    """
    registry = HttpxReleaseRegistry(
        owner=defaults.registry_owner,
        repo=defaults.registry_repo,
        client=client,
        token=os.environ.get(GITHUB_TOKEN_ENV) or None,
    )
    return BuildPipeline(
        defaults=defaults,
        system_resolver=SystemResolver(OsHostDetector()),
        version_resolver=VersionResolver(registry),
        image_resolver=ImageResolver(defaults),
        directory_provisioner=DirectoryProvisioner(defaults),
        port_allocator=PortAllocator(defaults),
    )


def create_metrics_adapter(prefix: str = "weaviate_embedded") -> MetricsPort:
    """Create a PrometheusMetricsAdapter.

    Raises:
        PrometheusNotInstalledError: If prometheus-client is not installed.
    """
    try:
        from weaviate_embedded.adapters.prometheus_metrics import PrometheusMetricsAdapter

        return PrometheusMetricsAdapter(prefix=prefix)
    except ImportError as e:
        raise PrometheusNotInstalledError() from e


def create_embedded_engine(
    config: EngineConfig,
    defaults: EngineDefaults = DEFAULTS,
    metrics: MetricsPort | None = None,
    client: httpx.Client | None = None,
    inherit_output: bool = True,
) -> EmbeddedEngine:
    """Create an EmbeddedEngine for ``config`` with production adapters.

    Args:
        config: Frozen engine configuration.
        defaults: Source of the product name and readiness poll interval.
        metrics: Optional metrics port.
        client: Optional httpx.Client used for artifact downloads.
        inherit_output: Whether the engine writes to this process's output.

    Returns:
        An EmbeddedEngine in the UNPROVISIONED state.
    """
    port_allocator = PortAllocator(defaults)
    provisioner = ArtifactProvisioner(
        HttpxArtifactAcquirer(client=client),
        defaults=defaults,
        metrics=metrics,
    )
    lifecycle = ProcessLifecycle(
        runner=SubprocessProcessRunner(inherit_output=inherit_output),
        probe=TcpReadinessProbe(),
        port_allocator=port_allocator,
        poll_interval=defaults.poll_interval,
    )
    return EmbeddedEngine(config, provisioner, lifecycle, metrics=metrics)
