"""Interface adapters: host detection, release registry, artifacts and processes."""

from weaviate_embedded.adapters.host_detector import OsHostDetector
from weaviate_embedded.adapters.httpx_artifact_acquirer import HttpxArtifactAcquirer
from weaviate_embedded.adapters.httpx_release_registry import HttpxReleaseRegistry
from weaviate_embedded.adapters.metrics_port import MetricsPort, NoOpMetricsAdapter
from weaviate_embedded.adapters.ports import (
    ArtifactAcquirerPort,
    HostDetectorPort,
    ProcessRunnerPort,
    ReadinessProbePort,
    RealTimeProvider,
    ReleaseInfo,
    ReleaseRegistryPort,
    RunningProcess,
    TimeProvider,
)
from weaviate_embedded.adapters.subprocess_process_runner import SubprocessProcessRunner
from weaviate_embedded.adapters.tcp_readiness_probe import TcpReadinessProbe

__all__ = [
    "ArtifactAcquirerPort",
    "HostDetectorPort",
    "HttpxArtifactAcquirer",
    "HttpxReleaseRegistry",
    "MetricsPort",
    "NoOpMetricsAdapter",
    "OsHostDetector",
    "ProcessRunnerPort",
    "ReadinessProbePort",
    "RealTimeProvider",
    "ReleaseInfo",
    "ReleaseRegistryPort",
    "RunningProcess",
    "SubprocessProcessRunner",
    "TcpReadinessProbe",
    "TimeProvider",
]
