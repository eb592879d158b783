"""Provision and run an embedded Weaviate engine.

Typical use:

    from weaviate_embedded import ConfigBuilder, create_embedded_engine

    config = ConfigBuilder().bind_address("127.0.0.1:8080").latest_version().finalize()
    with create_embedded_engine(config) as engine:
        ...  # talk to engine.url
"""

from weaviate_embedded.domain.config import BindAddress, EngineConfig
from weaviate_embedded.domain.defaults import DEFAULTS, EngineDefaults
from weaviate_embedded.domain.exceptions import (
    AcquisitionError,
    ConfigFileError,
    DirectoryCreateError,
    EmbeddedEngineError,
    ImageRejection,
    InvalidAddressError,
    InvalidImageError,
    InvalidVersionError,
    PathResolutionError,
    ProcessStartError,
    ProcessStartTimeoutError,
    SocketError,
    UnsupportedSystemError,
    VersionFetchError,
)
from weaviate_embedded.domain.image import LocalImage, RemoteImage
from weaviate_embedded.domain.lifecycle import EngineState, ServiceHandle
from weaviate_embedded.domain.platform import PlatformIdentifier
from weaviate_embedded.domain.version import LATEST, EngineVersion
from weaviate_embedded.factories import (
    PrometheusNotInstalledError,
    create_build_pipeline,
    create_embedded_engine,
    create_metrics_adapter,
)
from weaviate_embedded.usecases.config_builder import ConfigBuilder, VersionedConfigBuilder
from weaviate_embedded.usecases.config_parser import ConfigParser
from weaviate_embedded.usecases.embedded_engine import EmbeddedEngine

__version__ = "0.1.0"

__all__ = [
    "AcquisitionError",
    "BindAddress",
    "ConfigBuilder",
    "ConfigFileError",
    "ConfigParser",
    "DEFAULTS",
    "DirectoryCreateError",
    "EmbeddedEngine",
    "EmbeddedEngineError",
    "EngineConfig",
    "EngineDefaults",
    "EngineState",
    "EngineVersion",
    "ImageRejection",
    "InvalidAddressError",
    "InvalidImageError",
    "InvalidVersionError",
    "LATEST",
    "LocalImage",
    "PathResolutionError",
    "PlatformIdentifier",
    "ProcessStartError",
    "ProcessStartTimeoutError",
    "PrometheusNotInstalledError",
    "RemoteImage",
    "ServiceHandle",
    "SocketError",
    "UnsupportedSystemError",
    "VersionFetchError",
    "VersionedConfigBuilder",
    "__version__",
    "create_build_pipeline",
    "create_embedded_engine",
    "create_metrics_adapter",
]
