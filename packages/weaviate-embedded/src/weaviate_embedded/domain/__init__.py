"""Domain layer: Entities with zero external dependencies."""

from weaviate_embedded.domain.artifact import InstalledArtifact
from weaviate_embedded.domain.config import BindAddress, EngineConfig
from weaviate_embedded.domain.defaults import DEFAULTS, EngineDefaults
from weaviate_embedded.domain.exceptions import EmbeddedEngineError, ImageRejection
from weaviate_embedded.domain.image import ImageTarget, LocalImage, RemoteImage
from weaviate_embedded.domain.lifecycle import EngineState, ServiceHandle
from weaviate_embedded.domain.platform import HostSystem, PlatformIdentifier
from weaviate_embedded.domain.version import LATEST, EngineVersion

__all__ = [
    "BindAddress",
    "DEFAULTS",
    "EmbeddedEngineError",
    "EngineConfig",
    "EngineDefaults",
    "EngineState",
    "EngineVersion",
    "HostSystem",
    "ImageRejection",
    "ImageTarget",
    "InstalledArtifact",
    "LATEST",
    "LocalImage",
    "PlatformIdentifier",
    "RemoteImage",
    "ServiceHandle",
]
