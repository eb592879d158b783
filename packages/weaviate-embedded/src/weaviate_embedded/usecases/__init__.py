"""Use cases: Application logic layer."""

from weaviate_embedded.usecases.artifact_provisioner import ArtifactProvisioner
from weaviate_embedded.usecases.config_builder import (
    BuilderFields,
    BuildPipeline,
    ConfigBuilder,
    VersionedConfigBuilder,
)
from weaviate_embedded.usecases.config_parser import ConfigParser
from weaviate_embedded.usecases.directory_provisioner import (
    DirectoryProvisioner,
    EngineDirectories,
)
from weaviate_embedded.usecases.embedded_engine import EmbeddedEngine
from weaviate_embedded.usecases.image_resolver import ImageResolver
from weaviate_embedded.usecases.port_allocator import PortAllocator
from weaviate_embedded.usecases.process_lifecycle import ProcessLifecycle
from weaviate_embedded.usecases.system_resolver import SUPPORTED_SYSTEMS, SystemResolver
from weaviate_embedded.usecases.version_resolver import VersionResolver

__all__ = [
    "ArtifactProvisioner",
    "BuilderFields",
    "BuildPipeline",
    "ConfigBuilder",
    "ConfigParser",
    "DirectoryProvisioner",
    "EmbeddedEngine",
    "EngineDirectories",
    "ImageResolver",
    "PortAllocator",
    "ProcessLifecycle",
    "SUPPORTED_SYSTEMS",
    "SystemResolver",
    "VersionResolver",
]
