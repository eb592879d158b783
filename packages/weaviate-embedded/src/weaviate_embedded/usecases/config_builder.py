"""Staged configuration builder.

ConfigBuilder collects requested settings; only VersionedConfigBuilder,
obtained by choosing a version, can be finalized into an EngineConfig:

    >>> config = (
    ...     ConfigBuilder()
    ...     .bind_address("127.0.0.1:8080")
    ...     .version("v1.21.1")
    ...     .finalize()
    ... )  # doctest: +SKIP

Builders are immutable. Every setter returns a new builder and overwrites
the previous value of its field.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Mapping, TypeVar

from weaviate_embedded.domain.config import AddressInput, BindAddress, EngineConfig, validate_port
from weaviate_embedded.domain.defaults import DEFAULTS, EngineDefaults
from weaviate_embedded.domain.exceptions import InvalidVersionError, VersionFetchError
from weaviate_embedded.domain.image import ImageTarget, LocalImage, RemoteImage
from weaviate_embedded.domain.platform import PlatformIdentifier
from weaviate_embedded.domain.version import LATEST, EngineVersion

if TYPE_CHECKING:
    from weaviate_embedded.usecases.directory_provisioner import DirectoryProvisioner
    from weaviate_embedded.usecases.image_resolver import ImageResolver
    from weaviate_embedded.usecases.port_allocator import PortAllocator
    from weaviate_embedded.usecases.system_resolver import SystemResolver
    from weaviate_embedded.usecases.version_resolver import VersionResolver

logger = logging.getLogger(__name__)

# Version request meaning "read the tag from the image target's name"
FROM_TARGET = "from-target"


@dataclass(frozen=True)
class BuildPipeline:
    """Resolvers run by finalize(), in order.

    Attributes:
        defaults: Defaults shared by every resolver.
        system_resolver: Resolves the platform.
        version_resolver: Resolves the release tag.
        image_resolver: Validates or synthesizes the artifact target.
        directory_provisioner: Resolves and creates directories.
        port_allocator: Resolves the REST address and gRPC port.
    """

    defaults: EngineDefaults
    system_resolver: SystemResolver
    version_resolver: VersionResolver
    image_resolver: ImageResolver
    directory_provisioner: DirectoryProvisioner
    port_allocator: PortAllocator


@dataclass(frozen=True)
class BuilderFields:
    """Settings requested so far. None means "use the default".

    Attributes:
        version: Requested tag, 'latest' or FROM_TARGET.
        image: Requested artifact target.
        platform: Platform override.
        bind_address: Parsed REST address.
        grpc_port: gRPC port (0 probes for a free port).
        binary_dir: Binary cache directory override.
        data_dir: Data directory override.
        extras: Extra environment overrides.
        verify_release: Whether an explicit tag is confirmed upstream.
        startup_timeout: Readiness timeout override in seconds.
        shutdown_grace_period: Grace period override in seconds.
    """

    version: str | None = None
    image: ImageTarget | None = None
    platform: PlatformIdentifier | str | None = None
    bind_address: BindAddress | None = None
    grpc_port: int | None = None
    binary_dir: Path | None = None
    data_dir: Path | None = None
    extras: tuple[tuple[str, str], ...] = field(default=())
    verify_release: bool = False
    startup_timeout: float | None = None
    shutdown_grace_period: float | None = None


_B = TypeVar("_B", bound="_BuilderBase")


class _BuilderBase:
    """Setters shared by both builder stages."""

    def __init__(
        self,
        pipeline: BuildPipeline | None = None,
        fields: BuilderFields | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            pipeline: Resolvers used by finalize(). Defaults to the
                     production pipeline, created on first finalize.
            fields: Settings to start from.
        """
        self._pipeline = pipeline
        self._fields = fields if fields is not None else BuilderFields()

    @property
    def fields(self) -> BuilderFields:
        """Settings requested so far."""
        return self._fields

    @property
    def defaults(self) -> EngineDefaults:
        return self._pipeline.defaults if self._pipeline is not None else DEFAULTS

    def _with(self: _B, **changes: object) -> _B:
        return type(self)(self._pipeline, replace(self._fields, **changes))

    def _versioned(self, tag: str) -> VersionedConfigBuilder:
        return VersionedConfigBuilder(self._pipeline, replace(self._fields, version=tag))

    def version(self, tag: str) -> VersionedConfigBuilder:
        """Request an explicit tag such as 'v1.21.1' or '1.21.1', or 'latest'.

        The tag is validated by finalize().
        """
        return self._versioned(str(tag))

    def latest_version(self) -> VersionedConfigBuilder:
        """Request the newest published release (one registry round trip)."""
        return self._versioned(LATEST)

    def default_version(self) -> VersionedConfigBuilder:
        """Request the built-in default version."""
        return self._versioned(self.defaults.version)

    def version_from_target(self) -> VersionedConfigBuilder:
        """Take the version from the image target's file name.

        finalize() looks for a tag such as 'v1.21.1' in the name of the
        target set with target_file() or target_url(), e.g.
        'weaviate-v1.21.1-linux-amd64.tar.gz', and raises VersionFetchError
        if there is no target or its name holds no tag.
        """
        return self._versioned(FROM_TARGET)

    def target_file(self: _B, path: Path | str) -> _B:
        """Install from a local archive. Replaces any target URL."""
        return self._with(image=LocalImage(Path(path).expanduser()))

    def target_url(self: _B, url: str) -> _B:
        """Install from an archive URL. Replaces any target file."""
        return self._with(image=RemoteImage(str(url)))

    def system_type(self: _B, platform: PlatformIdentifier | str) -> _B:
        """Override the platform instead of detecting the host."""
        return self._with(platform=platform)

    def bind_address(self: _B, address: AddressInput) -> _B:
        """Set the REST address.

        Accepts 'ip:port', '[ipv6]:port', a bare IP or ``ipaddress`` object
        (keeps the default REST port), an ``(ip, port)`` tuple or a
        BindAddress.

        Raises:
            InvalidAddressError: If the address is malformed.
        """
        parsed = BindAddress.from_value(address, self.defaults.rest_port)
        return self._with(bind_address=parsed)

    def grpc_port(self: _B, port: int) -> _B:
        """Set the secondary (gRPC) port. 0 picks a free port.

        Raises:
            InvalidAddressError: If the port is out of range.
        """
        return self._with(grpc_port=validate_port(port))

    def binary_directory(self: _B, path: Path | str) -> _B:
        return self._with(binary_dir=Path(path))

    def data_directory(self: _B, path: Path | str) -> _B:
        return self._with(data_dir=Path(path))

    def extras(self: _B, overrides: Mapping[str, str]) -> _B:
        """Replace the extra environment overrides passed to the engine."""
        pairs = tuple((str(key), str(value)) for key, value in overrides.items())
        return self._with(extras=pairs)

    def verify_release(self: _B, verify: bool = True) -> _B:
        """Confirm an explicit tag exists in the release registry on finalize."""
        return self._with(verify_release=bool(verify))

    def startup_timeout(self: _B, seconds: float) -> _B:
        return self._with(startup_timeout=float(seconds))

    def shutdown_grace_period(self: _B, seconds: float) -> _B:
        return self._with(shutdown_grace_period=float(seconds))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._fields!r})"


class ConfigBuilder(_BuilderBase):
    """Builder without a version. Choose one to get a finalizable builder."""


class VersionedConfigBuilder(_BuilderBase):
    """Builder with a version set; the only stage that can be finalized."""

    def finalize(self) -> EngineConfig:
        """Resolve every setting and freeze the result.

        Steps run in order (platform, version, image, directories, ports)
        and the first failure is raised as-is. Steps after a failure do not
        run, so no directory is created and no request is made for them.

        Returns:
            The frozen EngineConfig.

        Raises:
            EmbeddedEngineError: The subclass matching the failing step.
        """
        pipeline = self._pipeline
        if pipeline is None:
            # Import here to avoid circular dependency
            from weaviate_embedded.factories import create_build_pipeline

            pipeline = create_build_pipeline()

        requested = self._fields
        if requested.version is None:
            raise InvalidVersionError("No version requested")

        platform = pipeline.system_resolver.resolve(requested.platform)
        version = pipeline.version_resolver.resolve(
            self._requested_tag(requested.version), verify=requested.verify_release
        )
        image = pipeline.image_resolver.resolve(requested.image, version, platform)
        directories = pipeline.directory_provisioner.provision(
            requested.binary_dir, requested.data_dir
        )
        bind_address, grpc_port = pipeline.port_allocator.resolve(
            requested.bind_address, requested.grpc_port
        )

        defaults = pipeline.defaults
        config = EngineConfig(
            version=version,
            image=image,
            platform=platform,
            bind_address=bind_address,
            grpc_port=grpc_port,
            binary_dir=directories.binary_dir,
            data_dir=directories.data_dir,
            extras=requested.extras,
            startup_timeout=(
                defaults.startup_timeout
                if requested.startup_timeout is None
                else requested.startup_timeout
            ),
            shutdown_grace_period=(
                defaults.shutdown_grace_period
                if requested.shutdown_grace_period is None
                else requested.shutdown_grace_period
            ),
        )
        logger.info(
            "Finalized engine config: version=%s platform=%s url=%s",
            config.version,
            config.platform.value,
            config.url,
        )
        return config

    def _requested_tag(self, version: str) -> str:
        if version != FROM_TARGET:
            return version
        requested = self._fields
        if requested.image is None:
            raise VersionFetchError(
                "Cannot take the version from the target: no target file or URL is set"
            )
        found = EngineVersion.search(requested.image.name)
        if found is None:
            raise VersionFetchError(
                f"No version tag found in target name {requested.image.name!r}",
                value=requested.image.name,
            )
        return found.tag
