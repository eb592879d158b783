"""Shared fixtures for weaviate-embedded unit tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from weaviate_embedded.adapters.fakes import FakeHostDetector, FakeReleaseRegistry
from weaviate_embedded.domain.config import BindAddress, EngineConfig
from weaviate_embedded.domain.defaults import DEFAULTS
from weaviate_embedded.domain.image import RemoteImage
from weaviate_embedded.domain.platform import PlatformIdentifier
from weaviate_embedded.usecases.config_builder import BuildPipeline
from weaviate_embedded.usecases.directory_provisioner import DirectoryProvisioner
from weaviate_embedded.usecases.image_resolver import ImageResolver
from weaviate_embedded.usecases.port_allocator import PortAllocator
from weaviate_embedded.usecases.system_resolver import SystemResolver
from weaviate_embedded.usecases.version_resolver import VersionResolver


def pytest_configure(config: Any) -> None:
    """Register custom markers for unit tests."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")


@pytest.fixture
def linux_host() -> FakeHostDetector:
    return FakeHostDetector.from_tuple("unix", "linux", "x86_64")


@pytest.fixture
def registry() -> FakeReleaseRegistry:
    return FakeReleaseRegistry(latest="v1.22.0", known_tags=("v1.21.1",))


@pytest.fixture
def xdg_environ(tmp_path: Path) -> dict[str, str]:
    return {
        "XDG_CACHE_HOME": str(tmp_path / "cache"),
        "XDG_DATA_HOME": str(tmp_path / "data"),
    }


@pytest.fixture
def pipeline(
    linux_host: FakeHostDetector,
    registry: FakeReleaseRegistry,
    xdg_environ: dict[str, str],
) -> BuildPipeline:
    """Build pipeline backed by fakes and a temporary home."""
    return BuildPipeline(
        defaults=DEFAULTS,
        system_resolver=SystemResolver(linux_host),
        version_resolver=VersionResolver(registry),
        image_resolver=ImageResolver(DEFAULTS),
        directory_provisioner=DirectoryProvisioner(DEFAULTS, environ=xdg_environ),
        port_allocator=PortAllocator(DEFAULTS),
    )


@pytest.fixture
def engine_config(tmp_path: Path) -> EngineConfig:
    """A valid frozen configuration rooted in tmp_path."""
    binary_dir = tmp_path / "bin"
    data_dir = tmp_path / "data"
    binary_dir.mkdir()
    data_dir.mkdir()
    return EngineConfig(
        version="v1.21.1",
        image=RemoteImage(
            "https://example.com/v1.21.1/weaviate-v1.21.1-linux-amd64.tar.gz"
        ),
        platform=PlatformIdentifier.LINUX_X86_64,
        bind_address=BindAddress("127.0.0.1", 8079),
        grpc_port=50060,
        binary_dir=binary_dir,
        data_dir=data_dir,
        startup_timeout=5.0,
        shutdown_grace_period=1.0,
    )
