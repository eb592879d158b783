"""Unit tests for installed artifact value objects."""

from pathlib import Path

import pytest

from weaviate_embedded.domain.artifact import InstalledArtifact, install_directory, install_key
from weaviate_embedded.domain.exceptions import EmbeddedEngineError
from weaviate_embedded.domain.platform import PlatformIdentifier


@pytest.mark.tier(1)
@pytest.mark.tra("Domain.Invariant.InstalledArtifact")
class TestInstallDirectory:
    """Test the deterministic install path."""

    def test_is_deterministic(self):
        """Test the same key yields the same directory."""
        first = install_directory(Path("/cache"), "weaviate", "v1.21.1", PlatformIdentifier.LINUX_X86_64)
        second = install_directory(Path("/cache"), "weaviate", "v1.21.1", PlatformIdentifier.LINUX_X86_64)
        assert first == second

    def test_version_changes_path(self):
        """Test a different version never reuses the install directory."""
        old = install_directory(Path("/cache"), "weaviate", "v1.21.1", PlatformIdentifier.LINUX_X86_64)
        new = install_directory(Path("/cache"), "weaviate", "v1.21.2", PlatformIdentifier.LINUX_X86_64)
        assert old != new

    def test_platform_changes_path(self):
        """Test a different platform never reuses the install directory."""
        amd = install_directory(Path("/cache"), "weaviate", "v1.21.1", PlatformIdentifier.LINUX_X86_64)
        arm = install_directory(Path("/cache"), "weaviate", "v1.21.1", PlatformIdentifier.LINUX_AARCH64)
        assert amd != arm

    def test_layout(self):
        """Test the directory name embeds product, version and hash prefix."""
        key = install_key("v1.21.1", PlatformIdentifier.LINUX_X86_64)
        path = install_directory(Path("/cache"), "weaviate", "v1.21.1", PlatformIdentifier.LINUX_X86_64)
        assert path == Path("/cache") / f"weaviate-v1.21.1-{key[:12]}"
        assert len(key) == 64


@pytest.mark.tier(1)
@pytest.mark.tra("Domain.Invariant.InstalledArtifact")
class TestInstalledArtifact:
    """Test InstalledArtifact validation."""

    def test_install_dir_and_key(self):
        """Test derived properties."""
        artifact = InstalledArtifact(
            path=Path("/cache/weaviate-v1.21.1-abc/weaviate"),
            version="v1.21.1",
            platform=PlatformIdentifier.LINUX_X86_64,
        )
        assert artifact.install_dir == Path("/cache/weaviate-v1.21.1-abc")
        assert artifact.key == install_key("v1.21.1", PlatformIdentifier.LINUX_X86_64)

    def test_rejects_negative_size(self):
        """Test size_bytes must be non-negative."""
        with pytest.raises(EmbeddedEngineError, match="size_bytes"):
            InstalledArtifact(
                path=Path("/x"),
                version="v1.21.1",
                platform=PlatformIdentifier.MACOS,
                size_bytes=-1,
            )

    def test_rejects_empty_checksum(self):
        """Test checksum cannot be empty if given."""
        with pytest.raises(EmbeddedEngineError, match="checksum"):
            InstalledArtifact(
                path=Path("/x"),
                version="v1.21.1",
                platform=PlatformIdentifier.MACOS,
                checksum="",
            )
