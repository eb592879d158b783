"""Installed artifact value objects.

An installed artifact lives in a directory derived from a hash of
(version, platform), so a different version can never reuse an
incompatible binary.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from weaviate_embedded.domain.exceptions import EmbeddedEngineError
from weaviate_embedded.domain.platform import PlatformIdentifier


def install_key(version: str, platform: PlatformIdentifier) -> str:
    """Return the stable hash identifying a (version, platform) install."""
    return hashlib.sha256(f"{version}/{platform.value}".encode()).hexdigest()


def install_directory(
    binary_dir: Path, product: str, version: str, platform: PlatformIdentifier
) -> Path:
    """Return the deterministic install directory for (version, platform)."""
    return binary_dir / f"{product}-{version}-{install_key(version, platform)[:12]}"


@dataclass(frozen=True)
class InstalledArtifact:
    """Local, usable copy of the engine binary.

    Attributes:
        path: Path to the engine executable.
        version: Release tag the binary belongs to.
        platform: Platform the binary was built for.
        checksum: Optional SHA256 of the archive it was installed from.
        size_bytes: Optional size of that archive in bytes.
        acquired_at: Optional timestamp of the install.
    """

    path: Path
    version: str
    platform: PlatformIdentifier
    checksum: str | None = None
    size_bytes: int | None = None
    acquired_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate artifact metadata."""
        if self.size_bytes is not None and self.size_bytes < 0:
            raise EmbeddedEngineError(
                f"size_bytes must be non-negative, got: {self.size_bytes}"
            )
        if self.checksum is not None and not self.checksum:
            raise EmbeddedEngineError("checksum cannot be empty if provided")

    @property
    def install_dir(self) -> Path:
        return self.path.parent

    @property
    def key(self) -> str:
        return install_key(self.version, self.platform)
