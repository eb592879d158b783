"""Fake artifact acquirer for testing.

Provides a test double for ArtifactAcquirerPort that writes a placeholder
executable instead of downloading and extracting an archive.
"""

from __future__ import annotations

from pathlib import Path

from weaviate_embedded.domain.artifact import InstalledArtifact
from weaviate_embedded.domain.image import ImageTarget


class FakeArtifactAcquirer:
    """Fake implementation of ArtifactAcquirerPort for testing.

    By default acquire() creates ``artifact.path`` as a small file so that
    subsequent cache checks see the artifact as installed.

    Example:
        >>> fake = FakeArtifactAcquirer(write_files=False)
        >>> fake.calls
        []
    """

    def __init__(self, write_files: bool = True) -> None:
        """Initialize the fake.

        Args:
            write_files: Whether acquire() creates the executable on disk.
        """
        self._write_files = write_files
        self._exception: BaseException | None = None
        self._calls: list[tuple[ImageTarget, Path]] = []

    @property
    def calls(self) -> list[tuple[ImageTarget, Path]]:
        """Return (target, executable path) tuples from acquire() calls."""
        return self._calls

    def set_exception(self, exception: BaseException | None) -> None:
        """Configure an exception to raise from acquire(), or None to clear."""
        self._exception = exception

    def acquire(self, target: ImageTarget, artifact: InstalledArtifact) -> InstalledArtifact:
        self._calls.append((target, artifact.path))
        if self._exception is not None:
            raise self._exception

        if self._write_files:
            artifact.path.parent.mkdir(parents=True, exist_ok=True)
            artifact.path.write_bytes(b"#!/bin/sh\n")
        return artifact
