"""HTTPX-based implementation of the ArtifactAcquirerPort.

This adapter downloads (or copies) an engine archive, extracts it and
installs the executable into its install directory.
"""

from __future__ import annotations

import hashlib
import logging
import os
import shutil
import stat
import tarfile
import tempfile
import zipfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import httpx

from weaviate_embedded.adapters.ports import ArtifactAcquirerPort
from weaviate_embedded.domain.artifact import InstalledArtifact
from weaviate_embedded.domain.exceptions import AcquisitionError
from weaviate_embedded.domain.image import ImageTarget, LocalImage

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024


class HttpxArtifactAcquirer:
    """Adapter that installs engine archives into per-version directories.

    The archive is staged and extracted in a temporary directory next to the
    install directory, then moved into place with a single rename. Several
    processes racing on the same install directory therefore never see a
    half-extracted binary: the loser of the rename discards its copy and
    reuses the winner's.

    Attributes:
        timeout: Download timeout in seconds.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        timeout: float = 300.0,
    ) -> None:
        """Initialize the artifact acquirer.

        Args:
            client: Optional httpx.Client for dependency injection (testing).
                   If not provided, a new client is created per download.
            timeout: Download timeout in seconds.
        """
        self._client = client
        self.timeout = timeout

    def acquire(self, target: ImageTarget, artifact: InstalledArtifact) -> InstalledArtifact:
        """Install the archive behind ``target`` so that ``artifact.path`` exists.

        Args:
            target: Local archive or remote archive URL.
            artifact: Expected install location, version and platform.

        Returns:
            InstalledArtifact with checksum, size and acquired_at filled in.

        Raises:
            AcquisitionError: If the archive cannot be fetched, is corrupt or
                does not contain the engine executable.
        """
        install_dir = artifact.install_dir
        parent = install_dir.parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise AcquisitionError(
                f"Cannot create binary directory {parent}: {e}",
                value=str(parent),
                original_error=e,
            ) from e

        staging = Path(tempfile.mkdtemp(prefix=f".{install_dir.name}-", dir=parent))
        try:
            archive = staging / target.name
            checksum, size = self._fetch(target, archive)
            logger.info("Fetched %s (%d bytes, sha256=%s)", target, size, checksum)

            extracted = staging / install_dir.name
            extracted.mkdir()
            self._extract(archive, extracted)
            self._place_executable(extracted, artifact.path.name)

            self._commit(extracted, install_dir, artifact.path)
        finally:
            shutil.rmtree(staging, ignore_errors=True)

        return InstalledArtifact(
            path=artifact.path,
            version=artifact.version,
            platform=artifact.platform,
            checksum=checksum,
            size_bytes=size,
            acquired_at=datetime.now(timezone.utc),
        )

    def _fetch(self, target: ImageTarget, destination: Path) -> tuple[str, int]:
        digest = hashlib.sha256()
        size = 0
        try:
            if isinstance(target, LocalImage):
                with target.path.open("rb") as src, destination.open("wb") as dst:
                    for chunk in iter(lambda: src.read(_CHUNK_SIZE), b""):
                        digest.update(chunk)
                        size += len(chunk)
                        dst.write(chunk)
            elif self._client is not None:
                size = self._stream(self._client, target.url, destination, digest)
            else:
                with httpx.Client(timeout=self.timeout, follow_redirects=True) as client:
                    size = self._stream(client, target.url, destination, digest)
        except httpx.HTTPStatusError as e:
            raise AcquisitionError(
                f"Download of {target} failed with HTTP {e.response.status_code}",
                value=str(target),
                original_error=e,
            ) from e
        except httpx.HTTPError as e:
            raise AcquisitionError(
                f"Download of {target} failed: {e}",
                value=str(target),
                original_error=e,
            ) from e
        except OSError as e:
            raise AcquisitionError(
                f"Cannot copy {target}: {e}",
                value=str(target),
                original_error=e,
            ) from e
        return digest.hexdigest(), size

    @staticmethod
    def _stream(client: httpx.Client, url: str, destination: Path, digest: Any) -> int:
        size = 0
        with client.stream("GET", url) as response:
            response.raise_for_status()
            with destination.open("wb") as dst:
                for chunk in response.iter_bytes(_CHUNK_SIZE):
                    digest.update(chunk)
                    size += len(chunk)
                    dst.write(chunk)
        return size

    @staticmethod
    def _extract(archive: Path, destination: Path) -> None:
        try:
            if archive.name.endswith(".zip"):
                with zipfile.ZipFile(archive) as zf:
                    zf.extractall(destination)
            else:
                with tarfile.open(archive, "r:gz") as tf:
                    tf.extractall(destination, filter="data")
        except (tarfile.TarError, zipfile.BadZipFile, OSError) as e:
            raise AcquisitionError(
                f"Cannot extract {archive.name}: {e}",
                value=archive.name,
                original_error=e,
            ) from e

    @staticmethod
    def _place_executable(extracted: Path, executable_name: str) -> None:
        """Move the executable to the top of ``extracted`` and mark it executable."""
        target = extracted / executable_name
        if not target.is_file():
            found = next(
                (p for p in sorted(extracted.rglob(executable_name)) if p.is_file()),
                None,
            )
            if found is None:
                raise AcquisitionError(
                    f"Archive does not contain '{executable_name}'",
                    value=executable_name,
                )
            shutil.move(str(found), str(target))

        mode = target.stat().st_mode
        target.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    @staticmethod
    def _commit(extracted: Path, install_dir: Path, executable: Path) -> None:
        if install_dir.exists() and not executable.is_file():
            # Leftover from an interrupted install without the executable
            shutil.rmtree(install_dir, ignore_errors=True)
        try:
            os.rename(extracted, install_dir)
        except OSError as e:
            if executable.is_file():
                logger.warning("Install directory %s populated concurrently; reusing it", install_dir)
                return
            raise AcquisitionError(
                f"Cannot install artifact into {install_dir}: {e}",
                value=str(install_dir),
                original_error=e,
            ) from e
        logger.info("Installed engine artifact into %s", install_dir)


# Runtime protocol check
assert isinstance(HttpxArtifactAcquirer(), ArtifactAcquirerPort)
