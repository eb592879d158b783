"""Pytest configuration for core adapter unit tests."""

from __future__ import annotations

import io
import tarfile
import zipfile
from pathlib import Path
from typing import Callable, Mapping

import pytest

from weaviate_embedded.domain.artifact import InstalledArtifact, install_directory
from weaviate_embedded.domain.platform import PlatformIdentifier

ArchiveFactory = Callable[[str, Mapping[str, bytes]], Path]


def write_tar_gz(path: Path, members: Mapping[str, bytes]) -> Path:
    """Write a gzipped tarball holding ``members`` (name -> content)."""
    with tarfile.open(path, "w:gz") as tf:
        for name, content in members.items():
            info = tarfile.TarInfo(name)
            info.size = len(content)
            info.mode = 0o644
            tf.addfile(info, io.BytesIO(content))
    return path


def write_zip(path: Path, members: Mapping[str, bytes]) -> Path:
    """Write a zip archive holding ``members`` (name -> content)."""
    with zipfile.ZipFile(path, "w") as zf:
        for name, content in members.items():
            zf.writestr(name, content)
    return path


@pytest.fixture
def make_archive(tmp_path: Path) -> ArchiveFactory:
    """Build an archive in tmp_path/archives; the suffix picks the format.

    Example:
        def test_extract(make_archive):
            archive = make_archive("engine.tar.gz", {"weaviate": b"binary"})
    """
    directory = tmp_path / "archives"
    directory.mkdir()

    def factory(name: str, members: Mapping[str, bytes]) -> Path:
        if name.endswith(".zip"):
            return write_zip(directory / name, members)
        return write_tar_gz(directory / name, members)

    return factory


@pytest.fixture
def linux_artifact(tmp_path: Path) -> InstalledArtifact:
    """Expected install location of a linux-amd64 v1.21.1 engine."""
    platform = PlatformIdentifier.LINUX_X86_64
    install_dir = install_directory(tmp_path / "bin", "weaviate", "v1.21.1", platform)
    return InstalledArtifact(
        path=install_dir / "weaviate", version="v1.21.1", platform=platform
    )
