"""Artifact target value objects.

An image target is where the engine archive comes from: a file on disk or
a URL. Either way the name must end in an accepted archive suffix.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final, Union

ACCEPTED_SUFFIXES: Final = (".zip", ".tar.gz")


def has_archive_suffix(name: str) -> bool:
    """Return True if ``name`` ends in '.zip' or '.tar.gz'."""
    return name.endswith(ACCEPTED_SUFFIXES)


@dataclass(frozen=True)
class LocalImage:
    """Archive stored on the local filesystem.

    Attributes:
        path: Path to the archive file.
    """

    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def suffix(self) -> str:
        return ".tar.gz" if self.name.endswith(".tar.gz") else self.path.suffix

    def __str__(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class RemoteImage:
    """Archive served over HTTP(S).

    Attributes:
        url: Direct URL of the archive.
    """

    url: str

    @property
    def name(self) -> str:
        # Query strings and fragments are not part of the resource name.
        return self.url.split("?", 1)[0].split("#", 1)[0].rstrip("/").rsplit("/", 1)[-1]

    @property
    def suffix(self) -> str:
        return ".tar.gz" if self.name.endswith(".tar.gz") else Path(self.name).suffix

    def __str__(self) -> str:
        return self.url


ImageTarget = Union[LocalImage, RemoteImage]
