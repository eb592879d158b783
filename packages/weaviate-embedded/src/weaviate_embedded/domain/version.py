"""Engine version value object.

Versions are release tags of the form ``v<major>.<minor>.<patch>`` with an
optional ``-rc.N``, ``-beta.N`` or ``-alpha.N`` suffix. The literal
``latest`` is a request sentinel and never a version.

A parsed tag is kept exactly as written apart from the leading 'v', which is
added when missing: '01.2.3' becomes 'v01.2.3', not 'v1.2.3'.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Final

from weaviate_embedded.domain.exceptions import InvalidVersionError

LATEST: Final = "latest"

_TAG_BODY: Final = (
    r"(?P<major>[0-9]+)\.(?P<minor>[0-9]+)\.(?P<patch>[0-9]+)"
    r"(?:-(?P<pre_release>(?:rc|beta|alpha)\.[0-9]+))?"
)

VERSION_PATTERN: Final = re.compile(r"v?" + _TAG_BODY, re.ASCII)

# A v-prefixed tag inside a larger name such as an archive file name
EMBEDDED_VERSION_PATTERN: Final = re.compile(
    r"(?<![0-9A-Za-z.])v" + _TAG_BODY + r"(?![0-9])", re.ASCII
)


@dataclass(frozen=True)
class EngineVersion:
    """Release version of the engine.

    Attributes:
        major: Major version number (non-negative).
        minor: Minor version number (non-negative).
        patch: Patch version number (non-negative).
        pre_release: Optional pre-release label, e.g. 'rc.1'.
        raw: Tag as written, when parsed from a string.
    """

    major: int
    minor: int
    patch: int
    pre_release: str | None = None
    raw: str | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        """Validate version components."""
        if self.major < 0 or self.minor < 0 or self.patch < 0:
            raise InvalidVersionError(
                f"Version components must be non-negative, got: "
                f"{self.major}.{self.minor}.{self.patch}",
                value=(self.major, self.minor, self.patch),
            )

    @classmethod
    def from_string(cls, version_string: str) -> EngineVersion:
        """Parse a version tag.

        Accepts 'v1.21.1', '1.21.1' and 'v1.2.3-rc.1'. The whole string must
        match: surrounding whitespace, trailing garbage, non-ASCII digits and
        a doubled 'v' are rejected.

        Args:
            version_string: Tag to parse.

        Returns:
            EngineVersion instance.

        Raises:
            InvalidVersionError: If the tag does not match the version pattern.
        """
        match = VERSION_PATTERN.fullmatch(version_string)
        if match is None:
            raise InvalidVersionError(
                f"Invalid version tag, expected 'vX.Y.Z[-rc.N|-beta.N|-alpha.N]', "
                f"got: {version_string!r}",
                value=version_string,
            )
        return cls._from_match(match)

    @classmethod
    def search(cls, text: str) -> EngineVersion | None:
        """Return the first version tag embedded in ``text``, if any.

        Example:
            >>> EngineVersion.search("weaviate-v1.21.1-linux-amd64.tar.gz").tag
            'v1.21.1'
        """
        match = EMBEDDED_VERSION_PATTERN.search(text)
        return cls._from_match(match) if match is not None else None

    @classmethod
    def _from_match(cls, match: re.Match[str]) -> EngineVersion:
        return cls(
            major=int(match["major"]),
            minor=int(match["minor"]),
            patch=int(match["patch"]),
            pre_release=match["pre_release"],
            raw=match.group(0),
        )

    @property
    def tag(self) -> str:
        """Release tag with a single leading 'v'."""
        if self.raw is not None:
            return self.raw if self.raw.startswith("v") else f"v{self.raw}"
        base = f"v{self.major}.{self.minor}.{self.patch}"
        if self.pre_release:
            return f"{base}-{self.pre_release}"
        return base

    def __str__(self) -> str:
        return self.tag


def normalize_tag(tag: str) -> str:
    """Validate a tag and return it with a single leading 'v'."""
    return EngineVersion.from_string(tag).tag
