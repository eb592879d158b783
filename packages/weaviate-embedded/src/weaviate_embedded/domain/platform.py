"""Platform value objects.

PlatformIdentifier is the closed set of platforms the engine publishes
artifacts for. HostSystem is what the host detector reports about the
machine we are running on.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from weaviate_embedded.domain.exceptions import UnsupportedSystemError


@dataclass(frozen=True)
class HostSystem:
    """Detected host platform.

    Attributes:
        family: OS family, 'unix' or 'windows'.
        os: Normalized operating system name (e.g. 'linux', 'darwin').
        arch: Normalized CPU architecture (e.g. 'x86_64', 'aarch64').
    """

    family: str
    os: str
    arch: str


class PlatformIdentifier(Enum):
    """Supported artifact platforms.

    Values are the platform names used in release artifact file names.
    """

    MACOS = "darwin-all"
    LINUX_X86_64 = "linux-amd64"
    LINUX_AARCH64 = "linux-arm64"
    WINDOWS_X86_64 = "windows-amd64"
    WINDOWS_AARCH64 = "windows-arm64"

    @classmethod
    def parse(cls, value: PlatformIdentifier | str) -> PlatformIdentifier:
        """Parse a platform from an identifier, its artifact name or member name.

        Accepts 'linux-amd64', 'LINUX_X86_64' and 'linux_x86_64' alike.

        Raises:
            UnsupportedSystemError: If the value names no supported platform.
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for member in cls:
            if text == member.value or text.upper() == member.name:
                return member
        raise UnsupportedSystemError(
            f"Unsupported platform override: {value!r}. "
            f"Supported: {', '.join(m.value for m in cls)}",
            os_name=text,
            arch="",
        )

    @property
    def extension(self) -> str:
        """Archive extension the platform's artifact is published with."""
        if self is PlatformIdentifier.MACOS:
            return "zip"
        return "tar.gz"

    @property
    def is_windows(self) -> bool:
        return self in (
            PlatformIdentifier.WINDOWS_X86_64,
            PlatformIdentifier.WINDOWS_AARCH64,
        )

    def executable_name(self, product: str) -> str:
        """Return the engine executable's file name on this platform."""
        return f"{product}.exe" if self.is_windows else product
