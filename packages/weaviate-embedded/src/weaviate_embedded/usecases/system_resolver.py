"""System resolver use case: host (family, os, arch) to platform identifier."""

from __future__ import annotations

import logging
from typing import Mapping

from weaviate_embedded.adapters.ports import HostDetectorPort
from weaviate_embedded.domain.exceptions import UnsupportedSystemError
from weaviate_embedded.domain.platform import HostSystem, PlatformIdentifier

logger = logging.getLogger(__name__)

# Every supported combination is listed; there are no partial matches.
SUPPORTED_SYSTEMS: Mapping[tuple[str, str, str], PlatformIdentifier] = {
    ("unix", "darwin", "x86_64"): PlatformIdentifier.MACOS,
    ("unix", "darwin", "aarch64"): PlatformIdentifier.MACOS,
    ("unix", "linux", "x86_64"): PlatformIdentifier.LINUX_X86_64,
    ("unix", "linux", "aarch64"): PlatformIdentifier.LINUX_AARCH64,
    ("windows", "windows", "x86_64"): PlatformIdentifier.WINDOWS_X86_64,
    ("windows", "windows", "aarch64"): PlatformIdentifier.WINDOWS_AARCH64,
}


class SystemResolver:
    """Use case for resolving the platform the engine artifact is built for.

    An explicit override is returned as-is (after parsing) and the host is
    never inspected. Otherwise the host detector is consulted once and the
    reported triple is looked up in SUPPORTED_SYSTEMS.
    """

    def __init__(self, host_detector: HostDetectorPort) -> None:
        """Initialize the system resolver.

        Args:
            host_detector: Port for detecting the current host.
        """
        self._host_detector = host_detector

    def resolve(self, override: PlatformIdentifier | str | None = None) -> PlatformIdentifier:
        """Resolve the artifact platform.

        Args:
            override: Explicit platform, bypassing host detection.

        Returns:
            The PlatformIdentifier to download and run.

        Raises:
            UnsupportedSystemError: If the override is unknown or the host
                combination has no published artifact.
        """
        if override is not None:
            return PlatformIdentifier.parse(override)

        host = self._host_detector.detect()
        platform = self.lookup(host)
        logger.debug("Resolved host %s to platform %s", host, platform.value)
        return platform

    @staticmethod
    def lookup(host: HostSystem) -> PlatformIdentifier:
        """Map a detected host to its platform identifier.

        Raises:
            UnsupportedSystemError: If the combination is not supported.
        """
        try:
            return SUPPORTED_SYSTEMS[(host.family, host.os, host.arch)]
        except KeyError:
            raise UnsupportedSystemError(
                f"Unsupported system: os={host.os!r} arch={host.arch!r} "
                f"(family={host.family!r})",
                os_name=host.os,
                arch=host.arch,
            ) from None
