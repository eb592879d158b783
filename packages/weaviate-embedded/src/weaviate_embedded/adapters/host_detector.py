"""Host detector adapter for detecting current OS family, OS and architecture.

This module provides an adapter that implements HostDetectorPort
by using Python's standard library platform module.
"""

from __future__ import annotations

import os
import platform

from weaviate_embedded.domain.platform import HostSystem


class OsHostDetector:
    """Adapter that detects the host using the os and platform modules.

    Implements HostDetectorPort by querying os.name, platform.system() and
    platform.machine(). Values are normalized but not validated: whether a
    combination is supported is decided by SystemResolver.

    Machine type mappings:
        - x86_64, AMD64, x64 -> x86_64
        - aarch64, arm64, ARM64 -> aarch64
    """

    # Mapping from os.name values to OS family names
    _FAMILY_MAP: dict[str, str] = {
        "posix": "unix",
        "nt": "windows",
    }

    # Mapping from platform.machine() values to our normalized arch names
    _ARCH_MAP: dict[str, str] = {
        "x86_64": "x86_64",
        "amd64": "x86_64",
        "x64": "x86_64",
        "aarch64": "aarch64",
        "arm64": "aarch64",
    }

    def detect(self) -> HostSystem:
        """Detect the current host.

        Returns:
            HostSystem with family, os and arch fields.
        """
        return HostSystem(
            family=self._detect_family(),
            os=platform.system().lower(),
            arch=self._detect_arch(),
        )

    def _detect_family(self) -> str:
        return self._FAMILY_MAP.get(os.name, os.name)

    def _detect_arch(self) -> str:
        machine = platform.machine().lower()
        return self._ARCH_MAP.get(machine, machine)
