"""Fake host detector for testing.

Allows tests to control host detection without relying on the actual
OS and architecture of the machine running the tests.
"""

from __future__ import annotations

from weaviate_embedded.domain.platform import HostSystem


class FakeHostDetector:
    """Fake implementation of HostDetectorPort for testing.

    Example:
        >>> fake = FakeHostDetector.from_tuple("unix", "linux", "x86_64")
        >>> fake.detect()
        HostSystem(family='unix', os='linux', arch='x86_64')
    """

    def __init__(self, host: HostSystem) -> None:
        self._host = host
        self.calls = 0

    @classmethod
    def from_tuple(cls, family: str, os: str, arch: str) -> FakeHostDetector:
        """Create a FakeHostDetector without importing HostSystem."""
        return cls(HostSystem(family=family, os=os, arch=arch))

    def detect(self) -> HostSystem:
        """Return the configured host and count the call."""
        self.calls += 1
        return self._host
