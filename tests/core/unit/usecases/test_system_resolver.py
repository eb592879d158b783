"""Unit tests for SystemResolver use case."""

import pytest

from weaviate_embedded.adapters.fakes import FakeHostDetector
from weaviate_embedded.domain.exceptions import UnsupportedSystemError
from weaviate_embedded.domain.platform import PlatformIdentifier
from weaviate_embedded.usecases.system_resolver import SUPPORTED_SYSTEMS, SystemResolver


@pytest.mark.tier(1)
@pytest.mark.tra("UseCase.SystemResolver")
class TestSystemResolver:
    """Test host to platform resolution."""

    @pytest.mark.parametrize(
        "family,os_name,arch,expected",
        [
            ("unix", "linux", "x86_64", PlatformIdentifier.LINUX_X86_64),
            ("unix", "linux", "aarch64", PlatformIdentifier.LINUX_AARCH64),
            ("unix", "darwin", "x86_64", PlatformIdentifier.MACOS),
            ("unix", "darwin", "aarch64", PlatformIdentifier.MACOS),
            ("windows", "windows", "x86_64", PlatformIdentifier.WINDOWS_X86_64),
            ("windows", "windows", "aarch64", PlatformIdentifier.WINDOWS_AARCH64),
        ],
    )
    def test_supported_hosts(self, family, os_name, arch, expected):
        """Test every supported host maps to its platform."""
        resolver = SystemResolver(FakeHostDetector.from_tuple(family, os_name, arch))
        assert resolver.resolve() is expected

    @pytest.mark.parametrize(
        "family,os_name,arch",
        [
            ("unix", "linux", "riscv64"),
            ("unix", "freebsd", "x86_64"),
            ("unix", "linux", "i686"),
            ("windows", "linux", "x86_64"),
        ],
    )
    def test_unsupported_hosts(self, family, os_name, arch):
        """Test anything outside the table fails, naming os and arch."""
        resolver = SystemResolver(FakeHostDetector.from_tuple(family, os_name, arch))
        with pytest.raises(UnsupportedSystemError) as exc_info:
            resolver.resolve()
        assert exc_info.value.os_name == os_name
        assert exc_info.value.arch == arch
        assert os_name in str(exc_info.value)

    def test_override_bypasses_detection(self):
        """Test an explicit platform never consults the host detector."""
        detector = FakeHostDetector.from_tuple("unix", "freebsd", "riscv64")
        resolver = SystemResolver(detector)

        assert resolver.resolve("windows-arm64") is PlatformIdentifier.WINDOWS_AARCH64
        assert detector.calls == 0

    def test_unknown_override(self):
        """Test an unknown override is an unsupported system."""
        resolver = SystemResolver(FakeHostDetector.from_tuple("unix", "linux", "x86_64"))
        with pytest.raises(UnsupportedSystemError):
            resolver.resolve("plan9-mips")

    def test_table_covers_every_platform(self):
        """Test each platform is reachable from at least one host."""
        assert set(SUPPORTED_SYSTEMS.values()) == set(PlatformIdentifier)
