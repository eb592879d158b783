"""Port interfaces for the embedded engine package.

Ports define the contracts that adapters must implement.
These are Protocol classes (structural subtyping) for flexible testing.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from weaviate_embedded.domain.artifact import InstalledArtifact
    from weaviate_embedded.domain.config import BindAddress
    from weaviate_embedded.domain.image import ImageTarget
    from weaviate_embedded.domain.platform import HostSystem


@dataclass(frozen=True)
class ReleaseInfo:
    """Release metadata returned by the release registry.

    Attributes:
        tag: Release tag exactly as published (e.g. 'v1.21.1').
        name: Optional human-readable release name.
        published_at: Optional ISO-8601 publication timestamp.
    """

    tag: str
    name: str | None = None
    published_at: str | None = None


@runtime_checkable
class HostDetectorPort(Protocol):
    """Port interface for detecting the host platform.

    Contract:
        - detect() returns a HostSystem with normalized family, os and arch
        - detect() performs no validation; unsupported values are passed
          through so the resolver can name them in its error
    """

    def detect(self) -> HostSystem:
        """Detect the host's OS family, OS and architecture."""
        ...


@runtime_checkable
class ReleaseRegistryPort(Protocol):
    """Port interface for the remote release registry.

    Contract:
        - Each call performs exactly one network round trip
        - No retries and no caching
        - Failures (network, HTTP status, parse, not found) raise
          VersionFetchError
    """

    def fetch_latest(self) -> ReleaseInfo:
        """Fetch the newest published release.

        Raises:
            VersionFetchError: If the release cannot be fetched.
        """
        ...

    def fetch_release(self, tag: str) -> ReleaseInfo:
        """Fetch the release published under ``tag``.

        Raises:
            VersionFetchError: If the release does not exist or cannot be fetched.
        """
        ...


@runtime_checkable
class ArtifactAcquirerPort(Protocol):
    """Port interface for installing an engine artifact.

    Contract:
        - acquire() places the engine executable at ``artifact.path``
        - For a LocalImage the archive is copied, for a RemoteImage it is
          downloaded; either way it is extracted into the install directory
        - Idempotent and safe to run concurrently from several processes for
          the same install directory: a partially extracted artifact is never
          observable at ``artifact.path``
        - Failures raise AcquisitionError
    """

    def acquire(self, target: ImageTarget, artifact: InstalledArtifact) -> InstalledArtifact:
        """Install the archive behind ``target`` at ``artifact.path``.

        Args:
            target: Where the archive comes from.
            artifact: Expected install (path, version, platform).

        Returns:
            The installed artifact, with checksum and size filled in when known.

        Raises:
            AcquisitionError: If download, copy or extraction fails.
        """
        ...


@runtime_checkable
class RunningProcess(Protocol):
    """Minimal view of a spawned process."""

    @property
    def pid(self) -> int:
        ...


@runtime_checkable
class ProcessRunnerPort(Protocol):
    """Port interface for spawning and terminating the engine process.

    Contract:
        - spawn() starts the command detached from stdin and returns at once
        - exit_code() returns None while the process is running
        - terminate() asks for graceful shutdown and kills the process if it
          is still alive after ``grace_period`` seconds
        - terminate() on an already-exited process is a no-op
    """

    def spawn(self, command: Sequence[str], env: Mapping[str, str]) -> RunningProcess:
        """Start ``command`` with environment ``env``.

        Raises:
            OSError: If the executable cannot be started.
        """
        ...

    def exit_code(self, process: RunningProcess) -> int | None:
        """Return the process exit code, or None if it is still running."""
        ...

    def terminate(self, process: RunningProcess, grace_period: float) -> None:
        """Stop the process, escalating to a kill after ``grace_period``."""
        ...


@runtime_checkable
class ReadinessProbePort(Protocol):
    """Port interface for checking whether the engine accepts connections.

    Contract:
        - is_accepting() returns True once a connection to the address succeeds
        - is_accepting() never raises for refused or timed-out connections
    """

    def is_accepting(self, address: BindAddress) -> bool:
        """Return True if ``address`` accepts TCP connections."""
        ...


@runtime_checkable
class TimeProvider(Protocol):
    """Port interface for time operations.

    Implementations provide a monotonic clock and a way to wait.
    This abstraction enables deterministic testing of readiness polling.

    Contract:
        - get_time_seconds() returns non-decreasing values
        - sleep(seconds) blocks for roughly ``seconds``
    """

    def get_time_seconds(self) -> float:
        """Return the current monotonic time in seconds."""
        ...

    def sleep(self, seconds: float) -> None:
        """Block for ``seconds``."""
        ...


class RealTimeProvider:
    """Default implementation: real monotonic time."""

    def get_time_seconds(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)
