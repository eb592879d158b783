"""Domain exceptions.

Exception hierarchy:
- EmbeddedEngineError: Base for every provisioning and lifecycle failure.
  Carries the resolution step that failed and the offending value.
  - UnsupportedSystemError: host os/arch has no artifact.
  - InvalidVersionError: explicit tag does not match the version pattern.
  - VersionFetchError: release registry lookup failed.
  - InvalidImageError: artifact target rejected (see ImageRejection).
  - PathResolutionError: a default directory could not be expanded.
  - DirectoryCreateError: a directory could not be created.
  - InvalidAddressError: malformed bind address or port.
  - SocketError: unexpected OS failure while probing a socket.
  - AcquisitionError: artifact download, copy or extraction failed.
  - ProcessStartError: engine process could not be started.
    - ProcessStartTimeoutError: engine did not become reachable in time.
  - ConfigFileError: YAML configuration could not be parsed.

All errors are terminal at the point of detection. Nothing in the pipeline
retries.
"""

from __future__ import annotations

from enum import Enum


class EmbeddedEngineError(Exception):
    """Base exception for the embedded engine pipeline.

    Attributes:
        message: Human-readable error description.
        step: Pipeline step that raised the error (class-level default).
        value: The value that was being resolved, if any.
        original_error: The underlying exception, if any.
    """

    step: str = "engine"

    def __init__(
        self,
        message: str,
        value: object | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        """Initialize EmbeddedEngineError.

        Args:
            message: Human-readable error description.
            value: The value that was being resolved when the error occurred.
            original_error: The underlying exception that caused the failure.
        """
        super().__init__(message)
        self.message = message
        self.value = value
        self.original_error = original_error


class UnsupportedSystemError(EmbeddedEngineError):
    """Raised when the host os/arch pair has no published artifact."""

    step = "system"

    def __init__(self, message: str, os_name: str, arch: str) -> None:
        super().__init__(message, value=(os_name, arch))
        self.os_name = os_name
        self.arch = arch


class InvalidVersionError(EmbeddedEngineError):
    """Raised when an explicit version tag does not match the version pattern."""

    step = "version"


class VersionFetchError(EmbeddedEngineError):
    """Raised when the release registry cannot provide a release tag."""

    step = "version"


class ImageRejection(Enum):
    """Why an artifact target was rejected.

    Attributes:
        MISSING: Local path does not exist.
        NOT_A_FILE: Local path exists but is not a regular file.
        BAD_SUFFIX: Name does not end in an accepted archive suffix.
    """

    MISSING = "missing"
    NOT_A_FILE = "not_a_file"
    BAD_SUFFIX = "bad_suffix"


class InvalidImageError(EmbeddedEngineError):
    """Raised when a local or remote artifact target is rejected.

    Attributes:
        reason: ImageRejection describing which check failed.
    """

    step = "image"

    def __init__(self, message: str, value: object, reason: ImageRejection) -> None:
        super().__init__(message, value=value)
        self.reason = reason


class PathResolutionError(EmbeddedEngineError):
    """Raised when a home-relative default directory cannot be expanded."""

    step = "directories"


class DirectoryCreateError(EmbeddedEngineError):
    """Raised when the binary or data directory cannot be created."""

    step = "directories"


class InvalidAddressError(EmbeddedEngineError):
    """Raised when a bind address or port is malformed or conflicting."""

    step = "ports"


class SocketError(EmbeddedEngineError):
    """Raised for OS socket failures other than "address unavailable".

    Attributes:
        errno: The OS error number, if known.
    """

    step = "ports"

    def __init__(
        self,
        message: str,
        value: object | None = None,
        original_error: OSError | None = None,
    ) -> None:
        super().__init__(message, value=value, original_error=original_error)
        self.errno = original_error.errno if original_error is not None else None


class AcquisitionError(EmbeddedEngineError):
    """Raised when the engine artifact cannot be downloaded or installed."""

    step = "artifact"


class ProcessStartError(EmbeddedEngineError):
    """Raised when the engine process fails to start."""

    step = "process"


class ProcessStartTimeoutError(ProcessStartError):
    """Raised when the engine does not accept connections before the deadline."""


class ConfigFileError(EmbeddedEngineError):
    """Raised when a YAML configuration document is invalid."""

    step = "config"
