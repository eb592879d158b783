"""Directory provisioner use case: resolve and create engine directories."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from weaviate_embedded.domain.defaults import DEFAULTS, EngineDefaults
from weaviate_embedded.domain.exceptions import DirectoryCreateError, PathResolutionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineDirectories:
    """Absolute, existing binary-cache and data directories.

    Attributes:
        binary_dir: Directory installed engine binaries are cached in.
        data_dir: Directory the engine persists its data to.
    """

    binary_dir: Path
    data_dir: Path


class DirectoryProvisioner:
    """Use case for resolving and creating the binary and data directories.

    Overrides are user-expanded and made absolute. Defaults are
    home-relative; when XDG_CACHE_HOME (binaries) or XDG_DATA_HOME (data) is
    set, the default directory's last component is placed under it instead.

    Provisioning is idempotent: existing directories are left untouched.
    """

    def __init__(
        self,
        defaults: EngineDefaults = DEFAULTS,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the directory provisioner.

        Args:
            defaults: Source of the home-relative default directories.
            environ: Environment to read XDG variables from. Defaults to
                    os.environ at call time.
        """
        self._defaults = defaults
        self._environ = environ

    def provision(
        self,
        binary_dir: Path | str | None = None,
        data_dir: Path | str | None = None,
    ) -> EngineDirectories:
        """Resolve both directories and create them if missing.

        Raises:
            PathResolutionError: If a home-relative path cannot be expanded.
            DirectoryCreateError: If either directory cannot be created.
        """
        directories = EngineDirectories(
            binary_dir=self.resolve_binary_dir(binary_dir),
            data_dir=self.resolve_data_dir(data_dir),
        )
        self._create(directories.binary_dir)
        self._create(directories.data_dir)
        return directories

    def resolve_binary_dir(self, override: Path | str | None = None) -> Path:
        if override is not None:
            return self._absolute(override)
        return self._default(self._defaults.binary_dir, "XDG_CACHE_HOME")

    def resolve_data_dir(self, override: Path | str | None = None) -> Path:
        if override is not None:
            return self._absolute(override)
        return self._default(self._defaults.data_dir, "XDG_DATA_HOME")

    def _default(self, home_relative: str, xdg_variable: str) -> Path:
        environ = self._environ if self._environ is not None else os.environ
        xdg_base = environ.get(xdg_variable)
        # Relative XDG values are invalid and ignored
        if xdg_base and Path(xdg_base).is_absolute():
            return self._absolute(Path(xdg_base) / Path(home_relative).name)
        return self._absolute(home_relative)

    @staticmethod
    def _absolute(path: Path | str) -> Path:
        try:
            expanded = Path(path).expanduser()
        except RuntimeError as e:
            raise PathResolutionError(
                f"Cannot expand home directory in {str(path)!r}: {e}",
                value=str(path),
                original_error=e,
            ) from e
        return expanded.absolute()

    @staticmethod
    def _create(path: Path) -> None:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreateError(
                f"Cannot create directory {path}: {e}",
                value=str(path),
                original_error=e,
            ) from e
        logger.debug("Directory ready: %s", path)
