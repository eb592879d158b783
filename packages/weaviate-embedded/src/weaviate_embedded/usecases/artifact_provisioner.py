"""Artifact provisioner use case: make sure the engine binary is installed."""

from __future__ import annotations

import logging

from weaviate_embedded.adapters.metrics_port import MetricsPort, NoOpMetricsAdapter
from weaviate_embedded.adapters.ports import ArtifactAcquirerPort
from weaviate_embedded.domain.artifact import InstalledArtifact, install_directory
from weaviate_embedded.domain.config import EngineConfig
from weaviate_embedded.domain.defaults import DEFAULTS, EngineDefaults
from weaviate_embedded.domain.exceptions import AcquisitionError

logger = logging.getLogger(__name__)


class ArtifactProvisioner:
    """Use case for installing the engine binary a configuration needs.

    The install path is derived from (version, platform), so a cached binary
    is only reused for the exact release and platform it was built for.
    Download and extraction are delegated to the ArtifactAcquirerPort, which
    is responsible for making concurrent installs safe.
    """

    def __init__(
        self,
        acquirer: ArtifactAcquirerPort,
        defaults: EngineDefaults = DEFAULTS,
        metrics: MetricsPort | None = None,
    ) -> None:
        """Initialize the artifact provisioner.

        Args:
            acquirer: Port that downloads/copies and extracts archives.
            defaults: Source of the product name.
            metrics: Optional metrics port. Defaults to NoOpMetricsAdapter.
        """
        self._acquirer = acquirer
        self._defaults = defaults
        self._metrics = metrics if metrics is not None else NoOpMetricsAdapter()

    def expected_artifact(self, config: EngineConfig) -> InstalledArtifact:
        """Return where the binary for ``config`` is (or will be) installed."""
        product = self._defaults.product
        install_dir = install_directory(
            config.binary_dir, product, config.version, config.platform
        )
        return InstalledArtifact(
            path=install_dir / config.platform.executable_name(product),
            version=config.version,
            platform=config.platform,
        )

    def is_installed(self, config: EngineConfig) -> bool:
        return self.expected_artifact(config).path.is_file()

    def ensure(self, config: EngineConfig) -> InstalledArtifact:
        """Return the installed artifact, acquiring it first if missing.

        Raises:
            AcquisitionError: If acquisition fails or does not produce the
                executable at the expected path.
        """
        artifact = self.expected_artifact(config)
        if artifact.path.is_file():
            logger.debug("Reusing installed engine binary %s", artifact.path)
            self._metrics.set_artifact_cached(True)
            return artifact

        logger.info(
            "Installing engine %s for %s from %s",
            config.version,
            config.platform.value,
            config.image,
        )
        installed = self._acquirer.acquire(config.image, artifact)
        if not installed.path.is_file():
            raise AcquisitionError(
                f"Acquisition finished but {installed.path} does not exist",
                value=str(installed.path),
            )
        self._metrics.set_artifact_cached(False)
        return installed
