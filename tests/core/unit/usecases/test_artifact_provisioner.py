"""Unit tests for ArtifactProvisioner use case."""

from pathlib import Path

import pytest

from weaviate_embedded.adapters.fakes import FakeArtifactAcquirer, FakeMetricsAdapter
from weaviate_embedded.domain.artifact import install_directory
from weaviate_embedded.domain.exceptions import AcquisitionError
from weaviate_embedded.domain.platform import PlatformIdentifier
from weaviate_embedded.usecases.artifact_provisioner import ArtifactProvisioner


@pytest.mark.tier(1)
@pytest.mark.tra("UseCase.ArtifactProvisioner")
class TestArtifactProvisioner:
    """Test cache reuse and delegation to the acquirer."""

    def test_expected_path(self, engine_config):
        """Test the executable lives in the hashed install directory."""
        artifact = ArtifactProvisioner(FakeArtifactAcquirer()).expected_artifact(engine_config)
        expected_dir = install_directory(
            engine_config.binary_dir, "weaviate", "v1.21.1", PlatformIdentifier.LINUX_X86_64
        )
        assert artifact.path == expected_dir / "weaviate"
        assert artifact.version == "v1.21.1"

    def test_acquires_when_missing(self, engine_config):
        """Test a missing binary is acquired from the config's image."""
        acquirer = FakeArtifactAcquirer()
        metrics = FakeMetricsAdapter()
        provisioner = ArtifactProvisioner(acquirer, metrics=metrics)

        artifact = provisioner.ensure(engine_config)

        assert acquirer.calls == [(engine_config.image, artifact.path)]
        assert artifact.path.is_file()
        assert metrics.current_artifact_cached is False

    def test_reuses_installed_binary(self, engine_config):
        """Test a second ensure() does not acquire again."""
        acquirer = FakeArtifactAcquirer()
        metrics = FakeMetricsAdapter()
        provisioner = ArtifactProvisioner(acquirer, metrics=metrics)

        first = provisioner.ensure(engine_config)
        second = provisioner.ensure(engine_config)

        assert len(acquirer.calls) == 1
        assert second.path == first.path
        assert metrics.current_artifact_cached is True
        assert provisioner.is_installed(engine_config)

    def test_new_version_is_not_reused(self, engine_config):
        """Test a different version gets its own install."""
        from dataclasses import replace

        acquirer = FakeArtifactAcquirer()
        provisioner = ArtifactProvisioner(acquirer)
        old = provisioner.ensure(engine_config)
        new = provisioner.ensure(replace(engine_config, version="v1.22.0"))

        assert old.path != new.path
        assert len(acquirer.calls) == 2

    def test_acquirer_failure_propagates(self, engine_config):
        """Test acquisition errors reach the caller unchanged."""
        acquirer = FakeArtifactAcquirer()
        acquirer.set_exception(AcquisitionError("download failed"))
        with pytest.raises(AcquisitionError, match="download failed"):
            ArtifactProvisioner(acquirer).ensure(engine_config)

    def test_acquirer_that_installs_nothing(self, engine_config):
        """Test an acquirer that leaves no executable is an acquisition error."""
        acquirer = FakeArtifactAcquirer(write_files=False)
        with pytest.raises(AcquisitionError, match="does not exist"):
            ArtifactProvisioner(acquirer).ensure(engine_config)
