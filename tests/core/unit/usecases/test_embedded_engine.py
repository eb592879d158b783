"""Unit tests for the EmbeddedEngine facade."""

from unittest.mock import Mock

import pytest

from weaviate_embedded.adapters.fakes import (
    FakeArtifactAcquirer,
    FakeMetricsAdapter,
    FakeProcessRunner,
    FakeReadinessProbe,
    FakeTimeProvider,
)
from weaviate_embedded.domain.exceptions import AcquisitionError, ProcessStartError
from weaviate_embedded.domain.lifecycle import EngineState
from weaviate_embedded.usecases.artifact_provisioner import ArtifactProvisioner
from weaviate_embedded.usecases.embedded_engine import EmbeddedEngine
from weaviate_embedded.usecases.port_allocator import PortAllocator
from weaviate_embedded.usecases.process_lifecycle import ProcessLifecycle


@pytest.fixture
def runner() -> FakeProcessRunner:
    return FakeProcessRunner()


@pytest.fixture
def acquirer() -> FakeArtifactAcquirer:
    return FakeArtifactAcquirer()


@pytest.fixture
def metrics() -> FakeMetricsAdapter:
    return FakeMetricsAdapter()


@pytest.fixture
def engine(engine_config, runner, acquirer, metrics) -> EmbeddedEngine:
    allocator = Mock(spec=PortAllocator)
    allocator.can_bind.return_value = True
    lifecycle = ProcessLifecycle(
        runner=runner,
        probe=FakeReadinessProbe(),
        port_allocator=allocator,
        time_provider=FakeTimeProvider(),
        base_environ={},
    )
    return EmbeddedEngine(
        engine_config, ArtifactProvisioner(acquirer), lifecycle, metrics=metrics
    )


@pytest.mark.tier(1)
@pytest.mark.tra("UseCase.EmbeddedEngine")
class TestEmbeddedEngine:
    """Test the engine lifecycle state machine."""

    def test_initial_state(self, engine):
        """Test a new engine is unprovisioned."""
        assert engine.state is EngineState.UNPROVISIONED
        assert engine.handle is None
        assert engine.url == "http://127.0.0.1:8079"

    def test_start_and_stop(self, engine, metrics, acquirer):
        """Test the happy path through every state."""
        handle = engine.start()
        assert engine.state is EngineState.READY
        assert engine.handle is handle
        assert engine.artifact is not None
        assert len(acquirer.calls) == 1

        engine.stop()
        assert engine.state is EngineState.STOPPED
        assert metrics.states == [
            EngineState.PROVISIONING,
            EngineState.READY,
            EngineState.STOPPED,
        ]

    def test_context_manager(self, engine, runner):
        """Test the context manager starts and stops the engine."""
        with engine as running:
            assert running.state is EngineState.READY
        assert engine.state is EngineState.STOPPED
        assert runner.last_process.terminated

    def test_single_use(self, engine):
        """Test a second start is rejected."""
        engine.start()
        engine.stop()
        with pytest.raises(ProcessStartError, match="stopped"):
            engine.start()

    def test_provisioning_failure(self, engine, acquirer, metrics, runner):
        """Test a failed acquisition leaves the engine FAILED without spawning."""
        acquirer.set_exception(AcquisitionError("download failed"))
        with pytest.raises(AcquisitionError):
            engine.start()
        assert engine.state is EngineState.FAILED
        assert metrics.current_engine_state is EngineState.FAILED
        assert runner.processes == []

    def test_stop_before_start_is_noop(self, engine):
        """Test stop() on an unstarted engine does nothing."""
        engine.stop()
        assert engine.state is EngineState.UNPROVISIONED

    def test_crash_after_ready(self, engine, runner, metrics):
        """Test poll() reports FAILED once the engine process exits on its own."""
        engine.start()
        assert engine.is_running
        runner.last_process.returncode = 137

        assert engine.poll() is EngineState.FAILED
        assert not engine.is_running
        assert metrics.current_engine_state is EngineState.FAILED

    def test_stop_after_crash(self, engine, runner, metrics):
        """Test stopping a crashed engine leaves it FAILED."""
        engine.start()
        runner.last_process.returncode = 137

        engine.stop()

        assert engine.state is EngineState.FAILED
        assert metrics.states[-1] is EngineState.FAILED
        assert runner.terminate_calls == []
