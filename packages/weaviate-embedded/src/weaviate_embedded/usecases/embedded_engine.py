"""Embedded engine facade: provision and run one engine instance."""

from __future__ import annotations

import logging
from types import TracebackType

from weaviate_embedded.adapters.metrics_port import MetricsPort, NoOpMetricsAdapter
from weaviate_embedded.domain.artifact import InstalledArtifact
from weaviate_embedded.domain.config import EngineConfig
from weaviate_embedded.domain.exceptions import EmbeddedEngineError, ProcessStartError
from weaviate_embedded.domain.lifecycle import EngineState, ServiceHandle
from weaviate_embedded.usecases.artifact_provisioner import ArtifactProvisioner
from weaviate_embedded.usecases.process_lifecycle import ProcessLifecycle

logger = logging.getLogger(__name__)


class EmbeddedEngine:
    """One engine instance built from a frozen configuration.

    Lifecycle:
        UNPROVISIONED -> PROVISIONING -> READY -> STOPPED
        Any failure during start() moves the engine to FAILED, and so does
        a READY engine whose process exits on its own (seen by poll() or stop()).

    An engine is started at most once; create a new instance to run again.

    Example:
        >>> config = ConfigBuilder().default_version().finalize()  # doctest: +SKIP
        >>> with create_embedded_engine(config) as engine:  # doctest: +SKIP
        ...     print(engine.url)
    """

    def __init__(
        self,
        config: EngineConfig,
        provisioner: ArtifactProvisioner,
        lifecycle: ProcessLifecycle,
        metrics: MetricsPort | None = None,
    ) -> None:
        self._config = config
        self._provisioner = provisioner
        self._lifecycle = lifecycle
        self._metrics = metrics if metrics is not None else NoOpMetricsAdapter()
        self._state = EngineState.UNPROVISIONED
        self._handle: ServiceHandle | None = None
        self._artifact: InstalledArtifact | None = None

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def handle(self) -> ServiceHandle | None:
        return self._handle

    @property
    def artifact(self) -> InstalledArtifact | None:
        return self._artifact

    @property
    def url(self) -> str:
        return self._config.url

    def _set_state(self, state: EngineState) -> None:
        self._state = state
        self._metrics.set_engine_state(state)

    def start(self) -> ServiceHandle:
        """Install the binary if needed, then start it and wait for readiness.

        Raises:
            ProcessStartError: If the engine was already started.
            EmbeddedEngineError: Any provisioning or start failure. The
                engine is left FAILED.
        """
        if self._state is not EngineState.UNPROVISIONED:
            raise ProcessStartError(
                f"Engine cannot be started from state {self._state.value}",
                value=self._state.value,
            )

        self._set_state(EngineState.PROVISIONING)
        try:
            self._artifact = self._provisioner.ensure(self._config)
            self._handle = self._lifecycle.start(self._config, self._artifact)
        except EmbeddedEngineError as e:
            logger.error("Engine failed during %s step: %s", e.step, e.message)
            self._set_state(EngineState.FAILED)
            raise
        self._set_state(EngineState.READY)
        return self._handle

    def poll(self) -> EngineState:
        """Check a READY engine's process and report FAILED if it died."""
        if self._handle is not None and self._state is EngineState.READY:
            if self._lifecycle.refresh(self._handle) is EngineState.FAILED:
                self._set_state(EngineState.FAILED)
        return self._state

    @property
    def is_running(self) -> bool:
        return self.poll() is EngineState.READY

    def stop(self) -> None:
        """Stop the engine if it is running. Safe to call repeatedly.

        An engine whose process already exited ends up FAILED, not STOPPED.
        """
        if self._handle is None or self._state is not EngineState.READY:
            return
        self._lifecycle.stop(self._handle)
        self._set_state(self._handle.state)

    def __enter__(self) -> EmbeddedEngine:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()
