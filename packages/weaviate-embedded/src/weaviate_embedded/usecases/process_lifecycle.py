"""Process lifecycle use case: start the engine, wait for it, stop it."""

from __future__ import annotations

import logging
import os
from typing import Mapping

from weaviate_embedded.adapters.ports import (
    ProcessRunnerPort,
    ReadinessProbePort,
    RealTimeProvider,
    TimeProvider,
)
from weaviate_embedded.domain.artifact import InstalledArtifact
from weaviate_embedded.domain.config import BindAddress, EngineConfig
from weaviate_embedded.domain.defaults import DEFAULTS
from weaviate_embedded.domain.exceptions import ProcessStartError, ProcessStartTimeoutError
from weaviate_embedded.domain.lifecycle import EngineState, ServiceHandle
from weaviate_embedded.usecases.port_allocator import PortAllocator

logger = logging.getLogger(__name__)


class ProcessLifecycle:
    """Use case for running the installed engine binary.

    start() spawns the binary and polls its REST address until it accepts
    connections. stop() terminates it, escalating to a kill after the
    handle's grace period.

    Environment passed to the engine, later entries winning:
        1. The current process environment
        2. AUTHENTICATION_ANONYMOUS_ACCESS_ENABLED, PERSISTENCE_DATA_PATH,
           GRPC_PORT, CLUSTER_HOSTNAME, DEFAULT_VECTORIZER_MODULE
        3. The configuration's extras
    """

    def __init__(
        self,
        runner: ProcessRunnerPort,
        probe: ReadinessProbePort,
        port_allocator: PortAllocator | None = None,
        time_provider: TimeProvider | None = None,
        poll_interval: float = DEFAULTS.poll_interval,
        base_environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the process lifecycle.

        Args:
            runner: Port that spawns and terminates processes.
            probe: Port that checks whether the engine accepts connections.
            port_allocator: Used to check both ports are free before spawning.
            time_provider: Clock for the readiness deadline.
            poll_interval: Seconds between readiness probes.
            base_environ: Environment the engine inherits. Defaults to
                         os.environ at start time.
        """
        self._runner = runner
        self._probe = probe
        self._port_allocator = port_allocator or PortAllocator()
        self._time = time_provider or RealTimeProvider()
        self._poll_interval = poll_interval
        self._base_environ = base_environ

    @staticmethod
    def build_command(config: EngineConfig, artifact: InstalledArtifact) -> list[str]:
        return [
            str(artifact.path),
            "--host",
            config.bind_address.host,
            "--port",
            str(config.bind_address.port),
            "--scheme",
            "http",
        ]

    def build_environment(self, config: EngineConfig) -> dict[str, str]:
        base = self._base_environ if self._base_environ is not None else os.environ
        env = dict(base)
        env.update(
            {
                "AUTHENTICATION_ANONYMOUS_ACCESS_ENABLED": "true",
                "PERSISTENCE_DATA_PATH": str(config.data_dir),
                "GRPC_PORT": str(config.grpc_port),
                "CLUSTER_HOSTNAME": f"Embedded_at_{config.bind_address.port}",
                "DEFAULT_VECTORIZER_MODULE": "none",
            }
        )
        env.update(config.extras_dict)
        return env

    def start(self, config: EngineConfig, artifact: InstalledArtifact) -> ServiceHandle:
        """Start the engine and wait until it accepts connections.

        Args:
            config: Frozen engine configuration.
            artifact: Installed engine binary.

        Returns:
            A ServiceHandle in the READY state.

        Raises:
            ProcessStartError: If a port is taken, the binary cannot be
                spawned or the process exits before becoming ready.
            ProcessStartTimeoutError: If the engine is not reachable within
                ``config.startup_timeout``. The process is terminated first.
            SocketError: If checking a port fails unexpectedly.
        """
        grpc_address = BindAddress(config.bind_address.host, config.grpc_port)
        for address in (config.bind_address, grpc_address):
            if not self._port_allocator.can_bind(address):
                raise ProcessStartError(
                    f"Address {address} is already in use", value=str(address)
                )

        handle = ServiceHandle(
            address=config.bind_address,
            grpc_port=config.grpc_port,
            shutdown_grace_period=config.shutdown_grace_period,
        )
        command = self.build_command(config, artifact)
        try:
            process = self._runner.spawn(command, self.build_environment(config))
        except OSError as e:
            handle.state = EngineState.FAILED
            raise ProcessStartError(
                f"Cannot start {artifact.path}: {e}",
                value=str(artifact.path),
                original_error=e,
            ) from e

        handle.pid = process.pid
        handle.process = process
        logger.info("Started engine pid %d, waiting for %s", process.pid, handle.url)
        self._wait_until_ready(handle, config.startup_timeout)
        return handle

    def _wait_until_ready(self, handle: ServiceHandle, timeout: float) -> None:
        deadline = self._time.get_time_seconds() + timeout
        while True:
            exit_code = self._runner.exit_code(handle.process)
            if exit_code is not None:
                handle.state = EngineState.FAILED
                raise ProcessStartError(
                    f"Engine exited with code {exit_code} before accepting connections",
                    value=exit_code,
                )

            if self._probe.is_accepting(handle.address):
                handle.state = EngineState.READY
                logger.info("Engine ready at %s", handle.url)
                return

            if self._time.get_time_seconds() >= deadline:
                self._runner.terminate(handle.process, handle.shutdown_grace_period)
                handle.state = EngineState.FAILED
                raise ProcessStartTimeoutError(
                    f"Engine did not accept connections on {handle.address} "
                    f"within {timeout:.1f}s",
                    value=str(handle.address),
                )
            self._time.sleep(self._poll_interval)

    def refresh(self, handle: ServiceHandle) -> EngineState:
        """Move a READY handle to FAILED if its process has exited.

        Returns:
            The handle's state after the check.
        """
        if handle.state is EngineState.READY and handle.process is not None:
            exit_code = self._runner.exit_code(handle.process)
            if exit_code is not None:
                logger.error(
                    "Engine pid %s exited unexpectedly with code %d", handle.pid, exit_code
                )
                handle.state = EngineState.FAILED
        return handle.state

    def stop(self, handle: ServiceHandle) -> None:
        """Stop the engine. Stopping a stopped or failed handle does nothing.

        A handle whose process already exited on its own becomes FAILED
        instead of STOPPED.
        """
        if self.refresh(handle).is_terminal:
            return
        if handle.process is not None:
            logger.info("Stopping engine pid %s", handle.pid)
            self._runner.terminate(handle.process, handle.shutdown_grace_period)
        handle.state = EngineState.STOPPED
