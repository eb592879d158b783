"""Engine lifecycle states and runtime handle."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from weaviate_embedded.domain.config import BindAddress


class EngineState(Enum):
    """Lifecycle state of an embedded engine.

    Transitions:
        UNPROVISIONED -> PROVISIONING -> READY -> STOPPED
        PROVISIONING -> FAILED, READY -> FAILED
    """

    UNPROVISIONED = "unprovisioned"
    PROVISIONING = "provisioning"
    READY = "ready"
    STOPPED = "stopped"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (EngineState.STOPPED, EngineState.FAILED)


@dataclass
class ServiceHandle:
    """Runtime state of a started engine process.

    Created by ProcessLifecycle.start() and invalidated by stop(). Unlike
    the configuration, the state field changes over the handle's life.

    Attributes:
        address: Address the engine's REST API is bound to.
        grpc_port: Port of the gRPC API.
        pid: Process identifier, None until the process is spawned.
        state: Current lifecycle state.
        shutdown_grace_period: Seconds stop() waits before killing the process.
        process: Opaque process object returned by the process runner.
    """

    address: BindAddress
    grpc_port: int
    pid: int | None = None
    state: EngineState = EngineState.PROVISIONING
    shutdown_grace_period: float = 10.0
    process: Any = field(default=None, repr=False, compare=False)

    @property
    def url(self) -> str:
        return f"http://{self.address}"

    @property
    def is_running(self) -> bool:
        return self.state is EngineState.READY
